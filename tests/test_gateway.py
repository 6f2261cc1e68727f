import io
import json
import unittest
from datetime import datetime, timezone

from PIL import Image

from daisy.gateway import RemoteGateway
from daisy.modules.blog.domain.models import BlogDocumentModel
from daisy.modules.recognition.domain.poller import ExecutionPoller
from daisy.shared.config.settings import Settings
from daisy.shared.core.exceptions import (
    AuthError,
    NotAuthenticatedError,
    NotFoundError,
    ParseError,
    RecognitionError,
    RemoteServiceError,
    UploadError,
    ValidationError,
)
from tests.fakes import FakeSupabaseClient, RecordingSleep, ScriptedExecutions, make_auth_service_error


def make_settings(**overrides):
    values = {
        "SUPABASE_URL": "http://localhost:54321",
        "SUPABASE_ANON_KEY": "anon-key",
        "BLOG_TABLE": "blog_entries",
        "IMAGES_BUCKET": "images",
        "BLOG_IMAGES_BUCKET": "blog-images",
    }
    values.update(overrides)
    return Settings(**values)


def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(30, 160, 60)).save(buffer, format="PNG")
    return buffer.getvalue()


class GatewayTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = FakeSupabaseClient()
        self.settings = make_settings()
        self.gateway = RemoteGateway(self.client, settings=self.settings)


class AccountTests(GatewayTestCase):
    async def test_register_then_login(self):
        account = await self.gateway.register("ana@example.com", "s3cret!", "Ana")
        self.assertEqual(account.email, "ana@example.com")
        self.assertEqual(account.name, "Ana")

        session = await self.gateway.login("ana@example.com", "s3cret!")
        self.assertEqual(session.user_id, account.id)
        self.assertTrue(session.id.startswith("session-"))
        self.assertFalse(session.is_expired(datetime.now(timezone.utc)))

    async def test_register_existing_email_fails(self):
        await self.gateway.register("ana@example.com", "s3cret!", "Ana")

        with self.assertRaises(AuthError):
            await self.gateway.register("ana@example.com", "other", "Ana Two")

    async def test_login_with_wrong_password_fails(self):
        await self.gateway.register("ana@example.com", "s3cret!", "Ana")

        with self.assertRaises(AuthError):
            await self.gateway.login("ana@example.com", "wrong")

    async def test_session_checks_without_session_raise(self):
        with self.assertRaises(NotAuthenticatedError):
            await self.gateway.get_account()
        with self.assertRaises(NotAuthenticatedError):
            await self.gateway.is_logged_in()

    async def test_get_account_and_session_when_logged_in(self):
        registered = await self.gateway.register("ana@example.com", "s3cret!", "Ana")
        await self.gateway.login("ana@example.com", "s3cret!")

        account = await self.gateway.get_account()
        session = await self.gateway.is_logged_in()

        self.assertEqual(account, registered)
        self.assertEqual(session.user_id, registered.id)

    async def test_logout_ends_session_and_fails_without_one(self):
        await self.gateway.register("ana@example.com", "s3cret!", "Ana")
        await self.gateway.login("ana@example.com", "s3cret!")

        await self.gateway.logout()

        self.assertEqual(self.client.auth.sign_out_calls, 1)
        with self.assertRaises(NotAuthenticatedError):
            await self.gateway.logout()
        self.assertEqual(self.client.auth.sign_out_calls, 1)

    async def test_auth_service_failures_surface_as_remote_service_errors(self):
        failure = make_auth_service_error("connection reset")
        self.client.auth.failures = {"get_user": failure, "get_session": failure}

        with self.assertRaises(RemoteServiceError):
            await self.gateway.get_account()
        with self.assertRaises(RemoteServiceError):
            await self.gateway.is_logged_in()
        with self.assertRaises(RemoteServiceError):
            await self.gateway.logout()


class StorageTests(GatewayTestCase):
    async def test_upload_image_sniffs_mime_type(self):
        stored = await self.gateway.upload_image(png_bytes())

        self.assertEqual(stored.bucket_id, "images")
        self.assertEqual(stored.mime_type, "image/png")
        self.assertIn(stored.id, self.client.storage.buckets["images"])
        options = self.client.storage.buckets["images"][stored.id]["options"]
        self.assertEqual(options["content-type"], "image/png")

    async def test_upload_blog_image_from_stream(self):
        stream = io.BytesIO(png_bytes())

        stored = await self.gateway.upload_blog_image(stream, filename="leaf.png")

        self.assertEqual(stored.bucket_id, "blog-images")
        self.assertEqual(stored.name, "leaf.png")
        self.assertEqual(stored.mime_type, "image/png")
        self.assertTrue(stored.id.endswith(".png"))

    async def test_upload_blog_image_from_missing_path_raises_upload_error(self):
        with self.assertRaises(UploadError):
            await self.gateway.upload_blog_image("/nonexistent/dir/leaf.jpg")

    async def test_upload_blog_image_from_closed_stream_raises_upload_error(self):
        stream = io.BytesIO(png_bytes())
        stream.close()

        with self.assertRaises(UploadError):
            await self.gateway.upload_blog_image(stream, filename="leaf.png")

    async def test_upload_without_resolvable_name_raises_upload_error(self):
        with self.assertRaises(UploadError):
            await self.gateway.upload_blog_image(io.BytesIO(png_bytes()))

    async def test_upload_with_unresolvable_mime_type_raises_upload_error(self):
        with self.assertRaises(UploadError):
            await self.gateway.upload_blog_image(io.BytesIO(b"plain bytes"), filename="notes")

    async def test_upload_from_text_stream_raises_upload_error(self):
        for filename in ("notes", "leaf.png"):
            with self.subTest(filename=filename), self.assertRaises(UploadError):
                await self.gateway.upload_blog_image(io.StringIO("not binary"), filename=filename)

    async def test_delete_blog_image(self):
        stored = await self.gateway.upload_blog_image(io.BytesIO(png_bytes()), filename="leaf.png")

        await self.gateway.delete_blog_image(stored.id)

        self.assertNotIn(stored.id, self.client.storage.buckets["blog-images"])
        with self.assertRaises(NotFoundError):
            await self.gateway.delete_blog_image(stored.id)


class DocumentTests(GatewayTestCase):
    def model(self, user="user-1", plants=("Rosa",), symptoms=("manchas negras",)):
        return BlogDocumentModel(
            id_user=user,
            name_user="Ana",
            title="Manchas en mi rosal",
            body="Aparecieron manchas en las hojas.",
            plants=list(plants),
            symptoms=list(symptoms),
        )

    async def test_create_then_list_round_trip(self):
        created = await self.gateway.create_document(self.model())

        listed = await self.gateway.list_documents()

        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0].id, created.id)
        self.assertEqual(listed[0].plants, ["Rosa"])
        self.assertEqual(listed[0].symptoms, ["manchas negras"])
        self.assertEqual(listed[0].id_user, "user-1")

    async def test_list_documents_of_user_filters_on_owner(self):
        await self.gateway.create_document(self.model(user="user-1"))
        await self.gateway.create_document(self.model(user="user-2"))

        mine = await self.gateway.list_documents_of_user("user-2")

        self.assertEqual([entry.id_user for entry in mine], ["user-2"])
        self.assertIn(("blog_entries", "select", [("id_user", "user-2")]), self.client.executed)

    async def test_list_documents_with_filter(self):
        await self.gateway.create_document(self.model(plants=["Rosa"]))
        await self.gateway.create_document(self.model(plants=["Tulipán"], symptoms=["hojas secas"]))

        found = await self.gateway.list_documents_with_filter("tulipan")

        self.assertEqual([entry.plants for entry in found], [["Tulipán"]])

    async def test_update_document(self):
        created = await self.gateway.create_document(self.model())
        changed = created.to_model()
        changed.plants = ["Rosa", "Rosal"]

        updated = await self.gateway.update_document(created.id, changed)

        self.assertEqual(updated.plants, ["Rosa", "Rosal"])
        listed = await self.gateway.list_documents()
        self.assertEqual(listed[0].plants, ["Rosa", "Rosal"])

    async def test_update_and_delete_unknown_document_raise_not_found(self):
        with self.assertRaises(NotFoundError):
            await self.gateway.update_document("missing", self.model())
        with self.assertRaises(NotFoundError):
            await self.gateway.delete_document("missing")

    async def test_delete_document(self):
        created = await self.gateway.create_document(self.model())

        await self.gateway.delete_document(created.id)

        self.assertEqual(await self.gateway.list_documents(), [])

    async def test_create_rejects_malformed_model(self):
        model = self.model()
        model.id_user = ""

        with self.assertRaises(ValidationError):
            await self.gateway.create_document(model)

        with self.assertRaises(ValidationError):
            await self.gateway.create_document({"id_user": "user-1"})

    async def test_create_rejected_by_backend_raises_validation_error(self):
        self.client.required_columns["blog_entries"] = ("title",)
        model = self.model()
        model.title = ""

        with self.assertRaises(ValidationError):
            await self.gateway.create_document(model)


class RecognitionTests(unittest.IsolatedAsyncioTestCase):
    def gateway_with(self, executions):
        self.sleep = RecordingSleep()
        poller = ExecutionPoller(executions, "recognize-plant", sleep=self.sleep)
        return RemoteGateway(FakeSupabaseClient(), settings=make_settings(), poller=poller)

    async def test_recognize_image_returns_plants(self):
        response = json.dumps([
            {"plant_name": "Rosa gallica", "probability": 0.91, "alt_names": [{"name": "French rose"}]},
        ])
        executions = ScriptedExecutions(["pending", "completed"], response=response)
        gateway = self.gateway_with(executions)

        plants = await gateway.recognize_image("file-1")

        self.assertEqual([plant.plant_name for plant in plants], ["Rosa gallica"])
        self.assertEqual(plants[0].alt_names[0].name, "French rose")
        self.assertEqual(executions.created[0]["payload"], {"image": "file-1"})
        self.assertEqual(len(self.sleep.calls), 1)

    async def test_recognize_image_failure(self):
        gateway = self.gateway_with(ScriptedExecutions(["failed"], errors="no plant detected"))

        with self.assertRaises(RecognitionError):
            await gateway.recognize_image("file-1")

    async def test_recognize_image_malformed_response(self):
        gateway = self.gateway_with(ScriptedExecutions(["completed"], response='[{"plant_name": "Rosa"}]'))

        with self.assertRaises(ParseError):
            await gateway.recognize_image("file-1")


if __name__ == "__main__":
    unittest.main()
