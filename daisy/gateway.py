# 📄 File: daisy/gateway.py
#
# 🧭 Purpose (Layman Explanation):
# The single door the app goes through to reach the backend: signing in,
# uploading photos, asking what plant is in a photo, and reading or writing blog posts.
#
# 🧪 Purpose (Technical Summary):
# RemoteGateway façade owning one Supabase client handle. It hides backend
# resource identifiers (schema, tables, buckets, function id) behind named async
# methods, delegates to the module adapters, and runs recognition through the
# ExecutionPoller and ResultNormalizer.
#
# 🔗 Dependencies:
# - supabase (client handle)
# - daisy.modules.* (auth, blog, recognition adapters and domain logic)
# - daisy.shared.infrastructure.storage (buckets)
# - daisy.shared.config (resource identifiers, polling bounds)
#
# 🔄 Connected Modules / Calls From:
# - Application code (screens, view models, scripts)

"""
Remote Gateway

Every method is a coroutine. Blocking SDK calls are dispatched to worker
threads by the adapters, so awaiting a gateway method never blocks the
event loop. Errors surface to the caller unchanged; the only retry is the
status poll of a running recognition.
"""

from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from supabase import Client

from daisy.modules.accounts.domain.models import Account, Session
from daisy.modules.accounts.infrastructure.supabase_auth import SupabaseAuthService
from daisy.modules.blog.domain.models import BlogDocumentModel, BlogEntry, build_document_model
from daisy.modules.blog.domain.search import search_entries
from daisy.modules.blog.infrastructure.blog_repository_impl import SupabaseBlogRepository
from daisy.modules.recognition.domain.models import DataPlant
from daisy.modules.recognition.domain.normalizer import normalize_plants
from daisy.modules.recognition.domain.poller import ExecutionPoller
from daisy.modules.recognition.infrastructure.supabase_executions import SupabaseExecutionRepository
from daisy.shared.config.settings import Settings, get_settings
from daisy.shared.config.supabase import SupabaseManager, get_supabase_client
from daisy.shared.core.exceptions import ValidationError
from daisy.shared.infrastructure.storage import StoredFile, SupabaseStorageClient
from daisy.shared.utils.logging import get_logger, log_backend_call, setup_logging

logger = get_logger(__name__)

DEFAULT_CAPTURE_NAME = "capture"


class RemoteGateway:
    """
    Single point of access to every remote operation of the Daisy client.

    The gateway holds no mutable state of its own; the Supabase client is
    long-lived and shared by all calls.
    """

    def __init__(
        self,
        client: Client,
        settings: Optional[Settings] = None,
        poller: Optional[ExecutionPoller] = None,
    ):
        """
        Args:
            client: Supabase client handle
            settings: Resource identifiers and polling bounds; defaults to get_settings()
            poller: Recognition poller; built from settings when omitted
        """
        self.settings = settings or get_settings()
        self._client = client

        self.auth = SupabaseAuthService(client)
        self.storage = SupabaseStorageClient(client)
        self.blog = SupabaseBlogRepository(client, self.settings.BLOG_TABLE)
        self.poller = poller or ExecutionPoller(
            SupabaseExecutionRepository(client, self.settings.EXECUTIONS_TABLE),
            function_id=self.settings.RECOGNITION_FUNCTION_ID,
            poll_interval=self.settings.RECOGNITION_POLL_INTERVAL_SECONDS,
            timeout=self.settings.RECOGNITION_TIMEOUT_SECONDS,
        )

    # =========================================================================
    # ACCOUNT
    # =========================================================================

    @log_backend_call("account")
    async def login(self, email: str, password: str) -> Session:
        """Sign in with email and password; AuthError on invalid credentials."""
        return await self.auth.login(email, password)

    @log_backend_call("account")
    async def register(self, email: str, password: str, name: str) -> Account:
        """Create an account; AuthError if the email is already registered."""
        return await self.auth.register(email, password, name)

    @log_backend_call("account")
    async def logout(self) -> None:
        """End the current session; NotAuthenticatedError if there is none."""
        await self.auth.logout()

    @log_backend_call("account")
    async def get_account(self) -> Account:
        return await self.auth.get_account()

    @log_backend_call("account")
    async def is_logged_in(self) -> Session:
        """Return the current session; NotAuthenticatedError if there is none."""
        return await self.auth.get_session()

    # =========================================================================
    # STORAGE
    # =========================================================================

    @log_backend_call("storage")
    async def upload_image(self, data: bytes, filename: Optional[str] = None) -> StoredFile:
        """
        Upload an image for recognition.

        The mime type is taken from ``filename`` or, failing that, sniffed
        from the image content.
        """
        return await self.storage.upload(
            self.settings.IMAGES_BUCKET,
            data,
            filename=filename or DEFAULT_CAPTURE_NAME,
        )

    @log_backend_call("storage")
    async def upload_blog_image(
        self,
        source: Union[str, Path, BinaryIO],
        filename: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> StoredFile:
        """
        Upload a blog image from a path or an open binary stream.

        Raises:
            UploadError: If the source cannot be opened, or its filename or
                mime type cannot be resolved
        """
        return await self.storage.upload(
            self.settings.BLOG_IMAGES_BUCKET,
            source,
            filename=filename,
            mime_type=mime_type,
        )

    @log_backend_call("storage")
    async def delete_blog_image(self, file_id: str) -> None:
        """Delete a blog image; NotFoundError if the id is unknown."""
        await self.storage.delete(self.settings.BLOG_IMAGES_BUCKET, file_id)

    # =========================================================================
    # FUNCTIONS
    # =========================================================================

    @log_backend_call("functions")
    async def recognize_image(self, file_id: str) -> List[DataPlant]:
        """
        Identify the plant in an uploaded image.

        Runs the recognition function on ``file_id`` and waits for it to
        finish. The wait is bounded by RECOGNITION_TIMEOUT_SECONDS.

        Raises:
            RecognitionError: If the execution fails
            RecognitionTimeoutError: If the execution does not finish in time
            ParseError: If the function returns a malformed result
        """
        response = await self.poller.run({"image": file_id})
        plants = normalize_plants(response)
        logger.info(
            f"Recognition returned {len(plants)} candidates",
            extra={"file_id": file_id}
        )
        return plants

    # =========================================================================
    # DATABASES
    # =========================================================================

    @log_backend_call("database")
    async def list_documents(self) -> List[BlogEntry]:
        return await self.blog.list_all()

    @log_backend_call("database")
    async def list_documents_of_user(self, user_id: str) -> List[BlogEntry]:
        return await self.blog.list_by_user(user_id)

    @log_backend_call("database")
    async def list_documents_with_filter(self, filter_text: str) -> List[BlogEntry]:
        """
        List the documents whose plant or symptom tags match any keyword.

        The full listing is fetched and filtered client side. A blank filter
        matches every document.
        """
        return search_entries(filter_text, await self.blog.list_all())

    @log_backend_call("database")
    async def create_document(self, model: BlogDocumentModel) -> BlogEntry:
        """Create a blog document; ValidationError on a malformed model."""
        if not isinstance(model, BlogDocumentModel):
            raise ValidationError(
                f"Expected a BlogDocumentModel, got {type(model).__name__}",
                field="model"
            )
        return await self.blog.create(build_document_model(**model.model_dump()))

    @log_backend_call("database")
    async def update_document(self, document_id: str, model: BlogDocumentModel) -> BlogEntry:
        """Replace a blog document's fields; NotFoundError if the id is unknown."""
        return await self.blog.update(document_id, model)

    @log_backend_call("database")
    async def delete_document(self, document_id: str) -> None:
        """Delete a blog document; NotFoundError if the id is unknown."""
        await self.blog.delete(document_id)


def create_gateway(settings: Optional[Settings] = None) -> RemoteGateway:
    """
    Build a gateway.

    Without explicit settings the process-wide Supabase client is reused;
    explicit settings get a client of their own.
    """
    if settings is None:
        setup_logging()
        return RemoteGateway(get_supabase_client(), settings=get_settings())

    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)
    return RemoteGateway(SupabaseManager(settings).client, settings=settings)
