import json
import logging
import unittest

from daisy.shared.core.exceptions import DaisyException, NotFoundError, RecognitionTimeoutError
from daisy.shared.utils.logging import (
    JSONFormatter,
    get_logger,
    log_backend_call,
    log_context,
    request_id_var,
)


class CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class ExceptionTests(unittest.TestCase):
    def test_to_dict_carries_code_and_details(self):
        error = NotFoundError("Blog document not found: x", resource_type="blog_entry", resource_id="x")

        payload = error.to_dict()["error"]

        self.assertEqual(payload["code"], "NOT_FOUND")
        self.assertEqual(payload["details"], {"resource_type": "blog_entry", "resource_id": "x"})
        self.assertIsInstance(error, DaisyException)

    def test_timeout_error_code(self):
        error = RecognitionTimeoutError("exec-1", 120.0, last_status="pending")
        self.assertEqual(error.error_code, "RECOGNITION_TIMEOUT")
        self.assertEqual(error.details["execution_id"], "exec-1")


class LoggingTestCase(unittest.TestCase):
    logger_name = "daisy.tests.logging"

    def setUp(self):
        self.handler = CaptureHandler()
        self.base = logging.getLogger(self.logger_name)
        self.base.addHandler(self.handler)
        self.base.setLevel(logging.DEBUG)

    def tearDown(self):
        self.base.removeHandler(self.handler)


class JSONFormatterTests(LoggingTestCase):
    def test_extra_fields_and_context_are_rendered(self):
        with log_context(request_id="req-1", user_id="user-1"):
            get_logger(self.logger_name).info("uploaded", extra={"bucket_id": "images"})
            rendered = json.loads(JSONFormatter().format(self.handler.records[0]))

        self.assertEqual(rendered["message"], "uploaded")
        self.assertEqual(rendered["extra"], {"bucket_id": "images"})
        self.assertEqual(rendered["request_id"], "req-1")
        self.assertEqual(rendered["user_id"], "user-1")
        self.assertEqual(rendered["service"], "daisy-client")


class BackendCallTests(unittest.IsolatedAsyncioTestCase):
    async def test_each_call_gets_its_own_request_id(self):
        seen = []

        @log_backend_call("database", "list")
        async def list_rows():
            seen.append(request_id_var.get())
            return []

        await list_rows()
        await list_rows()

        self.assertTrue(all(seen))
        self.assertNotEqual(seen[0], seen[1])
        self.assertEqual(request_id_var.get(), "")

    async def test_nested_calls_share_the_outer_request_id(self):
        seen = []

        @log_backend_call("functions", "inner")
        async def inner():
            seen.append(request_id_var.get())

        @log_backend_call("functions", "outer")
        async def outer():
            seen.append(request_id_var.get())
            await inner()

        await outer()

        self.assertEqual(seen[0], seen[1])

    async def test_failures_are_reraised(self):
        @log_backend_call("storage", "delete")
        async def delete():
            raise NotFoundError("gone")

        with self.assertRaises(NotFoundError):
            await delete()

    def test_plain_functions_are_rejected(self):
        with self.assertRaises(TypeError):
            log_backend_call("storage")(lambda: None)


if __name__ == "__main__":
    unittest.main()
