import unittest

from daisy.modules.recognition.domain.poller import ExecutionPoller
from daisy.shared.core.exceptions import RecognitionError, RecognitionTimeoutError
from tests.fakes import RecordingSleep, ScriptedExecutions


class FakeClock:
    def __init__(self, step: float):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


class ExecutionPollerTests(unittest.IsolatedAsyncioTestCase):
    async def test_two_pending_statuses_mean_two_waits(self):
        executions = ScriptedExecutions(["pending", "pending", "completed"], response='[{"x": 1}]')
        sleep = RecordingSleep()
        poller = ExecutionPoller(executions, "recognize-plant", sleep=sleep)

        response = await poller.run({"image": "file-1"})

        self.assertEqual(response, '[{"x": 1}]')
        self.assertEqual(sleep.calls, [1.0, 1.0])
        self.assertEqual(executions.fetches, 3)

    async def test_failed_status_raises_without_waiting(self):
        executions = ScriptedExecutions(["failed"], errors="Vision API quota exceeded")
        sleep = RecordingSleep()
        poller = ExecutionPoller(executions, "recognize-plant", sleep=sleep)

        with self.assertRaises(RecognitionError) as ctx:
            await poller.run({"image": "file-1"})

        self.assertEqual(sleep.calls, [])
        self.assertEqual(ctx.exception.backend_message, "Vision API quota exceeded")
        self.assertIn("Vision API quota exceeded", ctx.exception.message)
        self.assertNotIsInstance(ctx.exception, RecognitionTimeoutError)

    async def test_failure_after_processing_is_not_retried(self):
        executions = ScriptedExecutions(["processing", "failed", "completed"], errors="boom")
        sleep = RecordingSleep()
        poller = ExecutionPoller(executions, "recognize-plant", sleep=sleep)

        with self.assertRaises(RecognitionError):
            await poller.run({"image": "file-1"})

        self.assertEqual(len(sleep.calls), 1)
        self.assertEqual(len(executions.created), 1)

    async def test_one_execution_per_run_with_image_payload(self):
        executions = ScriptedExecutions(["completed"])
        poller = ExecutionPoller(executions, "recognize-plant", sleep=RecordingSleep())

        await poller.run({"image": "file-9"})

        self.assertEqual(executions.created, [{"function_id": "recognize-plant", "payload": {"image": "file-9"}}])

    async def test_custom_interval_is_used(self):
        executions = ScriptedExecutions(["waiting", "completed"])
        sleep = RecordingSleep()
        poller = ExecutionPoller(executions, "recognize-plant", poll_interval=0.25, sleep=sleep)

        await poller.run({"image": "file-1"})

        self.assertEqual(sleep.calls, [0.25])

    async def test_timeout_raises_timeout_error(self):
        executions = ScriptedExecutions(["pending"])
        sleep = RecordingSleep()
        poller = ExecutionPoller(
            executions, "recognize-plant", timeout=3.0, sleep=sleep, clock=FakeClock(step=1.0)
        )

        with self.assertRaises(RecognitionTimeoutError) as ctx:
            await poller.run({"image": "file-1"})

        self.assertIsInstance(ctx.exception, RecognitionError)
        self.assertEqual(ctx.exception.timeout_seconds, 3.0)
        self.assertEqual(ctx.exception.details["last_status"], "pending")
        self.assertGreater(len(sleep.calls), 0)

    async def test_without_timeout_keeps_polling(self):
        executions = ScriptedExecutions(["pending"] * 50 + ["completed"])
        sleep = RecordingSleep()
        poller = ExecutionPoller(executions, "recognize-plant", timeout=None, sleep=sleep, clock=FakeClock(step=10.0))

        await poller.run({"image": "file-1"})

        self.assertEqual(len(sleep.calls), 50)

    def test_invalid_bounds_are_rejected(self):
        with self.assertRaises(ValueError):
            ExecutionPoller(ScriptedExecutions(["completed"]), "f", poll_interval=0)
        with self.assertRaises(ValueError):
            ExecutionPoller(ScriptedExecutions(["completed"]), "f", timeout=0)


if __name__ == "__main__":
    unittest.main()
