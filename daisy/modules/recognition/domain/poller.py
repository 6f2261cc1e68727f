# 📄 File: daisy/modules/recognition/domain/poller.py
# 🧭 Purpose (Layman Explanation):
# Starts the remote plant recognition job for a photo and keeps checking on it
# every second until it is done (or failed, or taking far too long).
# 🧪 Purpose (Technical Summary):
# Submits one asynchronous function execution and polls its status at a fixed
# interval until terminal, bounded by an optional timeout. Waiting is done with
# an injectable coroutine so the event loop is never blocked.
# 🔗 Dependencies:
# asyncio, time, ExecutionRepository, daisy.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# RemoteGateway.recognize_image, tests

import asyncio
import time
from typing import Awaitable, Callable, Optional

from daisy.shared.core.exceptions import RecognitionError, RecognitionTimeoutError
from daisy.shared.utils.logging import get_logger

from .models import Execution, ExecutionStatus
from .repositories import ExecutionRepository

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL = 1.0


class ExecutionPoller:
    """
    Runs a remote function and waits for its result.

    Each call to ``run`` creates exactly one execution. Concurrent calls poll
    independently; nothing is shared between them.
    """

    def __init__(
        self,
        executions: ExecutionRepository,
        function_id: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            executions: Backend access for creating and fetching executions
            function_id: Identifier of the remote function to run
            poll_interval: Seconds between two status checks
            timeout: Maximum seconds to wait for a terminal status; None waits forever
            sleep: Coroutine used to wait between checks
            clock: Monotonic clock used for the timeout
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        self.executions = executions
        self.function_id = function_id
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock

    async def run(self, payload: dict) -> str:
        """
        Execute the function and return its response body.

        Returns:
            str: Raw response body of the completed execution

        Raises:
            RecognitionError: If the execution ends in ``failed``
            RecognitionTimeoutError: If no terminal status is seen within ``timeout``
        """
        created = await self.executions.create_execution(self.function_id, payload)
        logger.info(
            f"Started execution {created.id} of function {self.function_id}",
            extra={"execution_id": created.id, "function_id": self.function_id}
        )

        execution = await self.wait_for(created.id)
        return execution.response or ""

    async def wait_for(self, execution_id: str) -> Execution:
        """
        Poll an execution until it reaches ``completed`` or ``failed``.

        The status is fetched once right away; every further fetch is
        preceded by one ``poll_interval`` wait.
        """
        started = self._clock()
        execution = await self.executions.get_execution(self.function_id, execution_id)
        waits = 0

        while not execution.is_terminal:
            if self.timeout is not None and self._clock() - started >= self.timeout:
                logger.warning(
                    f"Execution {execution_id} timed out after {self.timeout}s",
                    extra={"execution_id": execution_id, "status": execution.status.value, "waits": waits}
                )
                raise RecognitionTimeoutError(
                    execution_id=execution_id,
                    timeout_seconds=self.timeout,
                    last_status=execution.status.value
                )

            logger.debug(
                f"Execution {execution_id} is {execution.status.value}",
                extra={"execution_id": execution_id, "waits": waits}
            )
            await self._sleep(self.poll_interval)
            waits += 1
            execution = await self.executions.get_execution(self.function_id, execution_id)

        if execution.status == ExecutionStatus.FAILED:
            logger.error(
                f"Execution {execution_id} failed: {execution.errors}",
                extra={"execution_id": execution_id, "waits": waits}
            )
            raise RecognitionError(
                message=f"Recognition failed: {execution.errors or 'no error message'}",
                execution_id=execution_id,
                backend_message=execution.errors
            )

        logger.info(
            f"Execution {execution_id} completed",
            extra={"execution_id": execution_id, "waits": waits}
        )
        return execution
