# 📄 File: daisy/modules/recognition/domain/repositories.py
# 🧭 Purpose (Layman Explanation):
# Describes how the app starts a remote recognition job and checks on it,
# without saying which backend actually runs the job.
# 🧪 Purpose (Technical Summary):
# Repository interface for remote function executions, following the
# repository pattern so the poller can be driven by any backend or a test double.
# 🔗 Dependencies:
# abc, typing, domain models
# 🔄 Connected Modules / Calls From:
# poller.py, supabase_executions.py (implementation), tests

from abc import ABC, abstractmethod
from typing import Any, Dict

from .models import Execution


class ExecutionRepository(ABC):
    """
    Repository interface for remote function executions.

    Implementation Notes:
    - Concrete implementations are in the infrastructure layer
    - Methods return domain Execution records, not SDK payloads
    - All operations are async for non-blocking I/O
    """

    @abstractmethod
    async def create_execution(self, function_id: str, payload: Dict[str, Any]) -> Execution:
        """
        Schedule an asynchronous execution of a remote function.

        Args:
            function_id: Identifier of the function to run
            payload: JSON-serializable input of the function

        Returns:
            The created Execution, usually in a non-terminal status
        """
        pass

    @abstractmethod
    async def get_execution(self, function_id: str, execution_id: str) -> Execution:
        """
        Fetch the current state of an execution.

        Raises:
            NotFoundError: If the execution does not exist
        """
        pass
