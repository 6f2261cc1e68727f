# 📄 File: daisy/modules/recognition/infrastructure/supabase_executions.py
# 🧭 Purpose (Layman Explanation):
# Starts a plant recognition job on the backend and reads back how the job is
# doing, using a jobs table the backend function watches.
# 🧪 Purpose (Technical Summary):
# ExecutionRepository over a Supabase table. Inserting a pending row schedules
# the function (database webhook on insert); the function writes status,
# response and errors back to the same row, which is read by id.
# 🔗 Dependencies:
# supabase / postgrest, pydantic, json
# 🔄 Connected Modules / Calls From:
# ExecutionPoller (through RemoteGateway)

import asyncio
import json
from typing import Any, Dict

from postgrest import APIError
from pydantic import ValidationError as PydanticValidationError
from supabase import Client

from daisy.modules.recognition.domain.models import Execution, ExecutionStatus
from daisy.modules.recognition.domain.repositories import ExecutionRepository
from daisy.shared.core.exceptions import NotFoundError, RemoteServiceError
from daisy.shared.utils.helpers import generate_id
from daisy.shared.utils.logging import get_logger

logger = get_logger(__name__)


def to_execution(row: Dict[str, Any]) -> Execution:
    """Map an executions row to an Execution record."""
    try:
        return Execution.model_validate(row)
    except PydanticValidationError as e:
        raise RemoteServiceError(
            f"Unexpected execution record: {e.errors()[0].get('msg')}",
            service="functions",
            operation="get_execution",
            details={"execution_id": row.get("id")}
        ) from e


class SupabaseExecutionRepository(ExecutionRepository):
    """
    Function executions stored as rows of an executions table.
    """

    def __init__(self, client: Client, table: str):
        self._client = client
        self._table = table

    async def create_execution(self, function_id: str, payload: Dict[str, Any]) -> Execution:
        row = {
            "id": generate_id(),
            "function_id": function_id,
            "payload": json.dumps(payload),
            "status": ExecutionStatus.PENDING.value,
        }

        try:
            response = await asyncio.to_thread(
                self._client.table(self._table).insert(row).execute
            )
        except APIError as e:
            logger.error(f"Could not schedule {function_id}: {e.message}")
            raise RemoteServiceError(
                f"Failed to create execution: {e.message}",
                service="functions",
                operation="create_execution"
            ) from e

        rows = response.data or [row]
        return to_execution(rows[0])

    async def get_execution(self, function_id: str, execution_id: str) -> Execution:
        query = (
            self._client.table(self._table)
            .select("*")
            .eq("id", execution_id)
            .eq("function_id", function_id)
            .limit(1)
        )

        try:
            response = await asyncio.to_thread(query.execute)
        except APIError as e:
            logger.error(f"Could not read execution {execution_id}: {e.message}")
            raise RemoteServiceError(
                f"Failed to fetch execution: {e.message}",
                service="functions",
                operation="get_execution"
            ) from e

        if not response.data:
            raise NotFoundError(
                f"Execution not found: {execution_id}",
                resource_type="execution",
                resource_id=execution_id
            )
        return to_execution(response.data[0])
