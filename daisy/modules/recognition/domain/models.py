# 📄 File: daisy/modules/recognition/domain/models.py
# 🧭 Purpose (Layman Explanation):
# Defines what a plant recognition answer looks like (plant name, how sure we are,
# other names it goes by) and how we track the remote job that produces it.
# 🧪 Purpose (Technical Summary):
# DataPlant/AltName result records and the Execution lifecycle record polled
# while the remote recognition function runs.
# 🔗 Dependencies:
# pydantic, enum, typing
# 🔄 Connected Modules / Calls From:
# normalizer.py, poller.py, supabase_executions.py, RemoteGateway

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExecutionStatus(str, Enum):
    """Lifecycle of a remote function execution."""
    WAITING = "waiting"
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutionStatus.COMPLETED, ExecutionStatus.FAILED)


class Execution(BaseModel):
    """
    A single invocation of a remote function.

    Transient: created per recognition request, polled until terminal and
    then discarded.
    """

    id: str
    function_id: str
    status: ExecutionStatus = ExecutionStatus.PENDING
    response: Optional[str] = None
    errors: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class AltName(BaseModel):
    """Alternate (common or regional) name of a plant candidate."""

    model_config = ConfigDict(frozen=True)

    name: str


class DataPlant(BaseModel):
    """
    A plant identification candidate.

    Produced only as recognition output and never persisted by the client.
    """

    model_config = ConfigDict(frozen=True)

    plant_name: str
    probability: float = Field(..., ge=0.0, le=1.0)
    alt_names: List[AltName] = Field(default_factory=list)
