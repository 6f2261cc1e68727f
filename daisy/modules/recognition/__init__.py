# 📄 File: daisy/modules/recognition/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups everything about recognizing a plant from a photo: running the remote
# job, waiting for it, and reading its answer.
# 🧪 Purpose (Technical Summary):
# Recognition module exports: result models, the execution poller and the
# result normalizer.
# 🔗 Dependencies:
# domain models, poller, normalizer
# 🔄 Connected Modules / Calls From:
# RemoteGateway, tests

"""
Recognition Module

Models:
- DataPlant / AltName: identification candidates
- Execution / ExecutionStatus: lifecycle of a remote function run

Services:
- ExecutionPoller: run a function and wait for a terminal status
- normalize_plants: parse the function response
"""

from .domain.models import AltName, DataPlant, Execution, ExecutionStatus
from .domain.normalizer import normalize_plants
from .domain.poller import ExecutionPoller
from .domain.repositories import ExecutionRepository

__all__ = [
    "AltName",
    "DataPlant",
    "Execution",
    "ExecutionStatus",
    "ExecutionPoller",
    "ExecutionRepository",
    "normalize_plants",
]
