"""Phase version computation and dependency-ordered build orchestration."""

from .dispatch import Dispatcher, NoImplementation
from .executor import ExecutionMode, ModuleFailure, Orchestrator, Outcome, Summary
from .operations import BuildOperations, BuildSystem, MissingBuildSystemError
from .repository import COMMERCIAL_RELEASE, COMMERCIAL_SNAPSHOT, MILESTONE, SNAPSHOT, Repository
from .update_information import UpdateInformation

__all__ = [
    # dispatch
    "Dispatcher",
    "NoImplementation",
    # executor
    "ExecutionMode",
    "ModuleFailure",
    "Orchestrator",
    "Outcome",
    "Summary",
    # operations
    "BuildOperations",
    "BuildSystem",
    "MissingBuildSystemError",
    # repositories
    "COMMERCIAL_RELEASE",
    "COMMERCIAL_SNAPSHOT",
    "MILESTONE",
    "Repository",
    "SNAPSHOT",
    "UpdateInformation",
]
