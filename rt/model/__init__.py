"""Release train model: versions, projects, trains and iterations."""

from .defaults import PARENT_PROJECT, default_projects, default_trains
from .errors import (
    ConfigurationError,
    CyclicDependencyError,
    IterationBoundaryError,
    ModelError,
    NotFound,
    UnknownProjectError,
    VersionParseError,
)
from .iteration import DEFAULT_ITERATIONS, GA, Iteration, IterationKind, Iterations
from .phase import Phase
from .project import ArtifactCoordinate, Maintainer, NamingStrategy, Project, SupportStatus, Tracker
from .projects import ProjectRegistry
from .train import Module, Train, Transition
from .train_iteration import ModuleIteration, TrainIteration
from .trains import TrainRegistry
from .version import ArtifactVersion, Version

__all__ = [
    # defaults
    "PARENT_PROJECT",
    "default_projects",
    "default_trains",
    # errors
    "ConfigurationError",
    "CyclicDependencyError",
    "IterationBoundaryError",
    "ModelError",
    "NotFound",
    "UnknownProjectError",
    "VersionParseError",
    # iterations
    "DEFAULT_ITERATIONS",
    "GA",
    "Iteration",
    "IterationKind",
    "Iterations",
    "Phase",
    # projects
    "ArtifactCoordinate",
    "Maintainer",
    "NamingStrategy",
    "Project",
    "ProjectRegistry",
    "SupportStatus",
    "Tracker",
    # trains
    "Module",
    "ModuleIteration",
    "Train",
    "TrainIteration",
    "TrainRegistry",
    "Transition",
    # versions
    "ArtifactVersion",
    "Version",
]
