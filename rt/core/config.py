"""Typed configuration loading and access.

This module provides dataclasses for the rt.toml structure. Every section
is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast, get_args

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "ExecutorConfig",
    "FailurePolicy",
    "GitConfig",
    "NamingConfig",
    "OrchestrationConfig",
    "TrainsConfig",
    "CONFIG_FILE_NAME",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "rt.toml"

# What happens to modules in later waves whose upstream module failed.
FailurePolicy = Literal["skip-dependents", "run-anyway"]

DEFAULT_FAILURE_POLICY: FailurePolicy = "skip-dependents"
DEFAULT_REMOTE = "origin"
DEFAULT_LAST_TRAINS = 3

# Worker pool sizing when max_workers is 0
MIN_WORKERS = 4
RESERVED_PROCESSORS = 4


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ExecutorConfig:
    """Worker pool used by the orchestrator."""

    parallelize: bool = True
    max_workers: int = 0

    def worker_count(self) -> int:
        """Number of worker threads to use for one orchestration run."""
        if not self.parallelize:
            return 1
        if self.max_workers > 0:
            return self.max_workers
        processors = os.cpu_count() or 1
        return max(MIN_WORKERS, processors - RESERVED_PROCESSORS)


@dataclass(frozen=True, slots=True)
class OrchestrationConfig:
    failure_policy: FailurePolicy = DEFAULT_FAILURE_POLICY


@dataclass(frozen=True, slots=True)
class GitConfig:
    remote: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class NamingConfig:
    """Naming of repositories, artifacts and display names."""

    owner: str = "spring-projects"
    prefix: str = "spring-data"
    group_id: str = "org.springframework.data"
    full_name_prefix: str = "Spring Data"


@dataclass(frozen=True, slots=True)
class TrainsConfig:
    default_last: int = DEFAULT_LAST_TRAINS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    executor: ExecutorConfig = field(default_factory=ExecutorConfig)
    orchestration: OrchestrationConfig = field(default_factory=OrchestrationConfig)
    git: GitConfig = field(default_factory=GitConfig)
    naming: NamingConfig = field(default_factory=NamingConfig)
    trains: TrainsConfig = field(default_factory=TrainsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but not acceptable.
        """
        executor: StrDict = get_table(data, "executor") or {}
        orchestration: StrDict = get_table(data, "orchestration") or {}
        git: StrDict = get_table(data, "git") or {}
        naming: StrDict = get_table(data, "naming") or {}
        trains: StrDict = get_table(data, "trains") or {}

        parallelize = get_bool(executor, "parallelize", "executor.")
        max_workers = get_int(executor, "max_workers", "executor.") or 0
        if max_workers < 0:
            raise ValueError(f"executor.max_workers must be >= 0, got {max_workers}")

        default_last = get_int(trains, "default_last", "trains.")
        if default_last is None:
            default_last = DEFAULT_LAST_TRAINS
        if default_last < 1:
            raise ValueError(f"trains.default_last must be >= 1, got {default_last}")

        defaults = NamingConfig()

        return cls(
            executor=ExecutorConfig(
                parallelize=True if parallelize is None else parallelize,
                max_workers=max_workers,
            ),
            orchestration=OrchestrationConfig(
                failure_policy=_parse_failure_policy(
                    get_str(orchestration, "failure_policy", "orchestration.")
                ),
            ),
            git=GitConfig(remote=get_str(git, "remote", "git.") or DEFAULT_REMOTE),
            naming=NamingConfig(
                owner=get_str(naming, "owner", "naming.") or defaults.owner,
                prefix=get_str(naming, "prefix", "naming.") or defaults.prefix,
                group_id=get_str(naming, "group_id", "naming.") or defaults.group_id,
                full_name_prefix=(
                    get_str(naming, "full_name_prefix", "naming.") or defaults.full_name_prefix
                ),
            ),
            trains=TrainsConfig(default_last=default_last),
        )


def _parse_failure_policy(value: str | None) -> FailurePolicy:
    if value is None:
        return DEFAULT_FAILURE_POLICY
    allowed = get_args(FailurePolicy)
    if value not in allowed:
        raise ValueError(
            f"orchestration.failure_policy must be one of {', '.join(allowed)}, got {value!r}"
        )
    return cast(FailurePolicy, value)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to rt.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or return the default config if the file is absent.

    A file that exists but is invalid is still reported as an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
