from __future__ import annotations

import logging

import pytest

from rt.model.iteration import M1
from rt.model.project import Project
from rt.model.train import Module, Train
from rt.output.log import LOGGER_NAME, ContextLogger, configure_logging, context_name

COMMONS = Project("Commons")
OCKHAM = Train.of("Ockham", Module.of(COMMONS, "2.4")).with_calver("2020.0")


class TestContextName:
    def test_contexts(self) -> None:
        iteration = OCKHAM.at(M1)
        assert context_name(COMMONS) == "Commons"
        assert context_name(OCKHAM) == "Ockham"
        assert context_name(iteration) == "2020.0.0"
        assert context_name(iteration.require_module(COMMONS)) == "Commons"
        assert context_name("release") == "release"

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError):
            context_name(42)  # type: ignore[arg-type]


class TestContextLogger:
    def test_prefixes_context(self, caplog: pytest.LogCaptureFixture) -> None:
        log = ContextLogger(logging.getLogger("contextlog.context"))

        with caplog.at_level(logging.INFO, logger="contextlog.context"):
            log.log(COMMONS, "Building %s", "2.4.0-M1")

        assert caplog.messages == ["Commons        > Building 2.4.0-M1"]

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        log = ContextLogger(logging.getLogger("contextlog.levels"))

        with caplog.at_level(logging.DEBUG, logger="contextlog.levels"):
            log.warn(OCKHAM, "Slow")
            log.debug("release", "Details")

        assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.DEBUG]

    def test_disabled_level_is_not_formatted(self, caplog: pytest.LogCaptureFixture) -> None:
        log = ContextLogger(logging.getLogger("contextlog.disabled"))

        with caplog.at_level(logging.INFO, logger="contextlog.disabled"):
            log.debug(COMMONS, "100%% %s")

        assert caplog.records == []

    def test_template_without_args_is_verbatim(self, caplog: pytest.LogCaptureFixture) -> None:
        log = ContextLogger(logging.getLogger("contextlog.verbatim"))

        with caplog.at_level(logging.INFO, logger="contextlog.verbatim"):
            log.log(COMMONS, "100% done")

        assert caplog.messages == ["Commons        > 100% done"]


def test_configure_logging_is_idempotent() -> None:
    from rich.logging import RichHandler

    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    try:
        configure_logging(verbose=False)
        configure_logging(verbose=True)

        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers[:] = saved[0]
        logger.setLevel(saved[1])
        logger.propagate = saved[2]
