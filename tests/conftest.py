# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING

import hypothesis
import pytest

from sshpubkey._internals import cli_machinery

if TYPE_CHECKING:
    from collections.abc import Iterator

# https://hypothesis.readthedocs.io/en/latest/settings.html#settings-profiles
hypothesis.settings.register_profile('ci', max_examples=1000)
hypothesis.settings.register_profile('dev', max_examples=10)
hypothesis.settings.register_profile(
    'debug', max_examples=10, verbosity=hypothesis.Verbosity.verbose
)
hypothesis.settings.register_profile(
    'flaky', deadline=datetime.timedelta(milliseconds=150)
)


# https://docs.pytest.org/en/stable/explanation/fixtures.html#a-note-about-fixture-cleanup
# https://github.com/pytest-dev/pytest/issues/5243#issuecomment-491522595
@pytest.fixture(scope='session', autouse=True)
def term_handler() -> Iterator[None]:  # pragma: no cover
    try:
        import signal  # noqa: PLC0415

        sigint_handler = signal.getsignal(signal.SIGINT)
    except (ImportError, OSError):
        return
    else:
        orig_term = signal.signal(signal.SIGTERM, sigint_handler)
        yield
        signal.signal(signal.SIGTERM, orig_term)


@pytest.fixture
def standard_logging() -> Iterator[None]:
    """Install the CLI logging handlers, and restore the log levels.

    The `--verbose`, `--quiet` and `--debug` options change the log
    levels globally, so undo their effects after each test.

    """
    handler = cli_machinery.StandardCLILogging.cli_handler
    logger = logging.getLogger(cli_machinery.StandardCLILogging.package_name)
    orig_handler_level = handler.level
    orig_logger_level = logger.level
    try:
        with (
            cli_machinery.StandardCLILogging.ensure_standard_logging(),
            cli_machinery.StandardCLILogging.ensure_standard_warnings_logging(),
        ):
            yield
    finally:
        handler.setLevel(orig_handler_level)
        logger.setLevel(orig_logger_level)
