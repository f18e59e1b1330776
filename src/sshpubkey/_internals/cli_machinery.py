# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib


"""Command-line machinery for sshpubkey.

Warning:
    Non-public module (implementation detail), provided for didactical and
    educational purposes only. Subject to change without notice, including
    removal.

"""

from __future__ import annotations

import collections
import importlib.metadata
import logging
import warnings
from typing import TYPE_CHECKING, Callable, Literal, TextIO, TypeVar

import click
from typing_extensions import Any, ParamSpec

from sshpubkey import _internals

if TYPE_CHECKING:
    import types
    from collections.abc import MutableSequence

    from typing_extensions import Self

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION


# Logging
# =======


class ClickEchoStderrHandler(logging.Handler):
    """A [`logging.Handler`][] for `click` applications.

    Outputs log messages to [`sys.stderr`][] via [`click.echo`][].

    """

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record.

        Format the log record, then emit it via [`click.echo`][] to
        [`sys.stderr`][].

        """
        click.echo(
            self.format(record),
            err=True,
            color=getattr(record, 'color', None),
        )


class CLIofPackageFormatter(logging.Formatter):
    """Format `sshpubkey` log records for standard error.

    Every line of the message is prefixed with the program name, and
    debug messages and warnings additionally carry a level label.

    """

    def __init__(self, *, prog_name: str = PROG_NAME) -> None:
        super().__init__()
        self.prog_name = prog_name

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as `PROG_NAME: LABEL: MESSAGE` lines.

        `LABEL` is `Debug` for [`logging.DEBUG`][] records and a bold
        `Warning` for [`logging.WARNING`][] records.  Other records
        have no label.

        Raises:
            AssertionError:
                The log level is not supported.

        """
        if record.levelno == logging.DEBUG:
            label = 'Debug: '
        elif record.levelno == logging.WARNING:
            label = f'{click.style("Warning", bold=True)}: '
        elif record.levelno in {logging.INFO, logging.ERROR, logging.CRITICAL}:
            label = ''
        else:  # pragma: no cover [failsafe]
            msg = f'Unsupported logging level: {record.levelname}'
            raise AssertionError(msg)
        prefix = f'{self.prog_name}: {label}'
        text = ''.join(
            prefix + line
            for line in record.getMessage().splitlines(True)  # noqa: FBT003
        )
        if record.exc_info:
            text += self.formatException(record.exc_info) + '\n'
        return text


class StandardCLILogging:
    """Set up CLI logging handlers upon instantiation."""

    package_name = PROG_NAME.lower().replace('-', '_')
    cli_formatter = CLIofPackageFormatter(prog_name=PROG_NAME)
    cli_handler = ClickEchoStderrHandler()
    cli_handler.addFilter(logging.Filter(name=package_name))
    cli_handler.setFormatter(cli_formatter)
    cli_handler.setLevel(logging.WARNING)
    warnings_handler = ClickEchoStderrHandler()
    warnings_handler.addFilter(logging.Filter(name='py.warnings'))
    warnings_handler.setFormatter(cli_formatter)
    warnings_handler.setLevel(logging.WARNING)

    @classmethod
    def ensure_standard_logging(cls) -> StandardLoggingContextManager:
        """Return a context manager to ensure standard logging is set up."""
        return StandardLoggingContextManager(
            handler=cls.cli_handler,
            root_logger=cls.package_name,
        )

    @classmethod
    def ensure_standard_warnings_logging(
        cls,
    ) -> StandardWarningsLoggingContextManager:
        """Return a context manager to ensure warnings logging is set up."""
        return StandardWarningsLoggingContextManager(
            handler=cls.warnings_handler,
        )


class StandardLoggingContextManager:
    """A reentrant context manager setting up standard CLI logging.

    Ensures that the given handler (defaulting to the CLI logging
    handler) is added to the named logger (defaulting to the root
    logger), and if it had to be added, then that it will be removed
    upon exiting the context.

    Reentrant, but not thread safe, because it temporarily modifies
    global state.

    """

    def __init__(
        self,
        handler: logging.Handler,
        root_logger: str | None = None,
    ) -> None:
        self.handler = handler
        self.root_logger_name = root_logger
        self.base_logger = logging.getLogger(self.root_logger_name)
        self.action_required: MutableSequence[bool] = collections.deque()

    def __enter__(self) -> Self:
        self.action_required.append(
            self.handler not in self.base_logger.handlers
        )
        if self.action_required[-1]:
            self.base_logger.addHandler(self.handler)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> Literal[False]:
        if self.action_required[-1]:
            self.base_logger.removeHandler(self.handler)
        self.action_required.pop()
        return False


class StandardWarningsLoggingContextManager(StandardLoggingContextManager):
    """A reentrant context manager setting up standard warnings logging.

    Ensures that warnings are being diverted to the logging system, and
    that the given handler is added to the warnings logger.  If the
    handler had to be added, then it will be removed upon exiting the
    context.

    Reentrant, but not thread safe, because it temporarily modifies
    global state.

    """

    def __init__(
        self,
        handler: logging.Handler,
    ) -> None:
        super().__init__(handler=handler, root_logger='py.warnings')
        self.stack: MutableSequence[
            tuple[
                Callable[
                    [
                        type[BaseException] | None,
                        BaseException | None,
                        types.TracebackType | None,
                    ],
                    None,
                ],
                Callable[
                    [
                        str | Warning,
                        type[Warning],
                        str,
                        int,
                        TextIO | None,
                        str | None,
                    ],
                    None,
                ],
            ]
        ] = collections.deque()

    def __enter__(self) -> Self:
        def showwarning(  # noqa: PLR0913,PLR0917
            message: str | Warning,
            category: type[Warning],
            filename: str,
            lineno: int,
            file: TextIO | None = None,
            line: str | None = None,
        ) -> None:
            if file is not None:  # pragma: no cover [external-api]
                self.stack[0][1](
                    message, category, filename, lineno, file, line
                )
            else:
                logging.getLogger('py.warnings').warning(
                    str(
                        warnings.formatwarning(
                            message, category, filename, lineno, line
                        )
                    )
                )

        ctx = warnings.catch_warnings()
        exit_func = ctx.__exit__
        ctx.__enter__()
        self.stack.append((exit_func, warnings.showwarning))
        warnings.showwarning = showwarning
        return super().__enter__()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> Literal[False]:
        ret = super().__exit__(exc_type, exc_value, exc_tb)
        val = self.stack.pop()[0](exc_type, exc_value, exc_tb)
        assert not val
        return ret


P = ParamSpec('P')
R = TypeVar('R')


def adjust_logging_level(
    ctx: click.Context,
    /,
    param: click.Parameter | None = None,
    value: int | None = None,
) -> None:
    """Change the logs that are emitted to standard error.

    This modifies the [`StandardCLILogging`][] settings such that log
    records at the respective level are emitted, based on the `param`
    and the `value`.

    """
    # Note: If multiple options use this callback, then we will be
    # called multiple times.  Ensure the runs are idempotent.
    if param is None or value is None or ctx.resilient_parsing:
        return
    StandardCLILogging.cli_handler.setLevel(value)
    logging.getLogger(StandardCLILogging.package_name).setLevel(value)


# Commands and callbacks
# ======================


class LoggingCommand(click.Command):
    """A [`click.Command`][] that sets up logging when called.

    When called as a function, this sets up the environment properly
    before invoking the actual callback: the logging subsystem, and the
    delegation of Python warnings to the logging subsystem.

    The environment setup can be bypassed by calling the `.main` method
    directly.

    """

    def __call__(  # pragma: no cover [external-api]
        self,
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        # Coverage testing is done with the `click.testing` module,
        # which does not use the `__call__` shortcut.
        with (
            StandardCLILogging.ensure_standard_logging(),
            StandardCLILogging.ensure_standard_warnings_logging(),
        ):
            return self.main(*args, **kwargs)


def version_option_callback(
    ctx: click.Context,
    param: click.Parameter,
    value: bool,  # noqa: FBT001
) -> None:
    """Print the version of sshpubkey and its major dependencies."""
    del param
    if not value or ctx.resilient_parsing:
        return
    major_dependencies = [
        f'cryptography {importlib.metadata.version("cryptography")}',
        f'click {importlib.metadata.version("click")}',
    ]
    click.echo(
        ' '.join([click.style(PROG_NAME, bold=True), VERSION]),
        color=ctx.color,
    )
    for dependency in major_dependencies:
        click.echo(f'Using {dependency}.', color=ctx.color)
    ctx.exit()


def color_forcing_callback(
    ctx: click.Context,
    param: click.Parameter,
    value: Any,  # noqa: ANN401
) -> None:
    """Disable automatic color (and text highlighting).

    We use device-independent text output without any color or text
    styling whatsoever.

    """
    del param, value
    ctx.color = False


# Options
# =======


version_option = click.option(
    '--version',
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=version_option_callback,
    help='Show the version and exit.',
)
color_forcing_pseudo_option = click.option(
    '--_pseudo-option-color-forcing',
    '_color_forcing',
    is_flag=True,
    is_eager=True,
    expose_value=False,
    hidden=True,
    callback=color_forcing_callback,
    help='(pseudo-option)',
)
debug_option = click.option(
    '--debug',
    'logging_level',
    is_flag=True,
    flag_value=logging.DEBUG,
    expose_value=False,
    callback=adjust_logging_level,
    help='Also emit debug information.  Implies --verbose.',
)
verbose_option = click.option(
    '-v',
    '--verbose',
    'logging_level',
    is_flag=True,
    flag_value=logging.INFO,
    expose_value=False,
    callback=adjust_logging_level,
    help='Emit extra/progress information to standard error.',
)
quiet_option = click.option(
    '-q',
    '--quiet',
    'logging_level',
    is_flag=True,
    flag_value=logging.ERROR,
    expose_value=False,
    callback=adjust_logging_level,
    help='Suppress even warnings; emit only errors.',
)


def standard_logging_options(f: Callable[P, R]) -> Callable[P, R]:
    """Decorate the function with standard logging click options.

    Adds the three click options `-v`/`--verbose`, `-q`/`--quiet` and
    `--debug`, which calls back into the [`adjust_logging_level`][]
    function (with different argument values).

    Args:
        f: A callable to decorate.

    Returns:
        The decorated callable.

    """
    return debug_option(verbose_option(quiet_option(f)))
