"""
release-changelog uses the :mod:`logging` module from the standard library to report what it did,
with `rich <https://github.com/Textualize/rich>`_ handling the formatting.

Everything is logged to ``stderr``. The only thing the CLI ever writes to ``stdout`` is the
extracted changes (or the updated changelog), so that the output can be piped straight into
other tools, e.g.

.. code-block::

    $ release-changelog CHANGELOG.md 1.2.0 > release-notes.md

You can set the log level in several different ways:

1. Through a `settings file <./settings.html>`_.
2. With the environment variable ``RELEASE_CHANGELOG_LOG_LEVEL``.
3. Or with the ``--log-level`` command-line option.

Configuring logging in your own scripts
---------------------------------------

If you're calling :func:`changelog_release.changelog.release()` from your own script,
you can use :func:`initialize_logging()` to configure logging the same way the CLI does.

.. code-block::

    from changelog_release.common.logging import initialize_logging, teardown_logging

    initialize_logging(log_level="info")

    logger = logging.getLogger()
    logger.info("Running script!")

    teardown_logging()

"""

import logging
import os
import sys
from typing import List, Optional

import rich
from rich.console import Console
from rich.logging import RichHandler

from .aliases import EnvVarNames
from .util import _parse_bool, _parse_optional_int

FILE_FRIENDLY_LOGGING: bool = _parse_bool(
    os.environ.get(EnvVarNames.FILE_FRIENDLY_LOGGING.value, False)
)
"""
If this flag is set to ``True``, we remove special styling characters from log messages.

By default, it is set to ``False``. It can be changed by setting the corresponding environment
variable (``FILE_FRIENDLY_LOGGING``) or field in a
:class:`~changelog_release.settings.ReleaseSettings` file (``file_friendly_logging``)
to "true" or "false".
"""

RELEASE_CHANGELOG_LOG_LEVEL: Optional[str] = os.environ.get(EnvVarNames.LOG_LEVEL.value, None)
"""
The log level to use globally. The value can be set from the corresponding environment variable
(``RELEASE_CHANGELOG_LOG_LEVEL``) or field in a settings file (``log_level``),
or from the command line with the ``--log-level`` option.
Possible values are "debug", "info", "warning", or "error" (not case sensitive).

.. note::
    This does not affect the :data:`~changelog_release.common.logging.cli_logger`.

"""

RELEASE_CHANGELOG_CONSOLE_WIDTH: Optional[int] = _parse_optional_int(
    os.environ.get(EnvVarNames.CONSOLE_WIDTH.value, None)
)

# CLI logger disabled by default in case nobody calls initialize_logging().
RELEASE_CHANGELOG_CLI_LOGGER_ENABLED: bool = _parse_bool(
    os.environ.get(EnvVarNames.CLI_LOGGER_ENABLED.value, False)
)

# Keep track of exceptions logged so we don't log duplicates from our custom excepthook.
_EXCEPTIONS_LOGGED: List[BaseException] = []


class LevelFilter(logging.Filter):
    """
    Filters out everything that is above `max_level` or higher. This is meant to be used
    with one handler per level so that each level can be styled differently without
    messages being duplicated.
    """

    def __init__(self, max_level: int, name=""):
        self.max_level = max_level
        super().__init__(name)

    def filter(self, record):
        return record.levelno <= self.max_level


def get_handler(
    level: int,
    enable_markup: bool = False,
    show_time: bool = True,
    show_level: bool = True,
    show_path: bool = True,
) -> logging.Handler:
    import click

    # Always stderr: stdout is reserved for the command's output.
    console = Console(
        color_system="auto" if not FILE_FRIENDLY_LOGGING else None,
        stderr=True,
        width=RELEASE_CHANGELOG_CONSOLE_WIDTH,
    )
    if RELEASE_CHANGELOG_CONSOLE_WIDTH is None and not console.is_terminal:
        console.width = 160
    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=False,
        tracebacks_show_locals=False,
        tracebacks_suppress=[click],
        markup=enable_markup,
        show_time=show_time,
        show_level=show_level,
        show_path=show_path,
        omit_repeated_times=False,
        highlighter=rich.highlighter.NullHighlighter(),
    )
    return handler


cli_logger = logging.getLogger("changelog_release.__main__")
"""
A logger that emits styled messages to stderr using
`rich <https://github.com/Textualize/rich>`_'s
:class:`~rich.console.Console` class.

It understands the `markup style <https://rich.readthedocs.io/en/latest/markup.html>`_
provided by `rich`.
"""

cli_logger.propagate = False
cli_logger.disabled = not RELEASE_CHANGELOG_CLI_LOGGER_ENABLED


def excepthook(exctype, value, traceback):
    """
    Used to patch `sys.excepthook` in order to log exceptions.
    """
    global _EXCEPTIONS_LOGGED
    # For interruptions, call the original exception handler.
    if issubclass(exctype, KeyboardInterrupt):
        sys.__excepthook__(exctype, value, traceback)
        return
    if value not in _EXCEPTIONS_LOGGED:
        _EXCEPTIONS_LOGGED.append(value)
        root_logger = logging.getLogger()
        root_logger.error(
            "Uncaught exception",
            exc_info=(exctype, value, traceback),
            extra={"highlighter": rich.highlighter.ReprHighlighter()},
        )


def initialize_logging(
    *,
    log_level: Optional[str] = None,
    enable_cli_logs: Optional[bool] = None,
    file_friendly_logging: Optional[bool] = None,
):
    """
    Initialize logging, which includes setting the global log level, format, and configuring
    handlers.

    .. tip::
        You should also call :func:`teardown_logging()` as the end of your script.

    :param log_level:
        Can be one of "debug", "info", "warning", "error". Defaults to the value
        of :data:`RELEASE_CHANGELOG_LOG_LEVEL`, if set, or "error".
    :param enable_cli_logs:
        Set to ``True`` to enable messages from the :data:`cli_logger`.
    :param file_friendly_logging:
        Enable or disable file friendly logging. Defaults to the value of :data:`FILE_FRIENDLY_LOGGING`.

    """
    global FILE_FRIENDLY_LOGGING, RELEASE_CHANGELOG_LOG_LEVEL, RELEASE_CHANGELOG_CLI_LOGGER_ENABLED

    if log_level is None:
        log_level = RELEASE_CHANGELOG_LOG_LEVEL
    if log_level is None:
        log_level = "error"
    if file_friendly_logging is None:
        file_friendly_logging = FILE_FRIENDLY_LOGGING
    if enable_cli_logs is None:
        enable_cli_logs = RELEASE_CHANGELOG_CLI_LOGGER_ENABLED

    level = logging._nameToLevel[log_level.upper()]

    RELEASE_CHANGELOG_LOG_LEVEL = log_level
    os.environ[EnvVarNames.LOG_LEVEL.value] = log_level
    FILE_FRIENDLY_LOGGING = file_friendly_logging
    os.environ[EnvVarNames.FILE_FRIENDLY_LOGGING.value] = str(file_friendly_logging).lower()
    RELEASE_CHANGELOG_CLI_LOGGER_ENABLED = enable_cli_logs
    os.environ[EnvVarNames.CLI_LOGGER_ENABLED.value] = str(enable_cli_logs).lower()

    # We always want to see all CLI messages if we're running from the command line, and none otherwise.
    cli_logger.setLevel(logging.DEBUG)
    cli_logger.disabled = not enable_cli_logs

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(get_handler(level))

    # Configure cli_logger so that if log level <= INFO, it will behave
    # like a regular logger, otherwise it just prints the styled message.
    cli_logger.handlers.clear()
    if enable_cli_logs:
        for handler_level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR):
            cli_handler = get_handler(
                handler_level,
                enable_markup=True,
                show_time=level <= handler_level,
                show_level=(level <= handler_level) or handler_level >= logging.WARNING,
                show_path=level <= handler_level,
            )
            cli_handler.addFilter(LevelFilter(handler_level))
            cli_logger.addHandler(cli_handler)

    # Write uncaught exceptions to the logs.
    sys.excepthook = excepthook

    # Ensure warnings issued by the 'warnings' module will be redirected to the logging system.
    logging.captureWarnings(True)


def teardown_logging():
    """
    Cleanup any logging fixtures created from :func:`initialize_logging()`. Should
    be called at the end of your script.
    """
    logging.captureWarnings(False)
    sys.excepthook = sys.__excepthook__  # type: ignore[assignment]
