"""
Structured diagnostics for the analysis engine.

Engine modules log rows dropped during normalization, tier windows
derived for each SOBR and rule tallies at debug/info level. Everything
goes to stderr so the rich report and ``--request`` JSON on stdout are
never interleaved with log lines.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """
    Configure structlog for a CLI run.

    Called once from the CLI callback. Library users who never call it get
    structlog's defaults.

    Args:
        level: Minimum level to emit. Unknown names fall back to WARNING,
            which hides the engine's debug/info diagnostics.
        json_output: Emit one JSON object per line instead of the coloured
            console format.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return the module logger, bound lazily so configuration may come later.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key/value pairs to every log line emitted inside the block.

    The CLI wraps an analysis run so each line carries the export path:

        with log_context(export="healthcheck.json"):
            analyze_healthcheck(root)

    Args:
        **kwargs: Context values, e.g. ``export`` or ``sobr``.
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
