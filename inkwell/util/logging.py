"""Standard library logging routed through Logfire."""

import logging

import logfire

from inkwell.config import Settings

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg")


def setup_logging(settings: Settings) -> None:
    """Send stdlib log records (uvicorn, alembic, sqlalchemy) to Logfire.

    Call after ``configure_logfire``.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("inkwell").setLevel(level)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
