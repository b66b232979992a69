"""Logfire setup for the vote ledger.

Ledger code logs and traces through the ``logfire`` module directly:

    with logfire.span("cast_vote", voter=str(voter), votable=str(votable)):
        ...
    logfire.info("Vote recorded", change=change.value)

Nothing leaves the process unless a token is configured or sending is
switched on explicitly.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from polyvote import __version__
from polyvote.config import ObservabilitySettings, Settings


def should_send_to_logfire(observability: ObservabilitySettings) -> bool:
    """Explicit switch first, then token presence. Console-only otherwise."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running process.

    Environment:
        OBSERVABILITY__LOGFIRE_TOKEN: write token; enables cloud sending
        OBSERVABILITY__SEND_TO_LOGFIRE: force sending on or off

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send = should_send_to_logfire(observability)

    logfire.configure(
        service_name="polyvote",
        service_version=__version__,
        environment=settings.environment,
        send_to_logfire=send,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every ledger statement issued through ``engine``.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
