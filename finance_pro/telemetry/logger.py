"""
Structured Logging

DESIGN DECISION: Every write that crosses the storage boundary is logged
as one structured event (expense_saved, income_rolled_back, ...).
Pure calculations are not logged.

The logger:
- Renders JSON by default, a readable console format in debug mode
- Supports correlation IDs to trace the events of one user action
- Never persists anything; there is no audit trail
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

_configured = False


def configure_logging(debug: bool = False, force: bool = False) -> None:
    """
    Configure structlog for the process.

    Safe to call repeatedly; only the first call (or a forced one) applies.
    """
    global _configured
    if _configured and not force:
        return

    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: Optional[str] = None, **initial_values):
    """Get a bound logger, configuring logging on first use."""
    configure_logging()
    return structlog.get_logger(name, **initial_values)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., saving an expense)
    and bind it to every log event of that action.
    """
    return uuid4()
