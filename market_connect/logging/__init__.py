"""Structured logging configuration using structlog."""

import logging
import re
import sys

import structlog

# Card numbers as typed into the payment form, with or without spacing
# e.g. 4242 4242 4242 4242 or 4242424242424242
_CARD_NUMBER_PATTERN = re.compile(r"\b(?:\d[ -]?){12,18}\d\b")
_SENSITIVE_KEYS = frozenset({"card_number", "cvv", "expiry_date"})


def _redact(value: str) -> str:
    return _CARD_NUMBER_PATTERN.sub("<CARD_REDACTED>", value)


class CardRedactingFilter(logging.Filter):
    """Filter that redacts payment card numbers from log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact card numbers from log message."""
        if record.msg and isinstance(record.msg, str):
            record.msg = _redact(record.msg)
        if record.args:
            record.args = tuple(
                _redact(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


def _redact_payment_details(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """Structlog processor to redact card details from event dictionaries."""
    for key, value in list(event_dict.items()):
        if key in _SENSITIVE_KEYS:
            event_dict[key] = "<REDACTED>"
        elif isinstance(value, str):
            event_dict[key] = _redact(value)
    return event_dict


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structured logging for the application."""
    # Create card-redacting filter
    card_filter = CardRedactingFilter()

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear existing handlers and add new one with filter
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, log_level.upper()))
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(card_filter)
    root_logger.addHandler(handler)

    # SQLAlchemy and the drivers echo bound parameters at DEBUG
    for logger_name in ("sqlalchemy.engine", "aiosqlite", "asyncpg"):
        logging.getLogger(logger_name).addFilter(card_filter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_payment_details,  # Mask card details before rendering
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
