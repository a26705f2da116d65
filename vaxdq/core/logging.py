"""Logging setup with contact-detail redaction.

Records carry patient mobile numbers and email addresses.  Every handler
installed here runs ``ContactRedactionFilter`` so those values never reach
log output, whether they appear in the message template or in its args.
"""
import logging
import logging.config
import re

# (pattern, replacement); replacements may refer back to a kept prefix group.
REDACTION_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(?i)((?:mobile|email)\s*[=:]\s*)([^,\s]+)"), r"\1[REDACTED]"),
    (re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"), "[REDACTED]"),
    (re.compile(r"\b(?:\+1[-.\s]?)?(?:\(?\d{3}\)?[-.\s]?)\d{3}[-.\s]?\d{4}\b"), "[REDACTED]"),
]

# Libraries that log every request at INFO.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def redact(text: str) -> str:
    for pattern, replacement in REDACTION_RULES:
        text = pattern.sub(replacement, text)
    return text


class ContactRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(redact(a) if isinstance(a, str) else a for a in record.args)
        elif isinstance(record.args, dict):
            record.args = {
                key: redact(value) if isinstance(value, str) else value
                for key, value in record.args.items()
            }

        return True


def build_logging_config(level: str) -> dict:
    """Return the ``dictConfig`` mapping for a console handler at *level*."""
    quiet = {
        name: {"handlers": ["console"], "level": "WARNING", "propagate": False}
        for name in _QUIET_LOGGERS
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redact_contacts": {"()": "vaxdq.core.logging.ContactRedactionFilter"},
        },
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "filters": ["redact_contacts"],
            }
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level.upper()},
            **quiet,
        },
    }


def setup_logging() -> None:
    from vaxdq.core.settings import get_settings

    logging.config.dictConfig(build_logging_config(get_settings().log_level))
