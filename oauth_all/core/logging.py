"""Logging for oauth-all.

Exposes a module-level ``logger`` that can be narrowed with extra context::

    from oauth_all.core.logging import logger

    ctx_logger = logger.with_context(oauth_version="1.0A", request_type="access_token")
    ctx_logger.debug("Signature computed")

Context dimensions travel in the record's ``extra`` so structured handlers can
pick them up. The default stream handler renders them after the message.
"""

import logging
from typing import Any, MutableMapping, Optional

from oauth_all.core.config import settings

LOGGER_NAME = "oauth_all"


class _ContextFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context dimensions to the message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        dimensions = getattr(record, "context", None)
        if dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in sorted(dimensions.items()))
            message = f"{message} [{rendered}]"
        return message


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a prefix and a dict of context dimensions."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        super().__init__(logger, {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.dimensions, **extra.get("context", {})}
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with ``dimensions`` merged into the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions}, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.dimensions, f"{self.prefix}{prefix}")


def _configure_base_logger() -> logging.Logger:
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(settings.LOG_LEVEL)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_ContextFormatter(settings.LOG_FORMAT))
        base.addHandler(handler)
        # The handler above renders everything; root handlers would repeat it.
        base.propagate = False
    return base


logger = ContextualLogger(_configure_base_logger())
