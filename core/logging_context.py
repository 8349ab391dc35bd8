"""
Request-scoped logging context.

The correlation ID of the request being served, read by the JSON log
formatter so every record emitted during a request carries it.
"""
from contextvars import ContextVar
from typing import Optional

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
