"""
Inline Editable - Observability Module

Structured logging for the runtime. Modules log through
``logging.getLogger(__name__)``; this package only configures output.

Usage:
    from inline_editable.observability import setup_logging, bind_request_id

    setup_logging("DEBUG")
    with bind_request_id():
        content = await provider.get_content("ui", "fr", "save")
"""

from .logging import JSONFormatter, bind_request_id, get_request_id, setup_logging

__all__ = [
    "JSONFormatter",
    "bind_request_id",
    "get_request_id",
    "setup_logging",
]
