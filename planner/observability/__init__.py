"""
Observability: structured logging and request IDs.

Usage:
    from planner.observability import configure_logging, RequestContext

    configure_logging("INFO")
    with RequestContext() as ctx:
        logger.info("Optimizing")
"""

from .logging import (
    CorrelationIdMiddleware,
    HumanFormatter,
    JSONFormatter,
    RequestContext,
    configure_logging,
    generate_request_id,
    get_request_id,
)

__all__ = [
    "CorrelationIdMiddleware",
    "HumanFormatter",
    "JSONFormatter",
    "RequestContext",
    "configure_logging",
    "generate_request_id",
    "get_request_id",
]
