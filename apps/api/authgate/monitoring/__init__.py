"""Monitoring utilities for Prometheus instrumentation."""

from .middleware import MetricsMiddleware, record_authentication_outcome
from .router import router

__all__ = ["MetricsMiddleware", "record_authentication_outcome", "router"]
