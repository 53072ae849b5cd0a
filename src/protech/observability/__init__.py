"""Observability — structured logging and correlation IDs."""

from protech.observability.logging import get_correlation_id, setup_logging

__all__ = ["get_correlation_id", "setup_logging"]
