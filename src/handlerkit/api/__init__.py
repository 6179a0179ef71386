"""FastAPI transport binding for handlerkit operations."""

from handlerkit.api.app import build_endpoint, create_app

__all__ = ["build_endpoint", "create_app"]
