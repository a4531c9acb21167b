"""HTTP service mode for previewing a built site."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
