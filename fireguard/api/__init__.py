"""
HTTP and WebSocket surface for FireGuard.
"""

from .app import create_app

__all__ = ["create_app"]
