"""
Realtime fan-out for FireGuard.
"""

from .hub import BroadcastHub, Subscription

__all__ = ["BroadcastHub", "Subscription"]
