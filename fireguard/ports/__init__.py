"""
Port interfaces for FireGuard.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .event_store import FireEventStorePort
from .user_store import UserStorePort, StoredUser
from .identity import IdentityPort
from .geocoder import GeocoderPort
from .broadcast import BroadcastPort

__all__ = [
    "FireEventStorePort",
    "UserStorePort",
    "StoredUser",
    "IdentityPort",
    "GeocoderPort",
    "BroadcastPort",
]
