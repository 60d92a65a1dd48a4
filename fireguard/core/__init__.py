"""
Core domain models and pure functions for FireGuard.

This module contains the domain models, the status cache and the
error taxonomy, independent of external I/O.
"""

from .models import FireEvent, FireStatus, Identity, StatusValue, User
from .status import StatusCache, normalize_status

__all__ = ["FireEvent", "FireStatus", "Identity", "StatusValue", "User", "StatusCache", "normalize_status"]
