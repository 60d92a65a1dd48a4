"""
Orchestrators for FireGuard.
"""

from .fire_alerts import FireAlertOrchestrator

__all__ = ["FireAlertOrchestrator"]
