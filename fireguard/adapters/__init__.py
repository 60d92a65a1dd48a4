"""
Adapters for FireGuard.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""
