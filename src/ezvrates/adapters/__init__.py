"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (upstream XML API)
- Cache (rate cache stores)
"""

__all__ = []
