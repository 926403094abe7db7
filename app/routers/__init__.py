"""
API Routers
Separate router modules for each domain.
"""

from app.routers import sourcemap

__all__ = ["sourcemap"]
