"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.asset_imports import router as asset_imports_router

__all__ = [
    "asset_imports_router",
]
