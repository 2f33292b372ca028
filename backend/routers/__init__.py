"""
API routers for the Focus Planner backend.

- focus: Ranked focus suggestions and the energy curve
"""

from .focus import router as focus_router

__all__ = [
    'focus_router',
]
