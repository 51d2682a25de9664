"""
Workforce Interfaces Layer
==========================

FastAPI route handlers for the workforce module.
"""

from workforce.interfaces.controllers import router as workforce_router

__all__ = ["workforce_router"]
