"""
Route modules. Import and include in main app.
"""

from api.routes.students import router as students_router

__all__ = ["students_router"]
