"""
FastAPI dependency injection for route handlers.
The student service is built once by the app factory and read from app.state.
"""

from typing import Annotated

from fastapi import Depends, Request

from services.student_service import StudentService


def get_student_service(request: Request) -> StudentService:
    """Return the StudentService bound to the app at creation time."""
    return request.app.state.student_service


StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
