"""
Students resource: list all, create one.
Handlers are sync; FastAPI runs them on its threadpool alongside pymongo's blocking I/O.
"""

from fastapi import APIRouter, status

from core.dependencies import StudentServiceDep
from models.schemas import Document, ErrorResponse, StudentCreate, StudentCreated

router = APIRouter(prefix="/students", tags=["students"])

_ERROR_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.get("", response_model=list[Document], responses=_ERROR_RESPONSES)
def list_students(service: StudentServiceDep) -> list[Document]:
    """
    Every document in the collection, unfiltered and unpaginated.
    Documents are returned as stored, with _id as a hex string.
    """
    return service.list_documents()


@router.post(
    "",
    response_model=StudentCreated,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
def create_student(body: StudentCreate, service: StudentServiceDep) -> StudentCreated:
    """Insert name and age; any other body fields are ignored."""
    inserted_id = service.create(body)
    return StudentCreated(inserted_id=str(inserted_id))
