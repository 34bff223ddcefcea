from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status

from sims.schemas.student_schemas import StudentRecord
from sims.services.student_service import StudentService, get_student_service
from sims.utils.responses import ResponseBuilder

students_router = APIRouter()


@students_router.get(
    "",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="List all students",
    description="Return the full student collection in stored order. Filtering is done by the UI.",
)
async def list_students(
    request: Request,
    student_service: StudentService = Depends(get_student_service),
):
    students = await student_service.list_students()
    return ResponseBuilder.success(request=request, data=students)


@students_router.get(
    "/rules",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="Field validation rules",
    description="The rule set the server enforces, for the UI to validate with before submitting.",
)
async def get_validation_rules(
    request: Request,
    student_service: StudentService = Depends(get_student_service),
):
    rules = await student_service.get_rules()
    return ResponseBuilder.success(request=request, data=rules)


@students_router.post(
    "",
    response_model=None,
    status_code=status.HTTP_201_CREATED,
    summary="Add a student",
    description="Validate all seven fields, reject duplicate student IDs, append and persist.",
)
async def create_student(
    request: Request,
    student: StudentRecord,
    student_service: StudentService = Depends(get_student_service),
):
    created = await student_service.create_student(student)
    return ResponseBuilder.success(
        request=request, data=created, status_code=status.HTTP_201_CREATED
    )


@students_router.delete(
    "/{student_id}",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="Delete a student",
    description="Remove the student with this ID and return the removed record.",
)
async def delete_student(
    request: Request,
    student_id: Annotated[str, Path(description="Student ID to delete")],
    student_service: StudentService = Depends(get_student_service),
):
    removed = await student_service.delete_student(student_id)
    return ResponseBuilder.success(request=request, data=removed)
