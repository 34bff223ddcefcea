from typing import List

from fastapi import Depends
from starlette.concurrency import run_in_threadpool

from sims.db.json_store import JsonStudentStore, get_student_store
from sims.schemas.student_schemas import StudentRecord
from sims.utils.errors import ConflictError, NotFoundError
from sims.utils.logging import get_logger
from sims.utils.validators import FieldRule, validate_student, validation_rules

logger = get_logger()


class StudentService:
    """Service provider for student record operations on the JSON store.

    Store access is blocking file I/O and runs in the threadpool.
    """

    def __init__(self, store: JsonStudentStore):
        self.store = store

    async def list_students(self) -> List[StudentRecord]:
        """Return the full collection in stored order"""
        return await run_in_threadpool(self.store.load_all)

    async def get_rules(self) -> List[FieldRule]:
        return validation_rules()

    async def create_student(self, candidate: StudentRecord) -> StudentRecord:
        """
        Validate and append a new student.

        Raises:
            ValidationError: the first field (in rule order) that fails its rule
            ConflictError: `student_id` is already present
            StorageUnavailable: the data file could not be read or written
        """
        validate_student(candidate.to_camel_dict())

        students = await run_in_threadpool(self.store.load_all)
        if any(s.student_id == candidate.student_id for s in students):
            raise ConflictError()

        students.append(candidate)
        await run_in_threadpool(self.store.replace_all, students)

        logger.info(f"Created student: {candidate.student_id}")
        return candidate

    async def delete_student(self, student_id: str) -> StudentRecord:
        """Remove the student with `student_id` and return it"""
        students = await run_in_threadpool(self.store.load_all)

        for index, student in enumerate(students):
            if student.student_id == student_id:
                break
        else:
            raise NotFoundError()

        removed = students.pop(index)
        await run_in_threadpool(self.store.replace_all, students)

        logger.info(f"Deleted student: {student_id}")
        return removed


def get_student_service(
    store: JsonStudentStore = Depends(get_student_store),
) -> StudentService:
    return StudentService(store)
