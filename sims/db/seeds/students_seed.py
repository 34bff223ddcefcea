import json
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from sims.schemas.student_schemas import StudentRecord
from sims.utils.logging import get_logger

logger = get_logger()

_seed_adapter = TypeAdapter(List[StudentRecord])


def load_seed_students(seed_file: Path) -> List[StudentRecord]:
    """Read the bundled seed collection. A missing seed file means an empty seed."""
    if not seed_file.exists():
        logger.warning(f"Seed file not found: {seed_file}; seeding with no students")
        return []

    with open(seed_file, encoding="utf-8") as f:
        students = _seed_adapter.validate_python(json.load(f))

    logger.debug(f"Loaded {len(students)} seed students from {seed_file}")
    return students
