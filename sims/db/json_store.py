import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import List, Sequence

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from sims.config.settings import settings
from sims.db.seeds.students_seed import load_seed_students
from sims.schemas.student_schemas import StudentRecord
from sims.utils.errors import StorageUnavailable
from sims.utils.logging import get_logger

logger = get_logger()

_students_adapter = TypeAdapter(List[StudentRecord])


class JsonStudentStore:
    """
    The whole student collection as one JSON array on disk.

    Reads return the full collection; writes replace it wholesale through a
    temporary file in the same directory followed by ``os.replace``, so a
    reader sees either the old or the new collection. Concurrent writers are
    not coordinated: the last ``replace_all`` wins.
    """

    def __init__(
        self,
        data_file: Path,
        seed_file: Path,
        reseed_when_empty: bool = True,
    ):
        self.data_file = Path(data_file)
        self.seed_file = Path(seed_file)
        self.reseed_when_empty = reseed_when_empty

    def load_all(self) -> List[StudentRecord]:
        """Return every stored student, seeding the data file first when needed"""
        try:
            return self._load_or_seed()
        except OSError as e:
            logger.error(f"Failed to read student data file {self.data_file}: {e}")
            raise StorageUnavailable("Failed to read students.") from e

    def replace_all(self, records: Sequence[StudentRecord]) -> None:
        """Atomically overwrite the stored collection with `records`"""
        try:
            self._write(records)
        except OSError as e:
            logger.error(f"Failed to write student data file {self.data_file}: {e}")
            raise StorageUnavailable("Failed to save students.") from e
        logger.debug(f"Wrote {len(records)} students to {self.data_file}")

    def _load_or_seed(self) -> List[StudentRecord]:
        if not self.data_file.exists():
            return self._seed("no data file")

        try:
            raw = self._read_raw()
        except ValueError as e:
            logger.warning(f"Student data file is unreadable, reseeding: {e}")
            return self._seed("unreadable data file")

        if not raw and self.reseed_when_empty:
            return self._seed("data file was empty")

        # Well-formed but mistyped records are never overwritten
        try:
            students = _students_adapter.validate_python(raw)
        except PydanticValidationError as e:
            logger.error(f"Student data file {self.data_file} has invalid records: {e}")
            raise StorageUnavailable("Failed to read students.") from e

        logger.debug(f"Loaded {len(students)} students from {self.data_file}")
        return students

    def _read_raw(self) -> List[dict]:
        with open(self.data_file, encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list) or not all(isinstance(r, dict) for r in raw):
            raise ValueError("expected a JSON array of student records")
        return raw

    def _seed(self, reason: str) -> List[StudentRecord]:
        try:
            seed = load_seed_students(self.seed_file)
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Seed collection {self.seed_file} is invalid: {e}")
            raise StorageUnavailable("Seed collection is unreadable.") from e

        self._write(seed)
        logger.info(f"Seeded {self.data_file} with {len(seed)} students ({reason})")
        return seed

    def _write(self, records: Sequence[StudentRecord]) -> None:
        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.model_dump(by_alias=True) for record in records]

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.data_file.name}.",
            suffix=".tmp",
            dir=self.data_file.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.data_file)
        except BaseException:
            with suppress(FileNotFoundError):
                os.unlink(tmp_path)
            raise


def get_student_store() -> JsonStudentStore:
    """Dependency to get the configured student store."""
    return JsonStudentStore(
        data_file=settings.DATA_FILE,
        seed_file=settings.SEED_FILE,
        reseed_when_empty=settings.RESEED_WHEN_EMPTY,
    )
