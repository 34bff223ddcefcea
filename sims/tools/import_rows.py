"""
Merge pipe-separated student rows into the data file.

Usage:
    sims-import-rows "BP-113-00001 | Chelsea Greer | Female | chelseagreer@gmail.com | BS Physics | 5th Year | Caraga State University - Cabadbaran Campus"
    sims-import-rows --file rows.txt
    sims-import-rows --data-file ./data/students.json "..." "..."

Each row holds the seven fields in table order. Rows with the wrong number
of fields or a failing field rule are skipped with a warning; rows whose
student ID is already stored are not added again.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from sims.config.settings import settings
from sims.db.json_store import JsonStudentStore
from sims.schemas.student_schemas import ImportSummary, StudentRecord
from sims.utils.errors import StorageUnavailable, ValidationError
from sims.utils.logging import get_logger
from sims.utils.validators import STUDENT_FIELDS, validate_student

logger = get_logger()


def parse_rows(text: str) -> Tuple[List[StudentRecord], List[str]]:
    """Split text into records; returns (records, skipped-row messages)."""
    records: List[StudentRecord] = []
    skipped: List[str] = []

    for line in (raw.strip() for raw in text.splitlines()):
        if not line:
            continue
        parts = [part.strip() for part in line.split("|")]
        if len(parts) != len(STUDENT_FIELDS):
            skipped.append(f"Invalid: {line}")
            continue

        data = dict(zip(STUDENT_FIELDS, parts))
        try:
            validate_student(data)
        except ValidationError as e:
            skipped.append(f"{data['studentId'] or '(no id)'} → {e.message}")
            continue
        records.append(StudentRecord.model_validate(data))

    return records, skipped


def merge_rows(store: JsonStudentStore, text: str) -> ImportSummary:
    """Append parsed rows whose student ID is not stored yet"""
    rows, skipped = parse_rows(text)
    current = store.load_all()
    known_ids = {student.student_id for student in current}

    added = 0
    for row in rows:
        if row.student_id in known_ids:
            continue
        current.append(row)
        known_ids.add(row.student_id)
        added += 1

    store.replace_all(current)
    return ImportSummary(
        parsed=len(rows), added=added, total=len(current), skipped=skipped
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Merge pipe-separated student rows into the data file"
    )
    parser.add_argument("rows", nargs="*", help="Rows (or multi-line strings of rows)")
    parser.add_argument("--file", type=Path, help="Read rows from this text file")
    parser.add_argument(
        "--seed-file",
        type=Path,
        default=settings.SEED_FILE,
        help="Seed collection used when the data file is missing or empty",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=settings.DATA_FILE,
        help=f"Data file to update (default: {settings.DATA_FILE})",
    )

    args = parser.parse_args(argv)

    text = "\n".join(args.rows)
    if args.file:
        text = "\n".join([text, args.file.read_text(encoding="utf-8")])

    if not text.strip():
        print("Paste pipe-separated rows as argument.", file=sys.stderr)
        return 1

    store = JsonStudentStore(
        data_file=args.data_file,
        seed_file=args.seed_file,
        reseed_when_empty=settings.RESEED_WHEN_EMPTY,
    )

    try:
        summary = merge_rows(store, text)
    except StorageUnavailable as e:
        logger.error(f"Import failed: {e.message}")
        return 2

    for message in summary.skipped:
        logger.warning(f"Skip {message}")

    print(f"Added {summary.added} rows. New total: {summary.total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
