import json

import pytest

from sims.db.json_store import JsonStudentStore
from sims.schemas.student_schemas import StudentRecord
from sims.utils.errors import StorageUnavailable

from tests.conftest import SEED_STUDENTS, write_json


def read_file(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestSeeding:
    """Seeding from the bundled collection."""

    def test_missing_file_is_seeded(self, store, data_file):
        students = store.load_all()

        assert [s.model_dump(by_alias=True) for s in students] == SEED_STUDENTS
        assert read_file(data_file) == SEED_STUDENTS

    def test_empty_file_is_reseeded(self, store, data_file):
        write_json(data_file, [])

        students = store.load_all()

        assert len(students) == len(SEED_STUDENTS)
        assert read_file(data_file) == SEED_STUDENTS

    def test_reseed_is_idempotent(self, store):
        first = store.load_all()
        second = store.load_all()

        assert first == second

    def test_reseed_can_be_disabled(self, data_file, seed_file):
        write_json(data_file, [])
        store = JsonStudentStore(data_file, seed_file, reseed_when_empty=False)

        assert store.load_all() == []
        assert read_file(data_file) == []

    def test_existing_records_are_not_merged_with_seed(self, store, data_file, valid_student):
        write_json(data_file, [valid_student])

        students = store.load_all()

        assert [s.student_id for s in students] == ["BP-113-00001"]

    @pytest.mark.parametrize("content", ["{not json", '{"studentId": "x"}', "[1, 2]"])
    def test_corrupt_file_is_reseeded(self, store, data_file, content):
        data_file.parent.mkdir(parents=True)
        data_file.write_text(content, encoding="utf-8")

        students = store.load_all()

        assert len(students) == len(SEED_STUDENTS)
        assert read_file(data_file) == SEED_STUDENTS

    @pytest.mark.parametrize("bad_value", [True, {"nested": "x"}, ["Female"]])
    def test_mistyped_record_does_not_trigger_reseed(
        self, store, data_file, valid_student, bad_value
    ):
        stored = [
            valid_student,
            {**valid_student, "studentId": "BP-113-00009", "gender": bad_value},
        ]
        write_json(data_file, stored)

        with pytest.raises(StorageUnavailable):
            store.load_all()

        assert read_file(data_file) == stored

    def test_missing_seed_file_seeds_nothing(self, data_file, tmp_path):
        store = JsonStudentStore(data_file, tmp_path / "nowhere.json")

        assert store.load_all() == []

    def test_invalid_seed_file_is_storage_error(self, data_file, tmp_path):
        bad_seed = tmp_path / "bad_seed.json"
        bad_seed.write_text("nope", encoding="utf-8")
        store = JsonStudentStore(data_file, bad_seed)

        with pytest.raises(StorageUnavailable):
            store.load_all()

    def test_bundled_seed_is_valid(self):
        from sims.config.settings import DEFAULT_SEED_FILE
        from sims.utils.validators import validate_student

        raw = read_file(DEFAULT_SEED_FILE)

        assert raw
        assert len({r["studentId"] for r in raw}) == len(raw)
        for record in raw:
            validate_student(record)


class TestReplaceAll:
    """Atomic whole-collection writes."""

    def test_replace_all_round_trips(self, store, data_file, valid_student):
        store.replace_all([StudentRecord.model_validate(valid_student)])

        assert read_file(data_file) == [valid_student]
        assert store.load_all()[0].model_dump(by_alias=True) == valid_student

    def test_replace_all_leaves_no_temp_files(self, store, data_file, valid_student):
        store.load_all()
        store.replace_all([StudentRecord.model_validate(valid_student)])

        assert sorted(p.name for p in data_file.parent.iterdir()) == ["students.json"]

    def test_failed_write_keeps_previous_collection(
        self, store, data_file, valid_student, monkeypatch
    ):
        store.load_all()

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("sims.db.json_store.os.replace", failing_replace)

        with pytest.raises(StorageUnavailable):
            store.replace_all([StudentRecord.model_validate(valid_student)])

        monkeypatch.undo()
        assert read_file(data_file) == SEED_STUDENTS
        assert sorted(p.name for p in data_file.parent.iterdir()) == ["students.json"]


class TestStorageUnavailable:
    """I/O failures surface as StorageUnavailable."""

    def test_unwritable_directory(self, tmp_path, seed_file):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = JsonStudentStore(blocker / "students.json", seed_file)

        with pytest.raises(StorageUnavailable):
            store.load_all()

        with pytest.raises(StorageUnavailable):
            store.replace_all([])
