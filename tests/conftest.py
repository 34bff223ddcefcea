import json
from pathlib import Path
from typing import Dict, Generator, List

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from pydantic import SecretStr

from sims.config.settings import ChatSettings
from sims.db.json_store import JsonStudentStore, get_student_store
from sims.main import create_application
from sims.services.chat_service import ChatService, get_chat_service
from sims.services.student_service import StudentService


SEED_STUDENTS: List[Dict[str, str]] = [
    {
        "studentId": "BM-113-00002",
        "fullName": "Nicolas Medina",
        "gender": "Male",
        "gmail": "nicolasmedina@gmail.com",
        "program": "BS Mathematics",
        "yearLevel": "5th Year",
        "university": "Caraga State University - Main Campus",
    },
    {
        "studentId": "BSIT-221-00003",
        "fullName": "Aurora Villanueva",
        "gender": "Female",
        "gmail": "auroravillanueva@gmail.com",
        "program": "BS Information Technology",
        "yearLevel": "2",
        "university": "Caraga State University - Cabadbaran Campus",
    },
]


def write_json(path: Path, payload) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def valid_student() -> Dict[str, str]:
    """The reference student used across tests."""
    return {
        "studentId": "BP-113-00001",
        "fullName": "Chelsea Greer",
        "gender": "Female",
        "gmail": "chelseagreer@gmail.com",
        "program": "BS Physics",
        "yearLevel": "5th Year",
        "university": "Caraga State University",
    }


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "seed" / "students_seed.json", SEED_STUDENTS)


@pytest.fixture
def empty_seed_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "seed" / "empty_seed.json", [])


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "students.json"


@pytest.fixture
def store(data_file: Path, seed_file: Path) -> JsonStudentStore:
    return JsonStudentStore(data_file=data_file, seed_file=seed_file)


@pytest.fixture
def empty_store(data_file: Path, empty_seed_file: Path) -> JsonStudentStore:
    """A store whose seed collection is empty, so it stays empty."""
    return JsonStudentStore(data_file=data_file, seed_file=empty_seed_file)


@pytest.fixture
def student_service(store: JsonStudentStore) -> StudentService:
    return StudentService(store)


@pytest.fixture
def chat_settings() -> ChatSettings:
    return ChatSettings(api_key=SecretStr("test-groq-key"), timeout_seconds=5)


@pytest.fixture
def fake_chat_model() -> FakeListChatModel:
    return FakeListChatModel(responses=["  There are 2 students.  "])


@pytest.fixture
def chat_service(
    chat_settings: ChatSettings,
    student_service: StudentService,
    fake_chat_model: FakeListChatModel,
) -> ChatService:
    return ChatService(chat_settings, student_service, chat_model=fake_chat_model)


def build_client(store: JsonStudentStore, chat_service: ChatService) -> TestClient:
    application = create_application()
    application.dependency_overrides[get_student_store] = lambda: store
    application.dependency_overrides[get_chat_service] = lambda: chat_service
    return TestClient(application)


@pytest.fixture
def client(
    store: JsonStudentStore, chat_service: ChatService
) -> Generator[TestClient, None, None]:
    with build_client(store, chat_service) as test_client:
        yield test_client


@pytest.fixture
def empty_client(
    empty_store: JsonStudentStore, chat_settings: ChatSettings, fake_chat_model
) -> Generator[TestClient, None, None]:
    """Client over a collection that stays empty after seeding."""
    service = ChatService(
        chat_settings, StudentService(empty_store), chat_model=fake_chat_model
    )
    with build_client(empty_store, service) as test_client:
        yield test_client
