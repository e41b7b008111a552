from pathlib import Path

import pytest
from fastapi.testclient import TestClient


def _configure_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_file.as_posix()}")
    monkeypatch.setenv("AUTO_CREATE_USER", "true")
    monkeypatch.setenv("BOOTSTRAP_USER_LOGIN", "demo")
    monkeypatch.setenv("BOOTSTRAP_USER_PASSWORD", "demo12345")
    monkeypatch.setenv("API_V1_PREFIX", "")


@pytest.fixture()
def db_factory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _configure_environment(tmp_path, monkeypatch)

    from qualifications import models  # noqa: F401
    from qualifications.core.config import clear_settings_cache
    from qualifications.db.base import Base
    from qualifications.db.session import get_engine, get_session_factory, reset_engine

    clear_settings_cache()
    reset_engine()
    Base.metadata.create_all(bind=get_engine())

    yield get_session_factory()

    Base.metadata.drop_all(bind=get_engine())
    reset_engine()


@pytest.fixture()
def owner_id(db_factory) -> str:
    from qualifications.core.security import hash_password
    from qualifications.models.user import User

    with db_factory() as db:
        user = User(login="owner", password_hash=hash_password("secret"))
        db.add(user)
        db.commit()
        return user.id


@pytest.fixture()
def qualification_id(db_factory, owner_id) -> str:
    from qualifications.services.grading import QualificationService

    with db_factory() as db:
        subject = QualificationService(db).create_subject(owner_id=owner_id, code="CONC", name="Concurrency")
        return subject.qualifications[0].id


@pytest.fixture()
def app_client(db_factory):
    from qualifications.main import create_app

    app = create_app()
    with TestClient(app) as client:
        yield client


def auth_headers(client: TestClient, login: str = "demo", password: str = "demo12345") -> dict[str, str]:
    response = client.post("/auth/login", json={"login": login, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, login: str, password: str = "password1") -> dict[str, str]:
    response = client.post("/auth/register", json={"login": login, "password": password})
    assert response.status_code == 201, response.text
    return auth_headers(client, login, password)


def create_subject(client: TestClient, headers: dict[str, str], code: str = "MAT101", name: str = "Mathematics") -> dict:
    response = client.post("/subjects", headers=headers, json={"code": code, "name": name})
    assert response.status_code == 201, response.text
    return response.json()


def first_qualification_id(subject: dict) -> str:
    return next(item["id"] for item in subject["qualifications"] if item["cort"] == 1)
