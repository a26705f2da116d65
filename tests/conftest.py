import json
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vaxdq.db.base import Base
from vaxdq.records.model import ImmunizationRecord

COMPLETE_RECORD: dict = {
    "doc_id": "DOC-00001",
    "patient_id": "PAT-0001",
    "status": "completed",
    "age": 4,
    "race": "2106-3",
    "ethnicity": "2186-5",
    "mobile": "555-1234",
    "email": "parent@example.com",
    "administered_date": "2024-05-01",
    "vaccine_name": "DTaP",
    "vfc_status": "V02",
    "funding_source": "VXC50",
    "quantity": "0.5",
    "units": "mL",
    "ndc": "49281-0286-10",
    "lot_number": "L1234",
    "expiration_date": "2025-01-31",
}


def build_record(**overrides) -> ImmunizationRecord:
    return ImmunizationRecord.from_dict({**COMPLETE_RECORD, **overrides})


@pytest.fixture
def make_record():
    """Factory for records that are complete unless overridden."""
    return build_record


@pytest.fixture()
def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()


API_RECORDS: list[dict] = [
    {**COMPLETE_RECORD, "doc_id": "DOC-A", "administered_date": "2024-05-01"},
    {**COMPLETE_RECORD, "doc_id": "DOC-B", "administered_date": "2024-05-02", "email": ""},
    {
        **COMPLETE_RECORD,
        "doc_id": "DOC-C",
        "administered_date": "2024-05-03",
        "vfc_status": "",
        "funding_source": "",
    },
    {**COMPLETE_RECORD, "doc_id": "DOC-D", "administered_date": "2024-05-04", "race": ""},
    {**COMPLETE_RECORD, "doc_id": "DOC-E", "administered_date": "2024-06-15"},
]


@pytest.fixture
def client(db_session, tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """TestClient over a temp record file with get_db bound to the in-memory session."""
    source = tmp_path / "immunization_data.json"
    source.write_text(json.dumps(API_RECORDS), encoding="utf-8")
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("RECORDS_SOURCE", str(source))
    monkeypatch.setenv("AUTO_CREATE_SCHEMA", "false")

    from vaxdq.core.settings import get_settings
    from vaxdq.db.session import reset_engine

    get_settings.cache_clear()
    reset_engine()

    from vaxdq.api.deps import get_db
    from vaxdq.main import app

    def _override_db():
        yield db_session
        db_session.commit()

    app.dependency_overrides[get_db] = _override_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

    get_settings.cache_clear()
    reset_engine()
    os.environ.pop("DATABASE_URL", None)
