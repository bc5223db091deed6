from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker

from grc.db import database
from payloads import grave_payload


def test_startup_creates_schema_on_fresh_database(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'registry.db'}"
    file_engine = create_engine(url, connect_args={"check_same_thread": False})
    monkeypatch.setattr(database, "engine", file_engine)
    monkeypatch.setattr(database, "SessionLocal", sessionmaker(autocommit=False, autoflush=False, bind=file_engine))
    assert inspect(file_engine).get_table_names() == []

    from grc.api.main import app

    try:
        with TestClient(app) as client:
            r = client.get("/graves/")
            assert r.status_code == 200
            assert r.json()["total_items"] == 0

            assert client.post("/graves/", json=grave_payload()).status_code == 201
            assert client.get("/graves/").json()["total_items"] == 1

        tables = set(inspect(file_engine).get_table_names())
        assert {"cemeteries", "graves", "burials", "covers", "grave_covers", "change_logs", "audit_logs"} <= tables
    finally:
        file_engine.dispose()
