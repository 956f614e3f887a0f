"""Tests for the FastAPI service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from jsloc.config import JslocConfig
from jsloc.orchestrator import Orchestrator, analyze_source
from jsloc.service import app as service_app
from jsloc.service import create_app
from tests._fixtures.source_tree import SourceTreeBuilder


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    config = JslocConfig(root=tmp_path)
    return TestClient(create_app(lambda: Orchestrator(config)))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_source_endpoint(client: TestClient) -> None:
    response = client.post(
        "/analyze/source",
        json={"source": "let x = 1; // set x\n", "path": "inline.js"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "file"
    assert data["summary"] is None
    row = data["files"][0]
    assert row["SLOC"] == 2
    assert row["Logical SLOC"] == 1
    assert row["Comment Coverage %"] == 50.0
    assert row["file"] == "inline.js"


def test_analyze_source_runs_off_the_event_loop(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    loops = []

    def _recording_analyze(source, file_path=None):
        try:
            loops.append(asyncio.get_running_loop())
        except RuntimeError:
            loops.append(None)
        return analyze_source(source, file_path=file_path)

    monkeypatch.setattr(service_app, "analyze_source", _recording_analyze)

    response = client.post("/analyze/source", json={"source": "run();\n"})

    assert response.status_code == 200
    assert loops == [None]


def test_analyze_path_endpoint_for_directory(
    client: TestClient, source_tree: SourceTreeBuilder
) -> None:
    source_tree.write({"a.js": "a();\n", "b.js": "// note\nb();\n", "bad.js": b"\xff\xfe"})

    response = client.post("/analyze/path", json={"path": str(source_tree.path())})

    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "directory"
    assert data["summary"]["SLOC"] == 5
    assert [Path(row["file"]).name for row in data["files"]] == ["a.js", "b.js"]
    assert [Path(item["file"]).name for item in data["failures"]] == ["bad.js"]


def test_analyze_path_endpoint_for_file(
    client: TestClient, source_tree: SourceTreeBuilder
) -> None:
    source_tree.write({"a.js": "a();\n"})

    response = client.post("/analyze/path", json={"path": str(source_tree.path("a.js"))})

    assert response.status_code == 200
    assert response.json()["kind"] == "file"


def test_analyze_path_missing_returns_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/analyze/path", json={"path": str(tmp_path / "missing")})
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]
