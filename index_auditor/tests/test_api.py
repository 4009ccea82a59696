"""
HTTP surface tests.

The startup hook builds a real cluster client from the environment but
never contacts the cluster; cluster audits are exercised with a loader
double swapped into app.state.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from index_auditor.app.checks.base import Base
from index_auditor.app.cluster.index_list_loader import IndexListLoadError
from index_auditor.app.config import AuditorConfig
from index_auditor.app.coordinator.coordinator import AuditorCoordinator
from index_auditor.app.main import app
from index_auditor.tests.fixtures.index_factory import dynamic_text_field


def _payload() -> dict:
    return {
        "indices": {
            "logs": [
                {
                    "name": "logs-2024-01-01",
                    "mapping": {"properties": {"message": dynamic_text_field()}},
                }
            ],
            "customers": [{"name": "customers", "mapping": {}}],
        }
    }


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("INDEX_AUDITOR_MAX_INDEX_COUNT", "3")
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "index-auditor"}


def test_audit_returns_report(client):
    response = client.post("/audit", json=_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "offenses_detected"
    assert body["indices_audited"] == 2
    assert [f["finding_id"] for f in body["findings"]] == [
        "MAP-MIN-001",
        "NAME-MIN-001",
    ]
    assert body["findings"][0]["location"] == "properties.message"


def test_audit_clean_payload(client):
    response = client.post(
        "/audit",
        json={"indices": {"customers": [{"name": "customers"}]}},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "clean"


def test_audit_rejects_malformed_payload(client):
    response = client.post("/audit", json={"indices": {"g": [{"mapping": {}}]}})

    assert response.status_code == 422


def test_audit_rejects_oversize_index_list(client):
    payload = {
        "indices": {"g": [{"name": f"idx-{i}"} for i in range(4)]},
    }

    response = client.post("/audit", json=payload)

    assert response.status_code == 413


def test_audit_stream_ends_with_report(client):
    response = client.post("/audit/stream", json=_payload())

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    frames = [f for f in response.text.split("\n\n") if f]
    assert frames[0].startswith("event: audit_started")
    assert frames[-1].startswith("event: audit_completed")
    assert '"offenses_detected"' in frames[-1]


def test_cluster_audit(client):
    loader = MagicMock()
    loader.load.return_value = {}
    app.state.coordinator = AuditorCoordinator(
        AuditorConfig(), index_list_loader=loader
    )

    response = client.post("/audit/cluster")

    assert response.status_code == 200
    assert response.json()["status"] == "clean"
    loader.load.assert_called_once_with("*")


def test_cluster_audit_load_failure_maps_to_bad_gateway(client):
    loader = MagicMock()
    loader.load.side_effect = IndexListLoadError("cluster unavailable")
    app.state.coordinator = AuditorCoordinator(
        AuditorConfig(), index_list_loader=loader
    )

    response = client.post("/audit/cluster")

    assert response.status_code == 502
    assert "cluster unavailable" in response.json()["detail"]


class FailingCheck(Base):
    name = "failing"

    def check(self):
        raise ValueError("simulated check failure")


def test_audit_stream_ends_with_failure_event(client):
    app.state.coordinator = AuditorCoordinator(
        AuditorConfig(), checks=[FailingCheck]
    )

    response = client.post("/audit/stream", json=_payload())

    assert response.status_code == 200
    frames = [f for f in response.text.split("\n\n") if f]
    assert [f.split("\n", 1)[0] for f in frames] == [
        "event: audit_started",
        "event: check_started",
        "event: audit_failed",
    ]
    assert "simulated check failure" in frames[-1]
