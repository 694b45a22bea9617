import time

import pytest
from fastapi.testclient import TestClient

from main import app
from services.pipeline.orchestrator import AnalysisOrchestrator

RESUME = """Jane Smith
jane.smith@example.com

Experience
Python Developer | Acme | 2019 - Present
- Built REST APIs with React and Docker, cutting latency by 30%

Skills
Python, React, Docker
"""

JD = "Requirements:\n- Python, React and Docker\n\nNice to have:\n- AWS"

client = TestClient(app)


@pytest.fixture
def live_client():
    """Client whose event loop stays up between requests so analyses can finish."""
    original = app.state.orchestrator
    app.state.orchestrator = AnalysisOrchestrator(publisher=app.state.event_log, min_step_duration=0)
    with TestClient(app) as c:
        yield c
    app.state.orchestrator = original


def _wait_for_finish(c: TestClient, analysis_id: str, timeout: float = 5.0) -> dict:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        status = c.get(f"/analysis/{analysis_id}/status").json()
        if status["status"] in ("completed", "failed"):
            return status
        time.sleep(0.02)
    raise AssertionError(f"analysis {analysis_id} did not finish")


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_job_requirements():
    response = client.post("/job-requirements", json={"job_description": JD})
    assert response.status_code == 200
    data = response.json()
    assert data["requirements"]["required_skills"] == ["python", "react", "docker"]
    assert data["requirements"]["preferred_skills"] == ["aws"]
    assert data["qualifications"]["required_qualifications"] == ["Python, React and Docker"]


def test_analysis_lifecycle(live_client):
    response = live_client.post("/analysis", json={"resume_text": RESUME, "job_description": JD})
    assert response.status_code == 202
    accepted = response.json()
    assert accepted["status"] == "pending"
    assert accepted["status_url"].endswith(f"/analysis/{accepted['id']}/status")

    status = _wait_for_finish(live_client, accepted["id"])
    assert status["status"] == "completed"
    assert status["percentage"] == 100

    result = live_client.get(f"/analysis/{accepted['id']}").json()
    assert 0 <= result["overall_score"] <= 100
    assert set(result["category_scores"]) == {"content", "structure", "keywords", "experience", "skills"}
    assert result["analysis"]["keyword_matching"]["missing_keywords"] == ["aws"]

    events = live_client.get(f"/analysis/{accepted['id']}/events").json()["events"]
    assert events[-1]["percentage"] == 100


def test_retry_and_cancel_completed(live_client):
    accepted = live_client.post("/analysis", json={"resume_text": RESUME}).json()
    _wait_for_finish(live_client, accepted["id"])

    cancel = live_client.post(f"/analysis/{accepted['id']}/cancel").json()
    assert cancel["cancelled"] is False

    retried = live_client.post(f"/analysis/{accepted['id']}/retry")
    assert retried.status_code == 202
    assert retried.json()["run"] == 2
    _wait_for_finish(live_client, accepted["id"])
    assert live_client.get(f"/analysis/{accepted['id']}").json()["run"] == 2


def test_blank_resume_is_rejected(live_client):
    response = live_client.post("/analysis", json={"resume_text": "   "})
    assert response.status_code == 422
    assert response.json()["detail"] == "Resume text is required"


def test_missing_resume_is_rejected():
    response = client.post("/analysis", json={"job_description": JD})
    assert response.status_code == 422


def test_unknown_analysis():
    response = client.get("/analysis/nope")
    assert response.status_code == 404
    assert response.json()["detail"] == "Analysis not found: nope"
    assert client.get("/analysis/nope/status").status_code == 404
    assert client.post("/analysis/nope/retry").status_code == 404
