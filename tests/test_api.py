"""Tests for the resume analysis HTTP API."""

import pytest
from fastapi.testclient import TestClient

from dashboard.app import app
from dashboard.api.resume import get_analyzer


@pytest.fixture
def client():
    return TestClient(app)


def analyze(client, text, name, template='software-engineer'):
    response = client.post("/api/resume/analyze", json={
        "resumeText": text,
        "candidateName": name,
        "candidateRole": "Software Engineer",
        "jobTemplate": template,
    })
    assert response.status_code == 200
    return response.json()["analysis"]


class TestHealth:
    """Tests for service endpoints."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_api_route(self, client):
        """Test unknown API routes return JSON 404s."""
        response = client.get("/api/resume/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}

    def test_profiles(self, client):
        """Test job templates are listed."""
        response = client.get("/api/resume/profiles")

        assert response.status_code == 200
        ids = [p["id"] for p in response.json()]
        assert "software-engineer" in ids
        assert "student" in ids


class TestAnalyzeEndpoint:
    """Tests for POST /api/resume/analyze."""

    def test_analyze(self, client, weak_resume):
        """Test a resume is analyzed and returned in wire format."""
        analysis = analyze(client, weak_resume, "Alex")

        assert analysis["candidateName"] == "Alex"
        assert "JavaScript" in analysis["keywordAnalysis"]["matched"]
        assert analysis["sectionAnalysis"]["summary"] is False
        assert set(analysis["atsScore"]) == {
            "overall", "keywordMatch", "formatting", "sectionCompleteness", "readability"
        }
        assert "rank" not in analysis
        titles = [r["title"] for r in analysis["recommendations"]]
        assert "Add Professional Summary" in titles

    def test_analyze_custom_job_description(self, client, sample_resume):
        """Test a custom job description is used for keywords."""
        response = client.post("/api/resume/analyze", json={
            "resumeText": sample_resume,
            "candidateName": "Jane",
            "candidateRole": "Engineer",
            "customJobDescription": "Python engineer with Kubernetes and Docker",
        })

        keywords = response.json()["analysis"]["keywordAnalysis"]
        assert "python" in keywords["matched"]
        assert "kubernetes" in keywords["missing"]

    def test_analyze_validation_error(self, client):
        """Test missing fields are rejected."""
        response = client.post("/api/resume/analyze", json={"candidateName": "Alex"})

        assert response.status_code == 422

    def test_analyze_internal_error(self, client):
        """Test unexpected failures become a 500 without details."""

        class BrokenAnalyzer:
            def analyze(self, *args, **kwargs):
                raise RuntimeError("boom")

        app.dependency_overrides[get_analyzer] = lambda: BrokenAnalyzer()
        try:
            response = client.post("/api/resume/analyze", json={
                "resumeText": "text", "candidateName": "Alex", "candidateRole": "Engineer",
            })
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestRankEndpoint:
    """Tests for POST /api/resume/rank."""

    def test_rank(self, client, sample_resume, weak_resume):
        """Test analyses are ranked and summarized."""
        analyses = [
            analyze(client, weak_resume, "Alex"),
            analyze(client, sample_resume, "Jane"),
        ]

        response = client.post("/api/resume/rank", json={
            "analyses": analyses,
            "jobTemplate": "software-engineer",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["totalResumes"] == 2
        ranked = data["rankedAnalyses"]
        assert [r["candidateName"] for r in ranked] == ["Jane", "Alex"]
        assert [r["rank"] for r in ranked] == [1, 2]
        assert all(0 <= r["rankingScore"] <= 100 for r in ranked)
        assert data["insights"]["scoreDistribution"] is not None
        assert "rankingDate" in data

    def test_rank_keeps_ai_recommendations(self, client, weak_resume):
        """Test AI-sourced recommendations survive the round trip."""
        analysis = analyze(client, weak_resume, "Alex")
        analysis["recommendations"].append({
            "type": "suggestion",
            "category": "ai_enhanced",
            "title": "Quantify results",
            "description": "Add numbers to bullets",
            "impact": "medium",
            "confidence": 0.6,
            "aiGenerated": True,
        })

        response = client.post("/api/resume/rank", json={"analyses": [analysis]})

        ranked = response.json()["rankedAnalyses"][0]
        assert ranked["recommendations"][-1]["aiGenerated"] is True
        assert ranked["recommendations"][-1]["confidence"] == 0.6

    def test_rank_empty(self, client):
        """Test an empty batch is rejected."""
        response = client.post("/api/resume/rank", json={"analyses": []})

        assert response.status_code == 400
        assert response.json() == {"error": "No analyses provided"}

    def test_rank_invalid_recommendation(self, client, weak_resume):
        """Test records that do not match the schema are rejected."""
        analysis = analyze(client, weak_resume, "Alex")
        analysis["recommendations"][0]["type"] = "urgent"

        response = client.post("/api/resume/rank", json={"analyses": [analysis]})

        assert response.status_code == 422
