"""Tests for SmartLang API endpoints."""
import pytest
import sys
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from api.main import app
from smartlang.errors import DivisionByZero


class TestHealthEndpoints:
    """Tests for health and root endpoints."""

    @pytest.fixture
    def client(self):
        """Create test client."""
        return TestClient(app)

    def test_health_check(self, client):
        """Test health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness(self, client):
        """Test readiness endpoint."""
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True
        assert response.json()["checks"]["runtime"] is True

    def test_readiness_reports_runtime_failure(self, client):
        """Test readiness goes false when the runtime check script fails."""
        with patch("api.routes.health.Interpreter.run", side_effect=DivisionByZero("broken")):
            response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json() == {"ready": False, "checks": {"runtime": False}}

    def test_root(self, client):
        """Test API root."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "SmartLang API"


class TestExecuteEndpoint:
    """Tests for /api/v1/execute endpoint."""

    @pytest.fixture
    def client(self):
        """Create test client."""
        return TestClient(app)

    def test_execute_missing_fields(self, client):
        """Test execute without script or contract."""
        response = client.post("/api/v1/execute", json={})
        assert response.status_code == 422

    def test_execute_success(self, client, sample_script, sample_balances):
        """Test executing the sample contract."""
        response = client.post("/api/v1/execute", json={
            "script": sample_script,
            "contract": "contract",
            "balances": sample_balances,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["results"][-1] == 90
        assert data["output"] == ["90"]
        assert data["balances"] == {"contract": 90, "alice": 60, "bob": 0}
        assert data["error"] is None

    def test_execute_language_error(self, client):
        """Test language errors are reported in the body."""
        response = client.post("/api/v1/execute", json={
            "script": "(define f (lambda () 1)) (provide g) (f)",
            "contract": "contract",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["error_kind"] == "CapabilityDenied"
        assert "f" in data["error"]

    def test_execute_options(self, client):
        """Test options map onto the execution config."""
        response = client.post("/api/v1/execute", json={
            "script": "(define f (lambda (n) (f n))) (f 1)",
            "contract": "contract",
            "options": {"max_steps": 25},
        })
        data = response.json()
        assert data["success"] is False
        assert data["error_kind"] == "ResourceExhausted"

    def test_execute_legacy(self, client):
        """Test legacy semantics through the API."""
        response = client.post("/api/v1/execute", json={
            "script": "(* 4 5)",
            "contract": "contract",
            "options": {"legacy_semantics": True},
        })
        assert response.json()["results"] == [9]

    def test_execute_trace(self, client):
        """Test trace is accepted and leaves the result unchanged."""
        response = client.post("/api/v1/execute", json={
            "script": "(define x 2) (* x 3)",
            "contract": "contract",
            "options": {"trace": True},
        })
        data = response.json()
        assert data["success"] is True
        assert data["results"] == [None, 6]

    def test_execute_negative_balance(self, client):
        """Test negative starting balances are rejected."""
        response = client.post("/api/v1/execute", json={
            "script": "1",
            "contract": "contract",
            "balances": {"contract": -1},
        })
        assert response.status_code == 422


class TestParseEndpoint:
    """Tests for /api/v1/parse endpoint."""

    @pytest.fixture
    def client(self):
        """Create test client."""
        return TestClient(app)

    def test_parse_valid(self, client):
        """Test parsing a valid script."""
        response = client.post("/api/v1/parse", json={"script": "(println 1) 2"})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["token_count"] == 5
        assert len(data["forms"]) == 2
        assert data["forms"][1] == {"type": "NUM", "value": 2}

    def test_parse_unbalanced(self, client):
        """Test parse reports unbalanced parentheses."""
        response = client.post("/api/v1/parse", json={"script": "(println 1"})
        data = response.json()
        assert data["valid"] is False
        assert data["errors"][0].startswith("UnbalancedParens")

    def test_parse_deeply_nested(self, client, deep_script):
        """Test a valid script too deep to dump still gets a parse response."""
        response = client.post("/api/v1/parse", json={"script": deep_script})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["forms"] == []
        assert data["token_count"] == 3000 * 4 + 1
        assert data["errors"][0].startswith("ResourceExhausted")
