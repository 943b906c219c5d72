# Tests
import pytest
from fastapi.testclient import TestClient

from github_tree_fs.domain.exceptions import GitHubRateLimitError
from github_tree_fs.interface.app import create_app
from github_tree_fs.interface.dependencies import get_facade
from github_tree_fs.interface.schemas import ErrorResponse


@pytest.fixture
def client(facade):
    app = create_app()
    app.dependency_overrides[get_facade] = lambda: facade
    # no context manager: the lifespan (real GitHub client) is not started
    return TestClient(app)


# Route Tests
class TestRoutes:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "repository": "mockVendor/mockPackage@mockReference"}

    def test_exists(self, client):
        assert client.get("/exists", params={"path": "README"}).json() == {"path": "README", "exists": True}

    def test_contents(self, client):
        resp = client.get("/contents", params={"path": "README"})
        assert resp.status_code == 200
        assert resp.content == b"Read me first\n"

    def test_missing_contents_is_404(self, client):
        resp = client.get("/contents", params={"path": "missing"})
        assert resp.status_code == 404
        assert resp.json()["status"] == "error"

    def test_directory_metadata(self, client):
        body = client.get("/metadata", params={"path": "/a-directory/"}).json()

        assert body["type"] == "directory"
        assert body["timestamp"] == 200
        assert body["_links"]["self"] == body["url"]

    def test_missing_metadata_is_404(self, client):
        assert client.get("/metadata", params={"path": "missing"}).status_code == 404

    def test_listing(self, client):
        body = client.get("/listing", params={"path": "a-directory", "recursive": "true"}).json()
        assert [item["path"] for item in body] == ["a-directory/another-file.js", "a-directory/readme.txt"]

    def test_mimetype(self, client):
        assert client.get("/mimetype", params={"path": "README"}).json()["mimetype"] == "text/plain"

    def test_timestamps(self, client):
        updated = client.get("/timestamp", params={"path": "README"}).json()
        created = client.get("/timestamp", params={"path": "README", "created": "true"}).json()

        assert updated["timestamp"] == 300
        assert created["timestamp"] == 100

    def test_no_history_is_409(self, client):
        assert client.get("/timestamp", params={"path": "a-directory"}).status_code == 409

    def test_rate_limit_is_429(self, client, gateway):
        gateway.failures[("list_tree_recursive", None)] = GitHubRateLimitError("slow down")

        resp = client.get("/listing")

        assert resp.status_code == 429
        assert resp.json() == {"status": "error", "message": "slow down"}

    def test_error_responses_document_the_envelope(self, client):
        schema = client.get("/openapi.json").json()
        not_found = schema["paths"]["/metadata"]["get"]["responses"]["404"]

        assert not_found["content"]["application/json"]["schema"] == {"$ref": "#/components/schemas/ErrorResponse"}
        assert "ErrorResponse" in schema["components"]["schemas"]

    def test_error_body_matches_envelope_model(self, client):
        body = client.get("/metadata", params={"path": "missing"}).json()

        assert ErrorResponse.model_validate(body) == ErrorResponse(message="Not Found: missing")
