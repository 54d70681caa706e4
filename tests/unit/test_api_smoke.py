"""
Module 05 - API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /tree returns the root, optionally layers and proofs
3. POST /proof returns a proof by index or address
4. POST /verify accepts valid proofs and rejects tampered ones
5. Domain errors map to 400 with a stable error code
"""

import logging

import pytest
from fastapi.testclient import TestClient

from api.app import _resolve_log_level, app, setup_logging
from api.deps import load_runtime_config
from core.config.runtime import LoggingConfig
from core.whitelist.commitment import WhitelistCommitment
from fixtures.common import EXTENDED_ENTRIES, REFERENCE_ENTRIES


# Create test client
client = TestClient(app)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a whitelist.yaml in the working directory from changing defaults."""
    monkeypatch.chdir(tmp_path)


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_ok(self):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "whitelist-merkle-api"

    def test_root_path(self):
        assert client.get("/").json()["ok"] is True


class TestTreeEndpoint:
    """Tests for POST /tree."""

    def test_tree_root(self):
        response = client.post("/tree", json={"entries": REFERENCE_ENTRIES})

        assert response.status_code == 200
        data = response.json()
        assert data["root"] == WhitelistCommitment.from_entries(REFERENCE_ENTRIES).hex_root
        assert data["leaf_count"] == 3
        assert data["codec"] == "packed"
        assert "layers" not in data
        assert "proofs" not in data

    def test_tree_object_entries(self):
        entries = [{"address": a, "amount": n} for a, n in REFERENCE_ENTRIES]

        response = client.post("/tree", json={"entries": entries})

        assert response.json()["root"] == WhitelistCommitment.from_entries(REFERENCE_ENTRIES).hex_root

    def test_tree_with_layers_and_proofs(self):
        response = client.post(
            "/tree",
            json={"entries": REFERENCE_ENTRIES, "include_layers": True, "include_proofs": True},
        )

        data = response.json()
        assert [len(layer) for layer in data["layers"]] == [3, 2, 1]
        assert [len(p["proof"]) for p in data["proofs"]] == [2, 2, 1]

    def test_tree_options(self):
        response = client.post(
            "/tree",
            json={"entries": REFERENCE_ENTRIES, "hash_function": "sha256", "codec": "padded", "sort_leaves": True},
        )

        data = response.json()
        assert data["hash_function"] == "sha256"
        assert data["codec"] == "padded"
        assert data["sort_leaves"] is True

    def test_tree_invalid_address(self):
        response = client.post("/tree", json={"entries": [["0x1234", 1]]})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "WHITELIST_LOAD_ERROR"

    def test_tree_unknown_hash(self):
        response = client.post("/tree", json={"entries": REFERENCE_ENTRIES, "hash_function": "md5"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNKNOWN_HASH_FUNCTION"

    def test_tree_empty_entries_returns_422(self):
        assert client.post("/tree", json={"entries": []}).status_code == 422


class TestProofEndpoint:
    """Tests for POST /proof."""

    def test_proof_by_index(self):
        response = client.post("/proof", json={"entries": REFERENCE_ENTRIES, "index": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["index"] == 2
        assert data["amount"] == 2
        assert len(data["proof"]) == 1

    def test_proof_by_address(self):
        response = client.post(
            "/proof",
            json={"entries": EXTENDED_ENTRIES, "address": "0xcc4c29997177253376528c05d3df91cf2d69061a"},
        )

        assert response.json()["index"] == 5

    def test_proof_needs_target(self):
        response = client.post("/proof", json={"entries": REFERENCE_ENTRIES})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_proof_both_targets(self):
        response = client.post(
            "/proof",
            json={"entries": REFERENCE_ENTRIES, "index": 0, "address": REFERENCE_ENTRIES[0][0]},
        )

        assert response.status_code == 400

    def test_proof_index_out_of_range(self):
        response = client.post("/proof", json={"entries": REFERENCE_ENTRIES, "index": 3})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INDEX_OUT_OF_RANGE"

    def test_proof_unknown_address(self):
        response = client.post("/proof", json={"entries": REFERENCE_ENTRIES, "address": "0x" + "11" * 20})

        assert response.json()["error"]["code"] == "LEAF_NOT_FOUND"


class TestVerifyEndpoint:
    """Tests for POST /verify."""

    def _proof(self, index: int) -> dict:
        return client.post("/proof", json={"entries": REFERENCE_ENTRIES, "index": index}).json()

    def test_verify_address_amount(self):
        proof = self._proof(1)

        response = client.post("/verify", json={
            "address": proof["address"],
            "amount": proof["amount"],
            "root": proof["root"],
            "proof": proof["proof"],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["verified"] is True
        assert data["leaf"] == proof["leaf"]

    def test_verify_leaf(self):
        proof = self._proof(2)

        response = client.post("/verify", json={"leaf": proof["leaf"], "root": proof["root"], "proof": proof["proof"]})

        assert response.json()["verified"] is True

    def test_verify_wrong_amount(self):
        proof = self._proof(2)

        response = client.post("/verify", json={
            "address": proof["address"],
            "amount": 3,
            "root": proof["root"],
            "proof": proof["proof"],
        })

        assert response.status_code == 200
        assert response.json()["verified"] is False

    def test_verify_missing_claim(self):
        response = client.post("/verify", json={"root": "0x" + "00" * 32, "proof": []})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_verify_malformed_sibling(self):
        proof = self._proof(0)

        response = client.post("/verify", json={
            "leaf": proof["leaf"],
            "root": proof["root"],
            "proof": ["0xzz"],
        })

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_PROOF"


class TestErrorHandling:
    """Tests for request validation errors."""

    def test_invalid_json_returns_422(self):
        response = client.post(
            "/tree",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    def test_missing_required_field_returns_422(self):
        assert client.post("/verify", json={"proof": []}).status_code == 422


class TestLoggingConfiguration:
    """API logging follows the runtime LoggingConfig."""

    def test_level_from_logging_config(self):
        assert _resolve_log_level(LoggingConfig(level="debug")) == logging.DEBUG

    def test_unknown_level_defaults_to_info(self):
        assert _resolve_log_level(LoggingConfig(level="chatty")) == logging.INFO

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("WHITELIST_LOG_LEVEL", "ERROR")

        assert _resolve_log_level(load_runtime_config().logging) == logging.ERROR

    def test_level_from_config_file(self, tmp_path):
        (tmp_path / "whitelist.yaml").write_text("logging:\n  level: WARNING\n")

        assert _resolve_log_level(load_runtime_config().logging) == logging.WARNING

    def test_log_file_handler(self, tmp_path, monkeypatch):
        log_file = tmp_path / "api.log"
        root_logger = logging.getLogger()
        monkeypatch.setattr(root_logger, "handlers", [])
        monkeypatch.setattr(root_logger, "level", root_logger.level)

        setup_logging(LoggingConfig(level="INFO", file=str(log_file)))
        try:
            assert any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
        finally:
            for handler in root_logger.handlers:
                handler.close()
