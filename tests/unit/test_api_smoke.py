"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. GET /distribution and GET /proofs/{index} expose the commitment
3. POST /claims pays once, then reports 409
4. Invalid proofs, bad amounts and failed transfers map to 400/502
5. Missing or mismatched configuration maps to 503
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import Distribution, load_distribution_from_config, set_distribution
from core.claims import ClaimService, InMemoryTransfer, TransferResult
from core.config.runtime import RuntimeConfig, set_default_config
from core.merkle import BalanceTree
from core.schemas.errors import RootMismatchError
from fixtures import ALICE, BOB, write_allocation


# Create test client
client = TestClient(app)


class RejectingTransfer:
    token = "DROP"

    def transfer(self, account, amount):
        return TransferResult.failure("treasury empty")


@pytest.fixture
def tree(two_entries):
    return BalanceTree(two_entries)


@pytest.fixture
def transfer():
    return InMemoryTransfer(token="DROP")


@pytest.fixture
def distribution(tree, transfer):
    dist = Distribution(tree=tree, service=ClaimService.from_tree(tree, transfer))
    set_distribution(dist)
    yield dist
    set_distribution(None)


def claim_body(tree, index, account, amount):
    return {
        "index": index,
        "account": account,
        "amount": amount,
        "proof": tree.hex_proof(index),
    }


class TestHealth:

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "merkle-distributor-api", "version": "v1"}

    def test_root(self):
        assert client.get("/").json()["ok"] is True


class TestDistributionEndpoints:

    def test_distribution_info(self, distribution, tree):
        data = client.get("/distribution").json()
        assert data == {
            "merkle_root": tree.hex_root,
            "token": "DROP",
            "entries": 2,
            "token_total": "2",
            "claimed": 0,
        }

    def test_proof(self, distribution, tree):
        response = client.get("/proofs/1")
        assert response.status_code == 200
        data = response.json()
        assert data["account"] == BOB
        assert data["amount"] == "1"
        assert data["proof"] == tree.hex_proof(1)
        assert data["merkle_root"] == tree.hex_root

    def test_proof_unknown_index(self, distribution):
        response = client.get("/proofs/2")
        assert response.status_code == 404
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "INDEX_OUT_OF_RANGE"


class TestClaimEndpoints:

    def test_claim_then_replay(self, distribution, tree, transfer):
        response = client.post("/claims", json=claim_body(tree, 0, ALICE, 1))
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["account"] == ALICE
        assert data["amount"] == "1"
        assert data["transfer_ref"] == "tx_1"
        assert transfer.balance_of(ALICE) == 1

        assert client.get("/claims/0").json() == {"index": 0, "claimed": True}
        assert client.get("/distribution").json()["claimed"] == 1

        replay = client.post("/claims", json=claim_body(tree, 0, ALICE, 1))
        assert replay.status_code == 409
        assert replay.json()["error"]["code"] == "ALREADY_CLAIMED"

    def test_amount_as_string(self, distribution, tree):
        response = client.post("/claims", json=claim_body(tree, 1, BOB, "1"))
        assert response.status_code == 200

    def test_wrong_amount(self, distribution, tree):
        response = client.post("/claims", json=claim_body(tree, 0, ALICE, 2))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PROOF"
        assert client.get("/claims/0").json()["claimed"] is False

    def test_unparsable_amount(self, distribution, tree):
        response = client.post("/claims", json=claim_body(tree, 0, ALICE, "lots"))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PROOF"

    def test_bad_account(self, distribution, tree):
        response = client.post("/claims", json=claim_body(tree, 0, "0x1234", 1))
        assert response.status_code == 400

    def test_swapped_index(self, distribution, tree):
        body = claim_body(tree, 0, ALICE, 1)
        body["index"] = 1
        response = client.post("/claims", json=body)
        assert response.status_code == 400

    def test_negative_index_is_schema_error(self, distribution, tree):
        body = claim_body(tree, 0, ALICE, 1)
        body["index"] = -1
        assert client.post("/claims", json=body).status_code == 422

    def test_unknown_claim_status(self, distribution):
        assert client.get("/claims/99").json() == {"index": 99, "claimed": False}

    def test_transfer_failure(self, tree):
        set_distribution(Distribution(tree=tree, service=ClaimService.from_tree(tree, RejectingTransfer())))
        try:
            response = client.post("/claims", json=claim_body(tree, 0, ALICE, 1))
            assert response.status_code == 502
            error = response.json()["error"]
            assert error["code"] == "TRANSFER_FAILED"
            assert error["details"]["rolled_back"] is False
        finally:
            set_distribution(None)


class TestConfiguration:

    def test_not_configured(self):
        set_distribution(None)
        set_default_config(RuntimeConfig())
        response = client.get("/distribution")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "NOT_CONFIGURED"

    def test_loaded_from_config(self, tmp_path, two_entries):
        path = write_allocation(tmp_path / "alloc.json", two_entries)
        set_distribution(None)
        set_default_config(RuntimeConfig.from_dict({
            "distribution": {"allocation_path": str(path), "token": "CFG"},
        }))
        try:
            data = client.get("/distribution").json()
            assert data["merkle_root"] == BalanceTree(two_entries).hex_root
            assert data["token"] == "CFG"
        finally:
            set_distribution(None)

    def test_root_mismatch(self, tmp_path, two_entries):
        path = write_allocation(tmp_path / "alloc.json", two_entries)
        set_distribution(None)
        set_default_config(RuntimeConfig.from_dict({
            "distribution": {"allocation_path": str(path), "merkle_root": "0x" + "00" * 32},
        }))
        response = client.get("/distribution")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "ROOT_MISMATCH"

    def test_undecodable_allocation(self, tmp_path):
        path = tmp_path / "alloc.json"
        path.write_bytes(b"\xff\xfe[]")
        set_distribution(None)
        set_default_config(RuntimeConfig.from_dict({
            "distribution": {"allocation_path": str(path)},
        }))
        response = client.get("/distribution")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "ALLOCATION_INVALID"

    def test_load_distribution_from_config(self, tmp_path, two_entries):
        path = write_allocation(tmp_path / "alloc.json", two_entries)
        root = BalanceTree(two_entries).hex_root
        config = RuntimeConfig.from_dict({
            "distribution": {"allocation_path": str(path), "merkle_root": root},
            "claims": {"rollback_on_transfer_failure": True},
        })

        dist = load_distribution_from_config(config)

        assert dist.service.hex_root == root
        assert dist.service.rollback_on_transfer_failure is True
        assert len(dist.tree) == 2

    def test_load_distribution_root_mismatch(self, tmp_path, two_entries):
        path = write_allocation(tmp_path / "alloc.json", two_entries)
        config = RuntimeConfig.from_dict({
            "distribution": {"allocation_path": str(path), "merkle_root": "0x" + "11" * 32},
        })
        with pytest.raises(RootMismatchError):
            load_distribution_from_config(config)
