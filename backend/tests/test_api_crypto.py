"""
API tests for the crypto endpoints
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


class TestModularEndpoints:
    """modpow / modinverse / modular-op"""

    def test_modpow(self):
        response = client.post("/api/v1/crypto/modpow", json={"base": 4, "exponent": 13, "modulus": 497})
        assert response.status_code == 200
        assert response.json()["result"] == 445

    def test_modpow_modulus_one(self):
        response = client.post("/api/v1/crypto/modpow", json={"base": 5, "exponent": 3, "modulus": 1})
        assert response.json()["result"] == 0

    def test_modpow_validation(self):
        """Negative exponent and zero modulus are rejected by the schema"""
        response = client.post("/api/v1/crypto/modpow", json={"base": 4, "exponent": -1, "modulus": 497})
        assert response.status_code == 422
        response = client.post("/api/v1/crypto/modpow", json={"base": 4, "exponent": 1, "modulus": 0})
        assert response.status_code == 422

    def test_modpow_exponent_limit(self):
        response = client.post("/api/v1/crypto/modpow", json={"base": 2, "exponent": 2 ** 5000, "modulus": 7})
        assert response.status_code == 400

    def test_modinverse(self):
        response = client.post("/api/v1/crypto/modinverse", json={"a": 17, "m": 3120})
        data = response.json()
        assert data["inverse"] == 2753
        assert data["gcd"] == 1
        assert 17 * data["x"] + 3120 * data["y"] == 1

    def test_modinverse_missing(self):
        response = client.post("/api/v1/crypto/modinverse", json={"a": 6, "m": 9})
        assert response.status_code == 200
        assert response.json()["inverse"] is None
        assert response.json()["gcd"] == 3

    def test_modular_op(self):
        response = client.post("/api/v1/crypto/modular-op", json={"a": 7, "b": 5, "n": 13, "op": "/"})
        assert response.json()["result"] == 4

    def test_modular_op_no_inverse(self):
        response = client.post("/api/v1/crypto/modular-op", json={"a": 1, "b": 4, "n": 8, "op": "/"})
        assert response.status_code == 400

    def test_modular_op_bad_operator(self):
        response = client.post("/api/v1/crypto/modular-op", json={"a": 1, "b": 4, "n": 8, "op": "%"})
        assert response.status_code == 422


class TestRSAEndpoint:
    """Textbook RSA"""

    def test_keypair_and_roundtrip(self):
        response = client.post("/api/v1/crypto/rsa", json={"p": 61, "q": 53, "e": 17, "message": 65})
        data = response.json()
        assert response.status_code == 200
        assert (data["n"], data["phi"], data["d"]) == (3233, 3120, 2753)
        assert data["ciphertext"] == 2790
        assert data["decrypted"] == 65
        assert data["signature_valid"] is True

    def test_not_prime(self):
        response = client.post("/api/v1/crypto/rsa", json={"p": 60, "q": 53})
        assert response.status_code == 400

    def test_message_too_large(self):
        response = client.post("/api/v1/crypto/rsa", json={"p": 61, "q": 53, "message": 5000})
        assert response.status_code == 400


class TestEllipticCurveEndpoints:
    """Toy curve points, scalar multiplication, ECDSA"""

    def test_points(self):
        data = client.get("/api/v1/crypto/ec/points").json()
        assert len(data["points"]) == 18
        assert data["group_order"] == 19
        assert [5, 1] in data["points"]

    def test_multiply(self):
        response = client.post("/api/v1/crypto/ec/multiply", json={"k": 2})
        assert response.json()["result"] == [6, 3]

    def test_multiply_to_infinity(self):
        response = client.post("/api/v1/crypto/ec/multiply", json={"k": 19, "point": [5, 1]})
        assert response.json()["result"] is None

    def test_point_not_on_curve(self):
        response = client.post("/api/v1/crypto/ec/multiply", json={"k": 2, "point": [5, 2]})
        assert response.status_code == 400

    def test_ecdsa(self):
        data = client.post("/api/v1/crypto/ecdsa", json={"d": 7, "h": 10, "k": 3}).json()
        assert (data["r"], data["s"]) == (10, 14)
        assert data["valid"] is True


class TestCommitmentEndpoints:
    """Simulated hash, Pedersen, Schnorr"""

    def test_commit_hash_format(self):
        data = client.post("/api/v1/crypto/commit-hash", json={"value": 7, "randomness": 13303297}).json()
        assert data["commitment"].startswith("0x")
        assert data["commitment"].endswith("...")
        assert len(data["commitment"]) == 13

    def test_pedersen_sum(self):
        payload = {"value": 3, "randomness": 5, "add_value": 4, "add_randomness": 2}
        data = client.post("/api/v1/crypto/pedersen", json=payload).json()
        assert data["sum_matches"] is True

    def test_schnorr_honest(self):
        data = client.post("/api/v1/crypto/schnorr", json={"secret": 7, "k": 4, "challenge": 3}).json()
        assert data["honest"] is True
        assert data["valid"] is True
        assert data["lhs"] == data["rhs"]

    def test_schnorr_forged(self):
        payload = {"secret": 7, "k": 4, "challenge": 3, "forged_response": 0}
        data = client.post("/api/v1/crypto/schnorr", json=payload).json()
        assert data["honest"] is False
        assert data["valid"] is False


class TestMerkleAndNBits:
    """POST /crypto/merkle-proof and GET /crypto/nbits"""

    LABELS = ["tx1", "tx2", "tx3", "tx4", "tx5"]

    def test_merkle_proof_valid(self):
        data = client.post("/api/v1/crypto/merkle-proof", json={"labels": self.LABELS, "leaf_index": 4}).json()
        assert [len(level) for level in data["levels"]] == [5, 3, 2, 1]
        assert len(data["proof"]) == 3
        assert data["valid"] is True
        assert data["computed_root"] == data["root"]

    def test_merkle_proof_tampered(self):
        payload = {"labels": self.LABELS, "leaf_index": 1, "tampered_leaf": "tx2-forged"}
        data = client.post("/api/v1/crypto/merkle-proof", json=payload).json()
        assert data["valid"] is False
        assert data["trace"][-1] == "INVALID"

    def test_merkle_leaf_out_of_range(self):
        response = client.post("/api/v1/crypto/merkle-proof", json={"labels": self.LABELS, "leaf_index": 5})
        assert response.status_code == 400

    def test_merkle_empty_labels(self):
        response = client.post("/api/v1/crypto/merkle-proof", json={"labels": [], "leaf_index": 0})
        assert response.status_code == 422

    def test_nbits_genesis(self):
        data = client.get("/api/v1/crypto/nbits").json()
        assert data["nbits"] == "0x1d00ffff"
        assert data["exponent"] == 29
        assert data["mantissa"] == 0xFFFF
        assert data["difficulty"] == 1.0

    def test_nbits_decimal(self):
        data = client.get("/api/v1/crypto/nbits", params={"value": str(0x1B0404CB)}).json()
        assert data["nbits"] == "0x1b0404cb"
        assert data["difficulty"] > 16000

    def test_nbits_invalid(self):
        assert client.get("/api/v1/crypto/nbits", params={"value": "zz"}).status_code == 400
        assert client.get("/api/v1/crypto/nbits", params={"value": "0x1ffffffff"}).status_code == 400


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
