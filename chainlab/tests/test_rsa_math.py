"""
RSA Math 테스트

교과서 예제 p = 61, q = 53, e = 17 로 검증합니다.
"""

import pytest

from ..math.modular import NoInverseError
from ..math.rsa_math import generate_keypair, encrypt, decrypt, sign, verify, keygen_steps


@pytest.fixture
def key():
    return generate_keypair(61, 53, 17)


class TestGenerateKeypair:
    """generate_keypair 테스트"""

    def test_textbook_values(self, key):
        assert key.n == 3233
        assert key.phi == 3120
        assert key.d == 2753

    def test_non_prime(self):
        with pytest.raises(ValueError):
            generate_keypair(60, 53, 17)

    def test_equal_primes(self):
        with pytest.raises(ValueError):
            generate_keypair(61, 61, 17)

    def test_e_not_coprime(self):
        """phi = 3120 은 3의 배수"""
        with pytest.raises(NoInverseError):
            generate_keypair(61, 53, 3)


class TestEncryptDecrypt:
    """암호화/복호화 테스트"""

    def test_known_ciphertext(self, key):
        """65^17 mod 3233 = 2790"""
        assert encrypt(65, key) == 2790
        assert decrypt(2790, key) == 65

    def test_out_of_range(self, key):
        with pytest.raises(ValueError):
            encrypt(3233, key)
        with pytest.raises(ValueError):
            decrypt(-1, key)


class TestSignVerify:
    """서명/검증 테스트"""

    def test_valid_signature(self, key):
        signature = sign(123, key)
        assert verify(123, signature, key)

    def test_tampered_message(self, key):
        signature = sign(65, key)
        assert not verify(66, signature, key)


class TestKeygenSteps:
    """키 생성 step-through 테스트"""

    def test_steps(self):
        steps = keygen_steps(61, 53, 17)
        assert len(steps) == 5
        assert steps[1].values[0].value == "61 × 53 = 3233"
        assert steps[-1].values[0].value == "2753"
        assert steps[-1].values[1].value.endswith("= 1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
