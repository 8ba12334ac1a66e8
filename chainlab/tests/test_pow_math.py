"""
Proof-of-Work Math 테스트

nBits 디코딩, 난이도, 2016 블록 재조정
"""

import pytest

from ..constants import GENESIS_NBITS
from ..math.pow_math import EXPECTED_TIMESPAN, decode_nbits, difficulty, retarget

GENESIS_TARGET = 0xFFFF << 208


class TestDecodeNBits:
    """decode_nbits 테스트"""

    def test_genesis(self):
        decoded = decode_nbits(GENESIS_NBITS)
        assert decoded.exponent == 0x1D
        assert decoded.mantissa == 0x00FFFF
        assert decoded.target == GENESIS_TARGET
        assert decoded.target_hex == "0x00ffff" + "00" * 26

    def test_small_exponent(self):
        """exponent < 3 이면 mantissa 를 오른쪽으로 민다"""
        decoded = decode_nbits(0x01123456)
        assert decoded.target == 0x12
        assert decoded.target_hex == "0x123456"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            decode_nbits(-1)
        with pytest.raises(ValueError):
            decode_nbits(1 << 32)


class TestDifficulty:
    """difficulty 테스트"""

    def test_genesis_is_one(self):
        assert difficulty(GENESIS_NBITS) == 1.0

    def test_harder_target(self):
        assert difficulty(0x1B0404CB) == pytest.approx(16307.420938523983, rel=1e-9)

    def test_zero_target(self):
        with pytest.raises(ValueError):
            difficulty(0x1D000000)


class TestRetarget:
    """retarget 테스트"""

    def test_on_schedule(self):
        assert retarget(GENESIS_TARGET, EXPECTED_TIMESPAN) == GENESIS_TARGET

    def test_twice_as_fast(self):
        """블록이 2배 빨랐으면 target 이 절반 (난이도 2배)"""
        assert retarget(GENESIS_TARGET, EXPECTED_TIMESPAN // 2) == GENESIS_TARGET // 2

    def test_clamped_low(self):
        assert retarget(GENESIS_TARGET, 1) == GENESIS_TARGET // 4

    def test_clamped_high(self):
        assert retarget(GENESIS_TARGET, EXPECTED_TIMESPAN * 10) == GENESIS_TARGET * 4

    def test_invalid_target(self):
        with pytest.raises(ValueError):
            retarget(0, EXPECTED_TIMESPAN)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
