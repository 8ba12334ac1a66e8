"""
Proof-of-Work Math - nBits 압축 표기와 난이도 조정

핵심 공식:
    nBits = [exponent:1바이트][mantissa:3바이트]
    target = mantissa × 2^(8 × (exponent - 3))
    difficulty = genesis_target / target
    new_target = old_target × clamp(actual, expected/4, expected×4) / expected
"""

from typing import NamedTuple

from ..constants import (
    GENESIS_NBITS,
    RETARGET_INTERVAL,
    TARGET_BLOCK_TIME,
    MIN_ADJUSTMENT_FACTOR,
    MAX_ADJUSTMENT_FACTOR,
)


EXPECTED_TIMESPAN = RETARGET_INTERVAL * TARGET_BLOCK_TIME   # 2주 (초)


class CompactTarget(NamedTuple):
    exponent: int
    mantissa: int
    target: int
    target_hex: str     # '0x' + mantissa 6자리 + '00' × (exponent - 3)


def decode_nbits(nbits: int) -> CompactTarget:
    """nBits 압축 표기 디코딩

    Raises:
        ValueError: 32비트 부호 없는 정수 범위를 벗어난 경우

    Example:
        >>> decode_nbits(0x1d00ffff).exponent
        29
    """
    if not 0 <= nbits <= 0xFFFFFFFF:
        raise ValueError(f"nBits는 32비트 부호 없는 정수여야 합니다: {nbits}")

    exponent = (nbits >> 24) & 0xFF
    mantissa = nbits & 0x00FFFFFF
    if exponent >= 3:
        target = mantissa << (8 * (exponent - 3))
    else:
        target = mantissa >> (8 * (3 - exponent))

    target_hex = f"0x{mantissa:06x}" + "00" * max(0, exponent - 3)
    return CompactTarget(exponent=exponent, mantissa=mantissa, target=target, target_hex=target_hex)


def difficulty(nbits: int) -> float:
    """genesis target 대비 난이도 (genesis = 1.0)

    Raises:
        ValueError: target 이 0인 경우
    """
    target = decode_nbits(nbits).target
    if target == 0:
        raise ValueError(f"target이 0입니다: nBits=0x{nbits:08x}")
    return decode_nbits(GENESIS_NBITS).target / target


def retarget(old_target: int, actual_timespan: int) -> int:
    """2016 블록마다의 target 재조정

    실제 소요 시간은 기대값의 1/4 ~ 4배로 제한된다.
    블록이 빨랐으면 target 이 작아진다 (더 어려워짐).
    """
    if old_target <= 0:
        raise ValueError(f"target은 양수여야 합니다: {old_target}")
    low = int(EXPECTED_TIMESPAN * MIN_ADJUSTMENT_FACTOR)
    high = int(EXPECTED_TIMESPAN * MAX_ADJUSTMENT_FACTOR)
    clamped = min(max(actual_timespan, low), high)
    return old_target * clamped // EXPECTED_TIMESPAN
