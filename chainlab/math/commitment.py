"""
Commitment Math - 커밋먼트와 Schnorr 증명

⚠️ SECURITY WARNING:
    sim_commit_hash 는 FNV-1a 32비트 정수 믹서로, 브라우저에서 커밋 값의
    "모양"을 흉내내기 위한 것이다. 암호학적 해시가 아니며 binding/hiding
    어느 성질도 보장하지 않는다. 표시용으로만 사용.

pedersen_commit / schnorr_round 는 작은 곱셈군 위의 장난감 구현:
    C = g^v · h^r mod p           (C(a)·C(b) = C(a+b, r1+r2))
    Schnorr: R = g^k, s = k + c·x mod q, 검증 g^s == R · P^c mod p
"""

from typing import Iterable, NamedTuple, Optional

from .modular import mod_pow
from ..constants import (
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    UINT32_MASK,
    PEDERSEN_P,
    PEDERSEN_Q,
    PEDERSEN_G,
    PEDERSEN_H,
    SCHNORR_P,
    SCHNORR_Q,
    SCHNORR_G,
)


class GroupParams(NamedTuple):
    """위수 q인 부분군 <g> ⊂ Z*_p (Pedersen은 두 번째 생성원 h 사용)"""
    p: int
    q: int
    g: int
    h: Optional[int] = None


PEDERSEN_GROUP = GroupParams(p=PEDERSEN_P, q=PEDERSEN_Q, g=PEDERSEN_G, h=PEDERSEN_H)
SCHNORR_GROUP = GroupParams(p=SCHNORR_P, q=SCHNORR_Q, g=SCHNORR_G)


class SchnorrRound(NamedTuple):
    """Schnorr 식별 프로토콜 한 라운드"""
    k: int
    R: int
    c: int
    s: int
    lhs: int
    rhs: int
    valid: bool
    honest: bool


def fnv1a_32(data: Iterable[int]) -> int:
    """FNV-1a 32비트 (bytes 또는 UTF-16 코드 유닛 등 정수 시퀀스)"""
    h = FNV_OFFSET_BASIS
    for unit in data:
        h ^= unit
        h = (h * FNV_PRIME) & UINT32_MASK
    return h


def sim_commit_hash(value: int, randomness: int) -> str:
    """시뮬레이션 커밋 해시 (NOT cryptographic, 표시용)

    value 하위 2바이트와 randomness 하위 4바이트를 little-endian으로 섞는다.

    Returns:
        '0x' + 8자리 hex + '...' (잘린 해시처럼 보이도록)
    """
    data = bytes([
        value & 0xFF,
        (value >> 8) & 0xFF,
        randomness & 0xFF,
        (randomness >> 8) & 0xFF,
        (randomness >> 16) & 0xFF,
        (randomness >> 24) & 0xFF,
    ])
    return f"0x{fnv1a_32(data):08x}..."


def pedersen_commit(value: int, randomness: int, group: GroupParams = PEDERSEN_GROUP) -> int:
    """C = g^v · h^r mod p"""
    if group.h is None:
        raise ValueError("Pedersen 커밋에는 두 번째 생성원 h가 필요합니다")
    gv = mod_pow(group.g, value % group.q, group.p)
    hr = mod_pow(group.h, randomness % group.q, group.p)
    return gv * hr % group.p


def verify_opening(
    commitment: int,
    value: int,
    randomness: int,
    group: GroupParams = PEDERSEN_GROUP
) -> bool:
    """(value, randomness)가 commitment를 여는지 확인"""
    return pedersen_commit(value, randomness, group) == commitment


def add_commitments(c1: int, c2: int, group: GroupParams = PEDERSEN_GROUP) -> int:
    """준동형 덧셈: C(a) · C(b) = C(a + b, r1 + r2)"""
    return c1 * c2 % group.p


def schnorr_round(
    secret: int,
    k: int,
    challenge: int,
    group: GroupParams = SCHNORR_GROUP,
    forged_response: Optional[int] = None
) -> SchnorrRound:
    """Schnorr 한 라운드 (결정적; 난수 k, c 는 호출자가 공급)

    Args:
        secret: 증명자의 비밀 x (공개키 P = g^x)
        k: 증명자 nonce
        challenge: 검증자 챌린지 c
        forged_response: 주어지면 x를 모르는 사기꾼이 고른 s
    """
    P = mod_pow(group.g, secret, group.p)
    R = mod_pow(group.g, k, group.p)

    honest = forged_response is None
    if honest:
        s = (k + challenge * secret) % group.q
    else:
        s = forged_response % group.q

    lhs = mod_pow(group.g, s, group.p)
    rhs = R * mod_pow(P, challenge, group.p) % group.p
    return SchnorrRound(
        k=k, R=R, c=challenge, s=s,
        lhs=lhs, rhs=rhs, valid=lhs == rhs, honest=honest,
    )
