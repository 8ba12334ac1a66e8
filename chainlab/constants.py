"""
강의 다이어그램 상수 정의

교육용 소형 파라미터:
- TOY_CURVE_*: 작은 소수체 위의 타원곡선 (secp256k1 구조의 축소판)
- SCHNORR_*: Schnorr 프로토콜용 소형 곱셈군
- RSA_EXAMPLE_*: 교과서 RSA 예제
- HF_*: Health Factor 상태 경계값
- FNV_*: 시뮬레이션 커밋 해시 (FNV-1a 32비트) 상수
- GENESIS_NBITS, RETARGET_*: Bitcoin 난이도 조정
"""

from typing import Dict, Tuple

# 타원곡선 y^2 = x^3 + 2x + 2 (mod 17), G = (5, 1), 위수 19 (소수)
TOY_CURVE_P: int = 17
TOY_CURVE_A: int = 2
TOY_CURVE_B: int = 2
TOY_CURVE_G: Tuple[int, int] = (5, 1)
TOY_CURVE_N: int = 19

# Schnorr: p = 23, g = 2, g의 위수 q = 11
SCHNORR_P: int = 23
SCHNORR_G: int = 2
SCHNORR_Q: int = 11

# Pedersen 커밋용 소형 군 (p = 2q + 1)
PEDERSEN_P: int = 23
PEDERSEN_Q: int = 11
PEDERSEN_G: int = 4
PEDERSEN_H: int = 9

# RSA 교과서 예제: n = 3233, phi = 3120, d = 2753
RSA_EXAMPLE_P: int = 61
RSA_EXAMPLE_Q: int = 53
RSA_EXAMPLE_E: int = 17

# Health Factor 상태 경계
HF_LIQUIDATION: float = 1.0
HF_DANGER: float = 1.2
HF_WARNING: float = 1.5

# Aave 스타일 청산 파라미터
DEFAULT_CLOSE_FACTOR: float = 0.5     # 부채의 최대 50% 상환
DEFAULT_LIQUIDATION_BONUS: float = 0.05  # 5% 보너스
WETH_LIQUIDATION_THRESHOLD: float = 0.825

# Uniswap V2 수수료 (basis points)
V2_FEE_BPS: int = 30
BPS_DENOMINATOR: int = 10000

# FNV-1a 32비트
FNV_OFFSET_BASIS: int = 0x811c9dc5
FNV_PRIME: int = 0x01000193
UINT32_MASK: int = 0xFFFFFFFF

# Merkle 표시용 해시의 avalanche 라운드 승수
MERKLE_MIX_MULTIPLIER: int = 0x045d9f3b

# Bitcoin 난이도 조정
GENESIS_NBITS: int = 0x1d00ffff
RETARGET_INTERVAL: int = 2016          # 블록
TARGET_BLOCK_TIME: int = 600           # 초
MIN_ADJUSTMENT_FACTOR: float = 0.25
MAX_ADJUSTMENT_FACTOR: float = 4.0

# Health Factor 상태 라벨
HF_STATUS_LABELS: Dict[str, str] = {
    "LIQUIDATED": "HF < 1.0",
    "DANGER": "1.0 <= HF < 1.2",
    "WARNING": "1.2 <= HF < 1.5",
    "SAFE": "HF >= 1.5",
}
