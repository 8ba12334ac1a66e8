"""
Step-through sequences

버튼으로 넘기는 다이어그램을 불변 스텝 목록 + 히스토리 커서로 표현.
back / forward / reset 은 새 커서를 돌려주는 순수 전이이다.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..constants import RSA_EXAMPLE_P, RSA_EXAMPLE_Q, RSA_EXAMPLE_E, WETH_LIQUIDATION_THRESHOLD
from ..data.fixtures import fixture_steps
from ..data.types import Step
from ..math.amm_math import swap_steps
from ..math.lending_math import liquidation_steps
from ..math.merkle import merkle_proof_steps
from ..math.modular import extended_gcd_steps, mod_pow_steps
from ..math.r1cs import r1cs_steps
from ..math.rsa_math import keygen_steps


@dataclass(frozen=True)
class StepSequence:
    """순서가 있는 불변 스텝 목록"""
    name: str
    steps: Tuple[Step, ...]

    def __post_init__(self):
        if not self.steps:
            raise ValueError(f"빈 시퀀스입니다: {self.name}")

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def cursor(self) -> "StepCursor":
        return StepCursor(length=len(self.steps))


@dataclass(frozen=True)
class StepCursor:
    """방문 히스토리 (마지막 원소가 현재 위치)

    맨 끝에서 forward, 처음에서 back 은 아무것도 하지 않는다 (UI 비활성 버튼).
    """
    length: int
    history: Tuple[int, ...] = (0,)

    @property
    def current(self) -> int:
        return self.history[-1]

    @property
    def can_forward(self) -> bool:
        return self.current < self.length - 1

    @property
    def can_back(self) -> bool:
        return len(self.history) > 1

    def forward(self) -> "StepCursor":
        if not self.can_forward:
            return self
        return StepCursor(self.length, self.history + (self.current + 1,))

    def back(self) -> "StepCursor":
        if not self.can_back:
            return self
        return StepCursor(self.length, self.history[:-1])

    def reset(self) -> "StepCursor":
        return StepCursor(self.length)

    def jump(self, index: int) -> "StepCursor":
        """진행 바 클릭 - 임의 스텝으로 이동 (히스토리에 기록)"""
        if not 0 <= index < self.length:
            raise IndexError(f"스텝 인덱스가 범위를 벗어났습니다: {index} (0 ~ {self.length - 1})")
        if index == self.current:
            return self
        return StepCursor(self.length, self.history + (index,))


def _rsa_keygen(fixture_dir: Optional[str] = None) -> List[Step]:
    return keygen_steps(RSA_EXAMPLE_P, RSA_EXAMPLE_Q, RSA_EXAMPLE_E)


def _v2_swap(fixture_dir: Optional[str] = None) -> List[Step]:
    # 1,000 ETH / 2,000,000 USDC 풀에 10 ETH 스왑
    return swap_steps(10, 1_000, 2_000_000)


def _liquidation(fixture_dir: Optional[str] = None) -> List[Step]:
    # 10 ETH 담보, 12,000 USDC 부채, $2,000 → $1,400
    return liquidation_steps(10, 12_000, 2_000, 1_400, WETH_LIQUIDATION_THRESHOLD)


def _r1cs_matrix(fixture_dir: Optional[str] = None) -> List[Step]:
    return r1cs_steps()


def _mod_pow(fixture_dir: Optional[str] = None) -> List[Step]:
    # 3^13 mod 17
    return mod_pow_steps(3, 13, 17)


def _euclid_gcd(fixture_dir: Optional[str] = None) -> List[Step]:
    return extended_gcd_steps(252, 105)


def _merkle_proof(fixture_dir: Optional[str] = None) -> List[Step]:
    # tx1..tx8 중 tx3 의 포함 증명
    return merkle_proof_steps(leaf_index=2)


def _ecdsa_signing(fixture_dir: Optional[str] = None) -> List[Step]:
    return fixture_steps("ecdsa_signing", fixture_dir)


# 모든 빌더는 fixture_dir 를 받는다 (계산형 빌더는 무시)
SEQUENCE_BUILDERS: Dict[str, Callable[[Optional[str]], List[Step]]] = {
    "rsa_keygen": _rsa_keygen,
    "r1cs_matrix": _r1cs_matrix,
    "v2_swap": _v2_swap,
    "liquidation": _liquidation,
    "mod_pow": _mod_pow,
    "euclid_gcd": _euclid_gcd,
    "merkle_proof": _merkle_proof,
    "ecdsa_signing": _ecdsa_signing,
}


def list_sequences() -> List[str]:
    return sorted(SEQUENCE_BUILDERS)


def get_sequence(name: str, fixture_dir: Optional[str] = None) -> StepSequence:
    """이름으로 시퀀스 조회

    Args:
        fixture_dir: 픽스처 기반 시퀀스를 읽을 디렉토리 (None이면 패키지 내장)

    Raises:
        KeyError: 등록되지 않은 이름
    """
    if name not in SEQUENCE_BUILDERS:
        raise KeyError(f"알 수 없는 시퀀스: {name}")
    return StepSequence(name=name, steps=tuple(SEQUENCE_BUILDERS[name](fixture_dir)))
