"""
R1CS Math - Rank-1 Constraint System

산술 회로를 이차 제약식으로 표현. 각 행 i 에 대해:
    (A_i · s) × (B_i · s) = (C_i · s)

예제 회로 x^3 + x + 5 = out:
    s = [1, x, v1, v2, out]
    v1 = x * x
    v2 = v1 * x
    out = (v2 + x + 5) * 1
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from ..data.types import Step, StepValue

Matrix = Tuple[Tuple[int, ...], ...]

CUBIC_LABELS: Tuple[str, ...] = ("1", "x", "v1", "v2", "out")
CUBIC_TARGET: int = 35


class ConstraintCheck(NamedTuple):
    """한 제약식의 평가 결과"""
    row: int
    a: int  # A_i · s
    b: int  # B_i · s
    c: int  # C_i · s
    satisfied: bool


class Gate(NamedTuple):
    """산술 회로 게이트"""
    id: str
    label: str
    op: str  # INPUT / MUL / ADD
    value: int


def _dot(row: Sequence[int], witness: Sequence[int], modulus: Optional[int]) -> int:
    total = sum(coef * w for coef, w in zip(row, witness))
    return total % modulus if modulus else total


@dataclass(frozen=True)
class R1CS:
    """R1CS 시스템 (A, B, C 행렬, 선택적 유한체 모듈러스)"""
    A: Matrix
    B: Matrix
    C: Matrix
    labels: Tuple[str, ...] = ()
    modulus: Optional[int] = None

    def __post_init__(self):
        if not (len(self.A) == len(self.B) == len(self.C)):
            raise ValueError(
                f"행렬의 행 수가 다릅니다: A={len(self.A)}, B={len(self.B)}, C={len(self.C)}"
            )
        widths = {len(row) for matrix in (self.A, self.B, self.C) for row in matrix}
        if len(widths) > 1:
            raise ValueError(f"행렬의 열 수가 일정하지 않습니다: {sorted(widths)}")
        if self.labels and widths and len(self.labels) != widths.pop():
            raise ValueError("labels 길이가 열 수와 다릅니다")

    @property
    def num_constraints(self) -> int:
        return len(self.A)

    @property
    def num_variables(self) -> int:
        return len(self.A[0]) if self.A else 0

    def evaluate(self, witness: Sequence[int]) -> List[ConstraintCheck]:
        """각 행의 (A·s)(B·s) = (C·s) 검사

        Raises:
            ValueError: witness 길이가 변수 수와 다른 경우
        """
        if len(witness) != self.num_variables:
            raise ValueError(
                f"witness 길이 {len(witness)} != 변수 수 {self.num_variables}"
            )

        checks = []
        for i in range(self.num_constraints):
            a = _dot(self.A[i], witness, self.modulus)
            b = _dot(self.B[i], witness, self.modulus)
            c = _dot(self.C[i], witness, self.modulus)
            product = a * b % self.modulus if self.modulus else a * b
            checks.append(ConstraintCheck(row=i, a=a, b=b, c=c, satisfied=product == c))
        return checks

    def is_satisfied(self, witness: Sequence[int]) -> bool:
        return all(check.satisfied for check in self.evaluate(witness))


def cubic_example(modulus: Optional[int] = None) -> R1CS:
    """x^3 + x + 5 = out 회로의 R1CS (3 제약, 5 변수)"""
    return R1CS(
        A=((0, 1, 0, 0, 0),
           (0, 0, 1, 0, 0),
           (5, 1, 0, 1, 0)),
        B=((0, 1, 0, 0, 0),
           (0, 1, 0, 0, 0),
           (1, 0, 0, 0, 0)),
        C=((0, 0, 1, 0, 0),
           (0, 0, 0, 1, 0),
           (0, 0, 0, 0, 1)),
        labels=CUBIC_LABELS,
        modulus=modulus,
    )


def cubic_witness(x: int) -> List[int]:
    """s = [1, x, x^2, x^3, x^3 + x + 5]"""
    v1 = x * x
    v2 = v1 * x
    return [1, x, v1, v2, v2 + x + 5]


def circuit_trace(x: int) -> List[Gate]:
    """게이트별 값 (INPUT → MUL → MUL → ADD → ADD)"""
    v1 = x * x
    v2 = v1 * x
    v3 = v2 + x
    out = v3 + 5
    return [
        Gate("input", "x", "INPUT", x),
        Gate("g1", "v1 = x * x", "MUL", v1),
        Gate("g2", "v2 = v1 * x", "MUL", v2),
        Gate("g3", "v3 = v2 + x", "ADD", v3),
        Gate("g4", "out = v3 + 5", "ADD", out),
    ]


def is_valid_witness(x: int, target: int = CUBIC_TARGET) -> bool:
    """회로 출력이 target과 같은지 (기본 35 → x = 3)"""
    return circuit_trace(x)[-1].value == target


def r1cs_steps(x: int = 3) -> List[Step]:
    """R1CS 행렬 구성 step-through 레코드"""
    system = cubic_example()
    witness = cubic_witness(x)
    checks = system.evaluate(witness)
    witness_str = f"[{', '.join(map(str, witness))}]"
    row_titles = ("v1 = x * x", "v2 = v1 * x", "out = v2 + x + 5")

    steps = [
        Step(
            title="WITNESS VECTOR",
            description=f"s holds the constant 1, input x, intermediates v1, v2 and output out. For x={x}: s = {witness_str}.",
            formula=f"s = [{', '.join(system.labels)}]",
            values=(StepValue("s", witness_str),),
        )
    ]
    for check, title in zip(checks, row_titles):
        i = check.row
        steps.append(Step(
            title=f"CONSTRAINT {i + 1}: {title}",
            description=f"(A{i + 1} . s) * (B{i + 1} . s) = (C{i + 1} . s)",
            formula=f"{check.a} * {check.b} = {check.c}",
            values=(
                StepValue(f"A{i + 1}", str(list(system.A[i]))),
                StepValue(f"B{i + 1}", str(list(system.B[i]))),
                StepValue(f"C{i + 1}", str(list(system.C[i]))),
                StepValue("satisfied", str(check.satisfied)),
            ),
        ))

    summary = ", ".join(f"Row {c.row + 1}: {c.a}*{c.b}={c.c}" for c in checks)
    steps.append(Step(
        title="FULL R1CS SYSTEM",
        description=f"{system.num_constraints} constraints over {system.num_variables} variables.",
        formula="(A_i . s) * (B_i . s) = (C_i . s) for every row i",
        values=(
            StepValue("check", summary),
            StepValue("valid witness", str(all(c.satisfied for c in checks))),
        ),
    ))
    return steps
