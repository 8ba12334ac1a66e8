"""
Modular Math - 모듈러 연산

RSA, ECDSA, Schnorr 다이어그램이 공통으로 쓰는 정수론 헬퍼.

핵심 공식:
    mod_pow:        base^exp mod m  (square-and-multiply, O(log exp))
    extended_gcd:   a*x + b*y = gcd(a, b)
    mod_inverse:    a*x ≡ 1 (mod m)  (gcd(a, m) = 1 일 때만 존재)
"""

from typing import List, NamedTuple, Tuple

from ..data.types import Step, StepValue


class NoInverseError(ValueError):
    """gcd(a, m) != 1 이라 모듈러 역원이 없는 경우"""

    def __init__(self, a: int, m: int, gcd: int):
        self.a = a
        self.m = m
        self.gcd = gcd
        super().__init__(f"역원이 존재하지 않습니다: gcd({a}, {m}) = {gcd}")


def mod_pow(base: int, exp: int, mod: int) -> int:
    """모듈러 거듭제곱 (square-and-multiply)

    Args:
        base: 밑 (음수 허용, [0, mod)로 정규화)
        exp: 지수 (>= 0, 검증하지 않음)
        mod: 모듈러스 (> 0)

    Returns:
        base^exp mod mod

    Raises:
        ValueError: mod <= 0

    Example:
        >>> mod_pow(4, 13, 497)
        445
    """
    if mod <= 0:
        raise ValueError(f"모듈러스는 양수여야 합니다: {mod}")
    if mod == 1:
        return 0

    result = 1
    base = base % mod
    while exp > 0:
        if exp & 1:
            result = (result * base) % mod
        exp >>= 1
        base = (base * base) % mod
    return result


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """확장 유클리드 알고리즘 (재귀)

    Returns:
        (g, x, y): a*x + b*y = g
    """
    if a == 0:
        return b, 0, 1
    g, x1, y1 = extended_gcd(b % a, a)
    return g, y1 - (b // a) * x1, x1


def mod_inverse(a: int, m: int) -> int:
    """모듈러 역원 a^(-1) mod m

    Raises:
        ValueError: m <= 0
        NoInverseError: gcd(a, m) != 1
    """
    if m <= 0:
        raise ValueError(f"모듈러스는 양수여야 합니다: {m}")

    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        raise NoInverseError(a, m, g)
    return x % m


def is_prime(n: int) -> bool:
    """6k ± 1 시행 나눗셈 소수 판정"""
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def cyclic_powers(g: int, p: int) -> List[int]:
    """g^1, g^2, ..., g^(p-1) mod p"""
    powers = []
    current = 1
    for _ in range(p - 1):
        current = (current * g) % p
        powers.append(current)
    return powers


def is_generator(g: int, p: int) -> bool:
    """g가 Z*_p의 생성원인지 (거듭제곱이 p-1개 원소를 모두 방문)"""
    return len(set(cyclic_powers(g, p))) == p - 1


def multiplicative_order(g: int, p: int) -> int:
    """Z*_p 에서 g의 위수"""
    if extended_gcd(g % p, p)[0] != 1:
        raise ValueError(f"{g}은(는) Z*_{p}의 원소가 아닙니다")
    current = g % p
    order = 1
    while current != 1:
        current = (current * g) % p
        order += 1
    return order


def modular_op(a: int, b: int, n: int, op: str) -> int:
    """모듈러 계산기: a op b mod n

    Args:
        op: '+', '-', '*', '/', '^'

    Raises:
        ValueError: n <= 0, 지원하지 않는 연산
        NoInverseError: '/' 에서 b의 역원이 없는 경우
    """
    if n <= 0:
        raise ValueError(f"n은 양수여야 합니다: {n}")

    if op == "+":
        return (a + b) % n
    if op == "-":
        return (a - b) % n
    if op == "*":
        return (a * b) % n
    if op == "/":
        return (a * mod_inverse(b, n)) % n
    if op == "^":
        return mod_pow(a, b, n)
    raise ValueError(f"지원하지 않는 연산: {op}")


class ExpStep(NamedTuple):
    """square-and-multiply 한 비트 처리 결과 (왼쪽 비트부터)"""
    bit_index: int
    bit: int
    action: str
    value: int


class DivisionStep(NamedTuple):
    """유클리드 호제법 한 줄: a = q × b + r"""
    a: int
    b: int
    q: int
    r: int


def square_and_multiply_trace(base: int, exp: int, mod: int) -> List[ExpStep]:
    """지수의 이진 표현을 MSB부터 훑는 square-and-multiply 과정

    각 비트마다 제곱하고, 비트가 1이면 base를 곱한다.
    마지막 value는 mod_pow(base, exp, mod) 와 같다.

    Raises:
        ValueError: mod <= 0 또는 exp < 0
    """
    if mod <= 0:
        raise ValueError(f"모듈러스는 양수여야 합니다: {mod}")
    if exp < 0:
        raise ValueError(f"지수는 0 이상이어야 합니다: {exp}")
    if mod == 1:
        return [ExpStep(0, 0, "x mod 1 = 0", 0)]

    bits = [int(b) for b in bin(exp)[2:]]
    reduced = base % mod
    steps = []
    result = 1
    for i, bit in enumerate(bits):
        if i == 0:
            result = reduced if bit else 1
            action = f"start: {base} mod {mod} = {result}" if bit else "start: 1"
        else:
            prev = result
            result = prev * prev % mod
            action = f"square: {prev}^2 mod {mod} = {result}"
            if bit:
                result = result * reduced % mod
                action += f", multiply: * {base} mod {mod} = {result}"
        steps.append(ExpStep(i, bit, action, result))
    return steps


def euclid_trace(a: int, b: int) -> List[DivisionStep]:
    """유클리드 호제법 나눗셈 과정 (큰 수를 a로 정렬)

    마지막 줄의 b 가 gcd. 둘 중 하나가 0이면 한 줄 (a, 0, 0, 0).
    """
    x, y = max(abs(a), abs(b)), min(abs(a), abs(b))
    if y == 0:
        return [DivisionStep(x, 0, 0, 0)]

    steps = []
    while y > 0:
        q, r = divmod(x, y)
        steps.append(DivisionStep(x, y, q, r))
        x, y = y, r
    return steps


def mod_pow_steps(base: int, exp: int, mod: int) -> List[Step]:
    """square-and-multiply step-through 레코드"""
    trace = square_and_multiply_trace(base, exp, mod)
    bits = bin(exp)[2:]
    steps = [
        Step(
            title="Binary exponent",
            description="Write the exponent in binary and scan the bits from the most significant one.",
            formula=f"{exp} = {bits}b",
            values=(StepValue("bits", bits), StepValue("multiplications", f"<= {2 * len(trace)}")),
        )
    ]
    for entry in trace:
        steps.append(Step(
            title=f"Bit {entry.bit_index}: {entry.bit}",
            description="Square the running value; multiply by the base when the bit is 1.",
            formula=entry.action,
            values=(StepValue("value", str(entry.value)),),
        ))
    steps.append(Step(
        title="Result",
        description=f"{base}^{exp} mod {mod}",
        formula=f"{base}^{exp} mod {mod} = {trace[-1].value}",
        values=(StepValue("result", str(trace[-1].value)),),
    ))
    return steps


def extended_gcd_steps(a: int, b: int) -> List[Step]:
    """유클리드 호제법 + 베주 계수 step-through 레코드"""
    trace = euclid_trace(a, b)
    g, x, y = extended_gcd(a, b)
    steps = [
        Step(
            title=f"Division {i + 1}",
            description="Divide the larger number by the smaller one and keep the remainder.",
            formula=f"{row.a} = {row.q} × {row.b} + {row.r}",
            values=(StepValue("remainder", str(row.r)),),
        )
        for i, row in enumerate(trace)
        if row.b != 0
    ]
    steps.append(Step(
        title="GCD and Bezout coefficients",
        description="The last non-zero remainder is the gcd; back-substitution gives x and y.",
        formula=f"{a} × ({x}) + {b} × ({y}) = {g}",
        values=(
            StepValue("gcd", str(g)),
            StepValue("x", str(x)),
            StepValue("y", str(y)),
        ),
    ))
    return steps
