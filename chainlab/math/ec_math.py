"""
Elliptic Curve Math - 장난감 타원곡선 연산

실수 위 곡선 (기하학적 덧셈 시각화)과 작은 소수체 GF(p) 위 곡선
(스칼라 곱, 위수, 장난감 ECDSA)을 다룬다.

⚠️ 교육용. 작은 파라미터라 보안성 없음. 실제 secp256k1은 256비트.

핵심 공식 (y^2 = x^3 + ax + b):
    P ≠ Q:  λ = (y_Q - y_P) / (x_Q - x_P)
    P = Q:  λ = (3x_P^2 + a) / (2y_P)
    x_R = λ^2 - x_P - x_Q
    y_R = λ(x_P - x_R) - y_P

ECDSA:
    R = kG, r = R.x mod n
    s = k^(-1) (h + r·d) mod n
    검증: u1 = h·s^(-1), u2 = r·s^(-1), (u1·G + u2·Q).x mod n == r
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .modular import mod_inverse
from ..constants import TOY_CURVE_P, TOY_CURVE_A, TOY_CURVE_B, TOY_CURVE_G, TOY_CURVE_N

Point = Tuple[int, int]
RealPoint = Tuple[float, float]

# 무한원점
INFINITY = None


@dataclass(frozen=True)
class CurveGF:
    """GF(p) 위의 곡선 y^2 = x^3 + ax + b"""
    p: int
    a: int
    b: int

    def contains(self, point: Optional[Point]) -> bool:
        if point is INFINITY:
            return True
        x, y = point
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0

    def points(self) -> List[Point]:
        """모든 아핀 점 (무한원점 제외)

        제곱잉여 테이블을 먼저 만들고 x마다 조회.
        """
        residues: Dict[int, List[int]] = {}
        for y in range(self.p):
            residues.setdefault((y * y) % self.p, []).append(y)

        result = []
        for x in range(self.p):
            rhs = (x * x * x + self.a * x + self.b) % self.p
            for y in residues.get(rhs, []):
                result.append((x, y))
        return result

    def negate(self, point: Optional[Point]) -> Optional[Point]:
        if point is INFINITY:
            return INFINITY
        x, y = point
        return x, (-y) % self.p

    def add(self, P: Optional[Point], Q: Optional[Point]) -> Optional[Point]:
        """점 덧셈 (P + Q)"""
        if P is INFINITY:
            return Q
        if Q is INFINITY:
            return P

        x1, y1 = P
        x2, y2 = Q

        if x1 == x2 and (y1 + y2) % self.p == 0:
            return INFINITY

        if P == Q:
            lam = (3 * x1 * x1 + self.a) * mod_inverse(2 * y1, self.p) % self.p
        else:
            lam = (y2 - y1) * mod_inverse(x2 - x1, self.p) % self.p

        x3 = (lam * lam - x1 - x2) % self.p
        y3 = (lam * (x1 - x3) - y1) % self.p
        return x3, y3

    def scalar_mult(self, k: int, P: Optional[Point]) -> Optional[Point]:
        """kP (double-and-add)"""
        if k < 0:
            return self.scalar_mult(-k, self.negate(P))

        result = INFINITY
        addend = P
        while k:
            if k & 1:
                result = self.add(result, addend)
            addend = self.add(addend, addend)
            k >>= 1
        return result

    def multiples(self, P: Point) -> List[Optional[Point]]:
        """P, 2P, 3P, ..., 무한원점까지"""
        result = [P]
        current = P
        while current is not INFINITY:
            current = self.add(current, P)
            result.append(current)
        return result

    def order(self, P: Optional[Point]) -> int:
        """nP = O 인 최소 n"""
        if P is INFINITY:
            return 1
        return len(self.multiples(P))


TOY_CURVE = CurveGF(TOY_CURVE_P, TOY_CURVE_A, TOY_CURVE_B)


def add_points_real(P: RealPoint, Q: RealPoint, a: float) -> Optional[RealPoint]:
    """실수 위 점 덧셈 (기하학적 chord/tangent)

    수직선이 되는 경우 (P = -Q 또는 y = 0 접선) 무한원점 None 반환.
    """
    x1, y1 = P
    x2, y2 = Q

    if abs(x1 - x2) < 1e-10 and abs(y1 - y2) < 1e-10:
        if abs(y1) < 1e-10:
            return None
        m = (3 * x1 * x1 + a) / (2 * y1)
    elif abs(x1 - x2) < 1e-10:
        return None
    else:
        m = (y2 - y1) / (x2 - x1)

    xr = m * m - x1 - x2
    yr = m * (x1 - xr) - y1
    return xr, yr


def real_curve_points(
    a: float,
    b: float,
    x_min: float = -4.0,
    x_max: float = 4.0,
    steps: int = 200
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """실수 곡선 y^2 = x^3 + ax + b 샘플링

    Returns:
        (xs, upper, lower) - rhs >= 0 인 x 와 ±sqrt(rhs)
    """
    xs = np.linspace(x_min, x_max, steps + 1)
    rhs = xs ** 3 + a * xs + b
    mask = rhs >= 0
    xs = xs[mask]
    upper = np.sqrt(rhs[mask])
    return xs, upper, -upper


def is_smooth(a: float, b: float) -> bool:
    """판별식 4a^3 + 27b^2 ≠ 0 (특이점 없음)"""
    return not math.isclose(4 * a ** 3 + 27 * b ** 2, 0.0, abs_tol=1e-12)


@dataclass(frozen=True)
class EcdsaSignature:
    """장난감 ECDSA 서명 (r, s)와 중간값"""
    r: int
    s: int
    R: Point


def ecdsa_sign(
    d: int,
    h: int,
    k: int,
    curve: CurveGF = TOY_CURVE,
    G: Point = TOY_CURVE_G,
    n: int = TOY_CURVE_N
) -> EcdsaSignature:
    """장난감 ECDSA 서명

    Args:
        d: 개인키 [1, n-1]
        h: 메시지 해시 (정수)
        k: nonce [1, n-1] - 서명마다 달라야 함 (재사용 시 개인키 노출)

    Raises:
        ValueError: r = 0 또는 s = 0 (다른 k 선택 필요)
    """
    R = curve.scalar_mult(k, G)
    if R is INFINITY:
        raise ValueError(f"kG가 무한원점입니다: k={k}")

    r = R[0] % n
    if r == 0:
        raise ValueError("r = 0, 다른 k를 선택하세요")

    s = mod_inverse(k, n) * (h + r * d) % n
    if s == 0:
        raise ValueError("s = 0, 다른 k를 선택하세요")

    return EcdsaSignature(r=r, s=s, R=R)


def ecdsa_verify(
    Q: Point,
    h: int,
    r: int,
    s: int,
    curve: CurveGF = TOY_CURVE,
    G: Point = TOY_CURVE_G,
    n: int = TOY_CURVE_N
) -> bool:
    """장난감 ECDSA 검증 (공개키 Q = dG)"""
    if not (1 <= r < n and 1 <= s < n):
        return False

    w = mod_inverse(s, n)
    u1 = h * w % n
    u2 = r * w % n
    X = curve.add(curve.scalar_mult(u1, G), curve.scalar_mult(u2, Q))
    if X is INFINITY:
        return False
    return X[0] % n == r
