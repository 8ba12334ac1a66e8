"""
Elliptic Curve Math 테스트

장난감 곡선 y^2 = x^3 + 2x + 2 mod 17, G = (5, 1), 위수 19
"""

import math

import numpy as np
import pytest

from ..constants import TOY_CURVE_G, TOY_CURVE_N
from ..math.ec_math import (
    CurveGF,
    TOY_CURVE,
    add_points_real,
    real_curve_points,
    is_smooth,
    ecdsa_sign,
    ecdsa_verify,
)


class TestCurveGF:
    """유한체 위 곡선 연산 테스트"""

    def test_generator_on_curve(self):
        assert TOY_CURVE.contains(TOY_CURVE_G)
        assert TOY_CURVE.contains(None)
        assert not TOY_CURVE.contains((5, 2))

    def test_points_count(self):
        """무한원점 포함 19개 → 아핀 점 18개"""
        points = TOY_CURVE.points()
        assert len(points) == 18
        assert all(TOY_CURVE.contains(p) for p in points)

    def test_doubling(self):
        assert TOY_CURVE.add(TOY_CURVE_G, TOY_CURVE_G) == (6, 3)
        assert TOY_CURVE.scalar_mult(2, TOY_CURVE_G) == (6, 3)

    def test_tripling(self):
        assert TOY_CURVE.scalar_mult(3, TOY_CURVE_G) == (10, 6)

    def test_order(self):
        assert TOY_CURVE.order(TOY_CURVE_G) == TOY_CURVE_N
        assert TOY_CURVE.scalar_mult(TOY_CURVE_N, TOY_CURVE_G) is None
        assert TOY_CURVE.scalar_mult(TOY_CURVE_N + 1, TOY_CURVE_G) == TOY_CURVE_G

    def test_inverse(self):
        """P + (-P) = O"""
        P = TOY_CURVE.scalar_mult(5, TOY_CURVE_G)
        assert TOY_CURVE.add(P, TOY_CURVE.negate(P)) is None
        assert TOY_CURVE.scalar_mult(-5, TOY_CURVE_G) == TOY_CURVE.negate(P)

    def test_identity(self):
        assert TOY_CURVE.add(None, TOY_CURVE_G) == TOY_CURVE_G
        assert TOY_CURVE.add(TOY_CURVE_G, None) == TOY_CURVE_G

    def test_multiples_cover_group(self):
        """G는 생성원: 1G..18G 가 모든 아핀 점"""
        multiples = TOY_CURVE.multiples(TOY_CURVE_G)
        affine = [p for p in multiples if p is not None]
        assert sorted(affine) == sorted(TOY_CURVE.points())

    def test_small_curve(self):
        curve = CurveGF(p=7, a=0, b=7)
        assert all(curve.contains(p) for p in curve.points())


class TestRealCurve:
    """실수 위 곡선 테스트"""

    A, B = -3.0, 5.0

    def _on_curve(self, point):
        x, y = point
        return math.isclose(y * y, x ** 3 + self.A * x + self.B, rel_tol=1e-9, abs_tol=1e-9)

    def test_chord(self):
        P = (1.0, math.sqrt(3.0))
        Q = (-1.0, math.sqrt(7.0))
        assert self._on_curve(add_points_real(P, Q, self.A))

    def test_tangent(self):
        P = (1.0, math.sqrt(3.0))
        assert self._on_curve(add_points_real(P, P, self.A))

    def test_vertical_line(self):
        P = (1.0, math.sqrt(3.0))
        assert add_points_real(P, (1.0, -math.sqrt(3.0)), self.A) is None

    def test_sampled_points(self):
        xs, upper, lower = real_curve_points(self.A, self.B)
        np.testing.assert_allclose(upper ** 2, xs ** 3 + self.A * xs + self.B, atol=1e-9)
        np.testing.assert_allclose(lower, -upper)

    def test_is_smooth(self):
        assert is_smooth(self.A, self.B)
        assert not is_smooth(0, 0)
        assert not is_smooth(-3, 2)  # 4(-27) + 27(4) = 0


class TestToyEcdsa:
    """장난감 ECDSA 테스트"""

    def test_sign_known_values(self):
        signature = ecdsa_sign(d=7, h=10, k=3)
        assert signature.R == (10, 6)
        assert signature.r == 10
        assert signature.s == 14

    def test_verify(self):
        Q = TOY_CURVE.scalar_mult(7, TOY_CURVE_G)
        signature = ecdsa_sign(d=7, h=10, k=3)
        assert ecdsa_verify(Q, 10, signature.r, signature.s)

    def test_verify_wrong_hash(self):
        Q = TOY_CURVE.scalar_mult(7, TOY_CURVE_G)
        signature = ecdsa_sign(d=7, h=10, k=3)
        assert not ecdsa_verify(Q, 11, signature.r, signature.s)

    def test_verify_out_of_range(self):
        Q = TOY_CURVE.scalar_mult(7, TOY_CURVE_G)
        assert not ecdsa_verify(Q, 10, 0, 14)
        assert not ecdsa_verify(Q, 10, 10, TOY_CURVE_N)

    def test_all_nonces_roundtrip(self):
        """s ≠ 0 인 모든 nonce에서 검증 성공"""
        Q = TOY_CURVE.scalar_mult(7, TOY_CURVE_G)
        for k in range(1, TOY_CURVE_N):
            try:
                signature = ecdsa_sign(d=7, h=10, k=k)
            except ValueError:
                continue
            assert ecdsa_verify(Q, 10, signature.r, signature.s)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
