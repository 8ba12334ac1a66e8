"""
Blockchain Course Diagram Calculator

블록체인/암호학/DeFi 강의 다이어그램에 쓰이는 수치 헬퍼 라이브러리.
모든 값은 교육용 시뮬레이션이며 실제 암호 연산이 아님.
"""

__version__ = "0.1.0"

from .constants import (
    TOY_CURVE_P, TOY_CURVE_A, TOY_CURVE_B, TOY_CURVE_G, TOY_CURVE_N,
    SCHNORR_P, SCHNORR_G, SCHNORR_Q,
    RSA_EXAMPLE_P, RSA_EXAMPLE_Q, RSA_EXAMPLE_E,
)
