"""
Math layer for the course diagrams

다이어그램이 개별적으로 호출하는 순수 함수들:
- modular: 모듈러 거듭제곱, 확장 유클리드, 모듈러 역원
- rsa_math: 교과서 RSA
- ec_math: 장난감 타원곡선, 장난감 ECDSA
- amm_math: Impermanent Loss, Uniswap V2 스왑
- lending_math: Health Factor, 청산
- commitment: 시뮬레이션 커밋 해시, Pedersen, Schnorr
- r1cs: R1CS 제약 평가
- merkle: 머클 트리, 포함 증명
- pow_math: nBits 디코딩, 난이도 조정
"""

from .modular import (
    NoInverseError,
    mod_pow,
    extended_gcd,
    mod_inverse,
    is_prime,
    is_generator,
    cyclic_powers,
    multiplicative_order,
    modular_op,
    square_and_multiply_trace,
    euclid_trace,
    mod_pow_steps,
    extended_gcd_steps,
)
from .rsa_math import (
    RSAKeyPair,
    generate_keypair,
    encrypt,
    decrypt,
    sign,
    verify,
)
from .ec_math import (
    CurveGF,
    TOY_CURVE,
    add_points_real,
    real_curve_points,
    ecdsa_sign,
    ecdsa_verify,
)
from .amm_math import (
    calc_impermanent_loss,
    lp_vs_hodl,
    il_curve,
    fee_breakeven,
    breakeven_ratios,
    get_amount_out,
    swap,
    price_impact,
)
from .lending_math import (
    calc_health_factor,
    health_status,
    liquidation_price,
    simulate_liquidation,
)
from .commitment import (
    sim_commit_hash,
    pedersen_commit,
    verify_opening,
    add_commitments,
    schnorr_round,
)
from .r1cs import (
    R1CS,
    ConstraintCheck,
    cubic_example,
    cubic_witness,
    circuit_trace,
)
from .merkle import (
    ProofElement,
    display_hash,
    hash_concat,
    build_merkle_tree,
    merkle_root,
    get_merkle_proof,
    verify_proof,
)
from .pow_math import (
    CompactTarget,
    decode_nbits,
    difficulty,
    retarget,
)
