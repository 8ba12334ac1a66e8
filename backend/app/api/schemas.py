"""
API Request/Response Schemas using Pydantic

Defines data models for the calculator and step-through endpoints.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional
from datetime import datetime


# ---------------------------------------------------------------------------
# Crypto
# ---------------------------------------------------------------------------

class ModPowRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/modpow"""
    base: int = Field(..., description="Base (any integer, reduced mod modulus)")
    exponent: int = Field(..., description="Exponent", ge=0)
    modulus: int = Field(..., description="Modulus", ge=1)

    class Config:
        json_schema_extra = {
            "example": {
                "base": 4,
                "exponent": 13,
                "modulus": 497
            }
        }


class ModPowResponse(BaseModel):
    """base^exponent mod modulus"""
    base: int
    exponent: int
    modulus: int
    result: int


class ModInverseRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/modinverse"""
    a: int = Field(..., description="Value to invert")
    m: int = Field(..., description="Modulus", gt=0)

    class Config:
        json_schema_extra = {
            "example": {
                "a": 17,
                "m": 3120
            }
        }


class ModInverseResponse(BaseModel):
    """Extended GCD trace and inverse (None when gcd != 1)"""
    a: int
    m: int
    gcd: int
    x: int = Field(..., description="Bezout coefficient of a")
    y: int = Field(..., description="Bezout coefficient of m")
    inverse: Optional[int] = Field(None, description="a^(-1) mod m, null when it does not exist")


class ModularOpRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/modular-op"""
    a: int
    b: int
    n: int = Field(..., description="Modulus", gt=0)
    op: Literal["+", "-", "*", "/", "^"] = Field(..., description="Operator")

    class Config:
        json_schema_extra = {
            "example": {
                "a": 7,
                "b": 5,
                "n": 13,
                "op": "/"
            }
        }


class ModularOpResponse(BaseModel):
    """Result of one modular calculator operation"""
    expression: str
    result: int


class RSARequest(BaseModel):
    """Request payload for POST /api/v1/crypto/rsa"""
    p: int = Field(..., description="First prime", gt=2)
    q: int = Field(..., description="Second prime", gt=2)
    e: int = Field(default=17, description="Public exponent", gt=1)
    message: Optional[int] = Field(None, description="Message to encrypt and sign (0 <= m < n)", ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "p": 61,
                "q": 53,
                "e": 17,
                "message": 65
            }
        }


class RSAResponse(BaseModel):
    """Textbook RSA key pair and optional round trip"""
    n: int
    phi: int
    e: int
    d: int
    ciphertext: Optional[int] = None
    decrypted: Optional[int] = None
    signature: Optional[int] = None
    signature_valid: Optional[bool] = None


class CurveParams(BaseModel):
    """Short Weierstrass curve y^2 = x^3 + ax + b over GF(p)"""
    p: int = Field(default=17, description="Field prime", gt=2)
    a: int = Field(default=2)
    b: int = Field(default=2)


class ECPointsResponse(BaseModel):
    """All affine points of a small curve"""
    curve: CurveParams
    points: List[List[int]]
    group_order: int = Field(..., description="Number of points including infinity")


class ECScalarRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/ec/multiply"""
    k: int = Field(..., description="Scalar")
    point: Optional[List[int]] = Field(None, description="Point [x, y], defaults to the toy generator")
    curve: CurveParams = Field(default_factory=CurveParams)

    class Config:
        json_schema_extra = {
            "example": {
                "k": 2,
                "point": [5, 1],
                "curve": {"p": 17, "a": 2, "b": 2}
            }
        }


class ECScalarResponse(BaseModel):
    """kP (null = point at infinity)"""
    k: int
    point: List[int]
    result: Optional[List[int]]


class EcdsaRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/ecdsa (toy curve, n = 19)"""
    d: int = Field(..., description="Private key", ge=1, le=18)
    h: int = Field(..., description="Message hash as integer", ge=0)
    k: int = Field(..., description="Nonce", ge=1, le=18)

    class Config:
        json_schema_extra = {
            "example": {
                "d": 7,
                "h": 10,
                "k": 3
            }
        }


class EcdsaResponse(BaseModel):
    """Toy ECDSA signature and verification"""
    public_key: List[int]
    R: List[int]
    r: int
    s: int
    valid: bool


class CommitHashRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/commit-hash"""
    value: int = Field(..., description="Committed value (low 16 bits used)", ge=0)
    randomness: int = Field(..., description="Blinding randomness (low 32 bits used)", ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "value": 7,
                "randomness": 13303297
            }
        }


class CommitHashResponse(BaseModel):
    """Simulated (non-cryptographic) commitment string"""
    commitment: str
    warning: str = "FNV-1a display mixer, not a cryptographic commitment"


class PedersenRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/pedersen"""
    value: int = Field(..., ge=0)
    randomness: int = Field(..., ge=0)
    add_value: Optional[int] = Field(None, description="Second value for the homomorphic sum", ge=0)
    add_randomness: Optional[int] = Field(None, ge=0)


class PedersenResponse(BaseModel):
    """C = g^v h^r mod p (and C1 * C2 when a second opening is given)"""
    p: int
    q: int
    g: int
    h: int
    commitment: int
    second_commitment: Optional[int] = None
    sum_commitment: Optional[int] = None
    sum_matches: Optional[bool] = None


class SchnorrRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/schnorr"""
    secret: int = Field(..., description="Prover secret x", ge=1)
    k: int = Field(..., description="Prover nonce", ge=1)
    challenge: int = Field(..., description="Verifier challenge c", ge=0)
    forged_response: Optional[int] = Field(None, description="Response picked by a cheater who does not know x", ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "secret": 7,
                "k": 4,
                "challenge": 3
            }
        }


class SchnorrResponse(BaseModel):
    """One Schnorr identification round"""
    public_key: int
    R: int
    c: int
    s: int
    lhs: int
    rhs: int
    valid: bool
    honest: bool


class MerkleProofRequest(BaseModel):
    """Request payload for POST /api/v1/crypto/merkle-proof"""
    labels: List[str] = Field(..., description="Transaction labels (leaves)", min_length=1, max_length=64)
    leaf_index: int = Field(..., description="Leaf to prove", ge=0)
    tampered_leaf: Optional[str] = Field(None, description="Verify this label instead of the real leaf")

    class Config:
        json_schema_extra = {
            "example": {
                "labels": ["tx1", "tx2", "tx3", "tx4", "tx5", "tx6", "tx7", "tx8"],
                "leaf_index": 2
            }
        }


class ProofElementModel(BaseModel):
    hash: str
    direction: Literal["left", "right"]
    level: int
    sibling_index: int


class MerkleProofResponse(BaseModel):
    """Merkle tree levels, inclusion proof and its verification trace"""
    levels: List[List[str]]
    root: str
    leaf_hash: str
    proof: List[ProofElementModel]
    computed_root: str
    valid: bool
    trace: List[str]
    warning: str = "FNV-1a display hash, not SHA-256"


class NBitsResponse(BaseModel):
    """Decoded compact target"""
    nbits: str
    exponent: int
    mantissa: int
    target_hex: str
    difficulty: float


# ---------------------------------------------------------------------------
# DeFi
# ---------------------------------------------------------------------------

class ImpermanentLossRequest(BaseModel):
    """Request payload for POST /api/v1/defi/impermanent-loss"""
    price_ratio: float = Field(..., description="P_new / P_initial", gt=0)
    initial_price: float = Field(default=2000.0, description="Initial token price (USD)", gt=0)
    fee_apr: float = Field(default=0.0, description="Fee revenue as a fraction (0.05 = 5%)", ge=0, lt=1)

    class Config:
        json_schema_extra = {
            "example": {
                "price_ratio": 4.0,
                "initial_price": 2000.0,
                "fee_apr": 0.05
            }
        }


class ImpermanentLossResponse(BaseModel):
    """IL and the LP vs HODL comparison"""
    price_ratio: float
    il: float = Field(..., description="Impermanent loss as a fraction (<= 0)")
    hodl_value: float
    lp_value: float
    net_with_fees: float = Field(..., description="fee_apr + il")
    breakeven_low: Optional[float] = None
    breakeven_high: Optional[float] = None


class HealthFactorRequest(BaseModel):
    """Request payload for POST /api/v1/defi/health-factor"""
    collateral_value: float = Field(..., description="Collateral value (USD)", ge=0)
    debt_value: float = Field(..., description="Debt value (USD)", ge=0)
    liquidation_threshold: float = Field(..., description="Liquidation threshold", gt=0, le=1)
    collateral_amount: Optional[float] = Field(None, description="Collateral units, enables liquidation price", gt=0)

    class Config:
        json_schema_extra = {
            "example": {
                "collateral_value": 20000.0,
                "debt_value": 12000.0,
                "liquidation_threshold": 0.825,
                "collateral_amount": 10.0
            }
        }


class HealthFactorResponse(BaseModel):
    """Health factor (null when there is no debt)"""
    health_factor: Optional[float] = Field(None, description="HF, null means infinite (no debt)")
    status: str
    status_range: str = Field(..., description="HF band of the status, e.g. 1.2 <= HF < 1.5")
    liquidation_price: Optional[float] = None


class SwapRequest(BaseModel):
    """Request payload for POST /api/v1/defi/swap"""
    amount_in: int = Field(..., description="Input amount (integer units)", gt=0)
    reserve_in: int = Field(..., gt=0)
    reserve_out: int = Field(..., gt=0)
    fee_bps: int = Field(default=30, description="Swap fee in basis points", ge=0, lt=10000)

    class Config:
        json_schema_extra = {
            "example": {
                "amount_in": 10,
                "reserve_in": 1000,
                "reserve_out": 2000000,
                "fee_bps": 30
            }
        }


class SwapResponse(BaseModel):
    """Uniswap V2 integer swap"""
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int
    price_impact: float


class LiquidationRequest(BaseModel):
    """Request payload for POST /api/v1/defi/liquidation"""
    debt_value: float = Field(..., gt=0)
    collateral_price: float = Field(..., gt=0)
    close_factor: float = Field(default=0.5, gt=0, le=1)
    bonus: float = Field(default=0.05, ge=0, lt=1)

    class Config:
        json_schema_extra = {
            "example": {
                "debt_value": 12000.0,
                "collateral_price": 1400.0,
                "close_factor": 0.5,
                "bonus": 0.05
            }
        }


class LiquidationResponse(BaseModel):
    """One liquidationCall from the liquidator's side"""
    debt_repaid: float
    collateral_seized: float
    collateral_value: float
    liquidator_profit: float


# ---------------------------------------------------------------------------
# ZK
# ---------------------------------------------------------------------------

class R1CSRequest(BaseModel):
    """Request payload for POST /api/v1/zk/r1cs"""
    A: List[List[int]]
    B: List[List[int]]
    C: List[List[int]]
    witness: List[int]
    modulus: Optional[int] = Field(None, description="Field modulus, null for plain integers", gt=1)

    class Config:
        json_schema_extra = {
            "example": {
                "A": [[0, 1, 0, 0, 0], [0, 0, 1, 0, 0], [5, 1, 0, 1, 0]],
                "B": [[0, 1, 0, 0, 0], [0, 1, 0, 0, 0], [1, 0, 0, 0, 0]],
                "C": [[0, 0, 1, 0, 0], [0, 0, 0, 1, 0], [0, 0, 0, 0, 1]],
                "witness": [1, 3, 9, 27, 35]
            }
        }


class ConstraintCheckModel(BaseModel):
    """(A_i . s) * (B_i . s) = (C_i . s)"""
    row: int
    a: int
    b: int
    c: int
    satisfied: bool


class R1CSResponse(BaseModel):
    checks: List[ConstraintCheckModel]
    satisfied: bool


class GateModel(BaseModel):
    id: str
    label: str
    op: str
    value: int


class CircuitResponse(BaseModel):
    """x^3 + x + 5 circuit evaluated at x"""
    x: int
    gates: List[GateModel]
    witness: List[int]
    valid: bool


# ---------------------------------------------------------------------------
# Diagrams
# ---------------------------------------------------------------------------

class StepValueModel(BaseModel):
    label: str
    value: str


class StepModel(BaseModel):
    """One step of a step-through diagram"""
    title: str
    description: str
    formula: str = ""
    values: List[StepValueModel] = []
    warning: Optional[str] = None


class SequenceResponse(BaseModel):
    name: str
    steps: List[StepModel]


class CursorRequest(BaseModel):
    """Request payload for POST /api/v1/diagrams/{name}/cursor"""
    history: List[int] = Field(default_factory=lambda: [0], description="Visited step indices, last is current", min_length=1)
    action: Literal["forward", "back", "reset", "jump"]
    index: Optional[int] = Field(None, description="Target step for action=jump")

    class Config:
        json_schema_extra = {
            "example": {
                "history": [0, 1],
                "action": "forward"
            }
        }


class CursorResponse(BaseModel):
    """Cursor state after the transition, with the current step"""
    history: List[int]
    current: int
    can_forward: bool
    can_back: bool
    total: int
    step: StepModel


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

class HealthCheckResponse(BaseModel):
    """Response for GET /api/v1/health endpoint"""
    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


class FixtureStatusResponse(BaseModel):
    """Response for GET /api/v1/fixtures/status endpoint"""
    fixture_dir: str
    fixtures: Dict[str, bool] = Field(..., description="Fixture name -> loads cleanly")
    status: str = Field(..., description="ready or degraded")

