"""
Crypto Endpoints

Modular arithmetic, textbook RSA, toy elliptic curves, commitments and Schnorr.
All parameters are toy-sized; nothing here is fit for real keys.
"""
from fastapi import APIRouter, HTTPException

from chainlab.constants import TOY_CURVE_G
from chainlab.math.modular import (
    NoInverseError,
    mod_pow,
    extended_gcd,
    mod_inverse,
    modular_op,
)
from chainlab.math.rsa_math import generate_keypair, encrypt, decrypt, sign, verify
from chainlab.math.ec_math import CurveGF, TOY_CURVE, ecdsa_sign, ecdsa_verify
from chainlab.math.commitment import (
    PEDERSEN_GROUP,
    SCHNORR_GROUP,
    sim_commit_hash,
    pedersen_commit,
    add_commitments,
    schnorr_round,
)
from chainlab.math.merkle import build_merkle_tree, display_hash, get_merkle_proof, verify_proof
from chainlab.math.pow_math import decode_nbits, difficulty

from app.api.schemas import (
    ModPowRequest,
    ModPowResponse,
    ModInverseRequest,
    ModInverseResponse,
    ModularOpRequest,
    ModularOpResponse,
    RSARequest,
    RSAResponse,
    CurveParams,
    ECPointsResponse,
    ECScalarRequest,
    ECScalarResponse,
    EcdsaRequest,
    EcdsaResponse,
    CommitHashRequest,
    CommitHashResponse,
    PedersenRequest,
    PedersenResponse,
    SchnorrRequest,
    SchnorrResponse,
    MerkleProofRequest,
    MerkleProofResponse,
    ProofElementModel,
    NBitsResponse,
)
from app.config import settings

router = APIRouter()


@router.post("/crypto/modpow", response_model=ModPowResponse)
async def modpow(request: ModPowRequest):
    """base^exponent mod modulus by square-and-multiply"""
    if settings.exponent_too_large(request.exponent):
        raise HTTPException(
            status_code=400,
            detail=f"Exponent exceeds {settings.MAX_EXPONENT_BITS} bits"
        )
    if request.modulus.bit_length() > settings.MAX_MODULUS_BITS:
        raise HTTPException(
            status_code=400,
            detail=f"Modulus exceeds {settings.MAX_MODULUS_BITS} bits"
        )

    result = mod_pow(request.base, request.exponent, request.modulus)
    return ModPowResponse(
        base=request.base,
        exponent=request.exponent,
        modulus=request.modulus,
        result=result
    )


@router.post("/crypto/modinverse", response_model=ModInverseResponse)
async def modinverse(request: ModInverseRequest):
    """
    Extended Euclid trace and modular inverse

    A missing inverse is a normal answer here (inverse = null), not an error.
    """
    g, x, y = extended_gcd(request.a % request.m, request.m)
    try:
        inverse = mod_inverse(request.a, request.m)
    except NoInverseError:
        inverse = None

    return ModInverseResponse(a=request.a, m=request.m, gcd=g, x=x, y=y, inverse=inverse)


@router.post("/crypto/modular-op", response_model=ModularOpResponse)
async def modular_operation(request: ModularOpRequest):
    """Modular calculator: a (op) b mod n"""
    try:
        result = modular_op(request.a, request.b, request.n, request.op)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ModularOpResponse(
        expression=f"{request.a} {request.op} {request.b} mod {request.n}",
        result=result
    )


@router.post("/crypto/rsa", response_model=RSAResponse)
async def rsa(request: RSARequest):
    """Textbook RSA key generation with an optional encrypt/sign round trip"""
    if max(request.p, request.q) > settings.MAX_TOY_PRIME:
        raise HTTPException(
            status_code=400,
            detail=f"Primes above {settings.MAX_TOY_PRIME} are not supported"
        )

    try:
        key = generate_keypair(request.p, request.q, request.e)
        response = RSAResponse(n=key.n, phi=key.phi, e=key.e, d=key.d)

        if request.message is not None:
            ciphertext = encrypt(request.message, key)
            signature = sign(request.message, key)
            response.ciphertext = ciphertext
            response.decrypted = decrypt(ciphertext, key)
            response.signature = signature
            response.signature_valid = verify(request.message, signature, key)

        return response

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _curve(params: CurveParams) -> CurveGF:
    if params.p > settings.MAX_TOY_PRIME:
        raise HTTPException(
            status_code=400,
            detail=f"Field primes above {settings.MAX_TOY_PRIME} are not supported"
        )
    return CurveGF(params.p, params.a, params.b)


@router.get("/crypto/ec/points", response_model=ECPointsResponse)
async def ec_points(p: int = 17, a: int = 2, b: int = 2):
    """All affine points of y^2 = x^3 + ax + b over GF(p)"""
    params = CurveParams(p=p, a=a, b=b)
    points = _curve(params).points()
    return ECPointsResponse(
        curve=params,
        points=[list(point) for point in points],
        group_order=len(points) + 1
    )


@router.post("/crypto/ec/multiply", response_model=ECScalarResponse)
async def ec_multiply(request: ECScalarRequest):
    """kP by double-and-add"""
    curve = _curve(request.curve)
    if request.point is not None and len(request.point) != 2:
        raise HTTPException(status_code=400, detail="point must be [x, y]")
    point = tuple(request.point) if request.point else TOY_CURVE_G

    if not curve.contains(point):
        raise HTTPException(status_code=400, detail=f"Point {list(point)} is not on the curve")

    try:
        result = curve.scalar_mult(request.k, point)
    except ValueError as e:
        # Composite p: a denominator without an inverse
        raise HTTPException(status_code=400, detail=str(e))

    return ECScalarResponse(
        k=request.k,
        point=list(point),
        result=list(result) if result is not None else None
    )


@router.post("/crypto/ecdsa", response_model=EcdsaResponse)
async def ecdsa(request: EcdsaRequest):
    """Toy ECDSA sign + verify on y^2 = x^3 + 2x + 2 mod 17"""
    try:
        signature = ecdsa_sign(request.d, request.h, request.k)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    public_key = TOY_CURVE.scalar_mult(request.d, TOY_CURVE_G)
    return EcdsaResponse(
        public_key=list(public_key),
        R=list(signature.R),
        r=signature.r,
        s=signature.s,
        valid=ecdsa_verify(public_key, request.h, signature.r, signature.s)
    )


@router.post("/crypto/commit-hash", response_model=CommitHashResponse)
async def commit_hash(request: CommitHashRequest):
    """Simulated commitment string for the commit-reveal diagram"""
    return CommitHashResponse(commitment=sim_commit_hash(request.value, request.randomness))


@router.post("/crypto/pedersen", response_model=PedersenResponse)
async def pedersen(request: PedersenRequest):
    """Pedersen commitment and the homomorphic sum of two commitments"""
    group = PEDERSEN_GROUP
    commitment = pedersen_commit(request.value, request.randomness, group)
    response = PedersenResponse(p=group.p, q=group.q, g=group.g, h=group.h, commitment=commitment)

    if request.add_value is not None:
        second = pedersen_commit(request.add_value, request.add_randomness or 0, group)
        combined = add_commitments(commitment, second, group)
        expected = pedersen_commit(
            request.value + request.add_value,
            request.randomness + (request.add_randomness or 0),
            group
        )
        response.second_commitment = second
        response.sum_commitment = combined
        response.sum_matches = combined == expected

    return response


@router.post("/crypto/schnorr", response_model=SchnorrResponse)
async def schnorr(request: SchnorrRequest):
    """One Schnorr identification round (p = 23, g = 2, q = 11)"""
    group = SCHNORR_GROUP
    round_ = schnorr_round(
        request.secret,
        request.k,
        request.challenge,
        group,
        forged_response=request.forged_response
    )
    print(f"[Crypto] Schnorr round honest={round_.honest} valid={round_.valid}")

    return SchnorrResponse(
        public_key=mod_pow(group.g, request.secret, group.p),
        R=round_.R,
        c=round_.c,
        s=round_.s,
        lhs=round_.lhs,
        rhs=round_.rhs,
        valid=round_.valid,
        honest=round_.honest
    )


@router.post("/crypto/merkle-proof", response_model=MerkleProofResponse)
async def merkle_proof(request: MerkleProofRequest):
    """
    Build a Merkle tree and verify the inclusion proof of one leaf

    When tampered_leaf is given, that label is hashed in place of the real
    leaf so the recomputed root no longer matches.
    """
    if request.leaf_index >= len(request.labels):
        raise HTTPException(
            status_code=400,
            detail=f"leaf_index out of range (0 ~ {len(request.labels) - 1})"
        )

    tree = build_merkle_tree(request.labels)
    root = tree[-1][0]
    proof = get_merkle_proof(tree, request.leaf_index)
    leaf_hash = tree[0][request.leaf_index]
    if request.tampered_leaf is not None:
        leaf_hash = display_hash(request.tampered_leaf)

    check = verify_proof(leaf_hash, proof, root)
    return MerkleProofResponse(
        levels=tree,
        root=root,
        leaf_hash=leaf_hash,
        proof=[ProofElementModel(**elem._asdict()) for elem in proof],
        computed_root=check.computed_root,
        valid=check.valid,
        trace=check.trace
    )


@router.get("/crypto/nbits", response_model=NBitsResponse)
async def nbits(value: str = "0x1d00ffff"):
    """Decode a compact nBits target (hex with 0x prefix or decimal)"""
    try:
        bits = int(value, 0)
        decoded = decode_nbits(bits)
        diff = difficulty(bits)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid nBits {value!r}: {e}")

    return NBitsResponse(
        nbits=f"0x{bits:08x}",
        exponent=decoded.exponent,
        mantissa=decoded.mantissa,
        target_hex=decoded.target_hex,
        difficulty=diff
    )
