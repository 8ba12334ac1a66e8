"""
ZK Endpoints

R1CS constraint checking and the x^3 + x + 5 example circuit.
"""
from fastapi import APIRouter, HTTPException

from chainlab.math.r1cs import R1CS, circuit_trace, cubic_witness, is_valid_witness

from app.api.schemas import (
    R1CSRequest,
    R1CSResponse,
    ConstraintCheckModel,
    CircuitResponse,
    GateModel,
)

router = APIRouter()

MAX_CONSTRAINTS = 64
MAX_VARIABLES = 64


@router.post("/zk/r1cs", response_model=R1CSResponse)
async def evaluate_r1cs(request: R1CSRequest):
    """
    Check (A_i . s) * (B_i . s) = (C_i . s) for every row

    Shape mismatches (rows, columns or witness length) return 400.
    """
    if len(request.A) > MAX_CONSTRAINTS or len(request.witness) > MAX_VARIABLES:
        raise HTTPException(
            status_code=400,
            detail=f"At most {MAX_CONSTRAINTS} constraints and {MAX_VARIABLES} variables"
        )

    try:
        system = R1CS(
            A=tuple(tuple(row) for row in request.A),
            B=tuple(tuple(row) for row in request.B),
            C=tuple(tuple(row) for row in request.C),
            modulus=request.modulus
        )
        checks = system.evaluate(request.witness)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return R1CSResponse(
        checks=[ConstraintCheckModel(**check._asdict()) for check in checks],
        satisfied=all(check.satisfied for check in checks)
    )


@router.get("/zk/circuit", response_model=CircuitResponse)
async def circuit(x: int = 3, target: int = 35):
    """Gate-by-gate trace of x^3 + x + 5 and whether it hits target"""
    if abs(x) > 10 ** 6:
        raise HTTPException(status_code=400, detail="x out of range")

    return CircuitResponse(
        x=x,
        gates=[GateModel(**gate._asdict()) for gate in circuit_trace(x)],
        witness=cubic_witness(x),
        valid=is_valid_witness(x, target)
    )
