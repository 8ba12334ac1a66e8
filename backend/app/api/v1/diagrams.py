"""
Diagram Endpoints

Step-through sequences and stateless cursor transitions. The client keeps the
cursor history and sends it back with each action.
"""
from fastapi import APIRouter, HTTPException

from chainlab.diagrams.steps import StepCursor, list_sequences, get_sequence

from app.api.schemas import SequenceResponse, StepModel, CursorRequest, CursorResponse
from app.config import settings

router = APIRouter()


def _load_sequence(name: str):
    try:
        return get_sequence(name, settings.FIXTURE_DIR)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown diagram sequence: {name}")
    except (FileNotFoundError, ValueError) as e:
        print(f"[Diagrams] Error building {name}: {e}")
        raise HTTPException(status_code=500, detail=f"Diagram sequence unavailable: {name}")


@router.get("/diagrams")
async def get_diagrams():
    """Registered step-through sequences"""
    return {"sequences": list_sequences()}


@router.get("/diagrams/{name}", response_model=SequenceResponse)
async def get_diagram(name: str):
    """All steps of one sequence"""
    sequence = _load_sequence(name)
    return SequenceResponse(
        name=sequence.name,
        steps=[StepModel(**step.to_dict()) for step in sequence.steps]
    )


@router.post("/diagrams/{name}/cursor", response_model=CursorResponse)
async def move_cursor(name: str, request: CursorRequest):
    """
    Apply one cursor action (forward / back / reset / jump)

    Forward on the last step and back on the first step return the
    cursor unchanged.
    """
    sequence = _load_sequence(name)
    length = len(sequence)

    if any(not 0 <= i < length for i in request.history):
        raise HTTPException(status_code=400, detail=f"History index out of range (0 ~ {length - 1})")

    cursor = StepCursor(length=length, history=tuple(request.history))
    if request.action == "forward":
        cursor = cursor.forward()
    elif request.action == "back":
        cursor = cursor.back()
    elif request.action == "reset":
        cursor = cursor.reset()
    else:
        if request.index is None:
            raise HTTPException(status_code=400, detail="index is required for action=jump")
        try:
            cursor = cursor.jump(request.index)
        except IndexError as e:
            raise HTTPException(status_code=400, detail=str(e))

    return CursorResponse(
        history=list(cursor.history),
        current=cursor.current,
        can_forward=cursor.can_forward,
        can_back=cursor.can_back,
        total=length,
        step=StepModel(**sequence[cursor.current].to_dict())
    )
