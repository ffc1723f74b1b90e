"""
FastAPI endpoints for the calibration pipeline.

Client edits drafts -> submits -> Backend derives, aggregates, interprets
-> Returns the full session state for rendering.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime
import logging

from ...services.calibration_engine import (
    Run,
    SessionRegistry,
    SessionSnapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/calibration", tags=["calibration"])

# Owns every client's calibration session
registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    return registry


# --- REQUEST/RESPONSE MODELS ---

class SignalUpdateRequest(BaseModel):
    """Raw value from a manual signal row; non-finite values are ignored"""
    value: Any = Field(..., description="New signal value (number or numeric string)")


class RawInputRequest(BaseModel):
    value: str = Field(..., description="Free-text qualitative context")


class MetricsModel(BaseModel):
    min: float
    max: float
    mean: float = Field(..., description="Arithmetic mean rounded to 2 decimals")
    count: int


class DerivedSignalsModel(BaseModel):
    text_length: int
    word_count: int
    sentence_count: int
    sentiment_score: int


class InterpretationModel(BaseModel):
    pressure: str = Field(..., description="Low, Medium or High")
    load: str = Field(..., description="Low, Medium or High")
    clarity: str = Field(..., description="Low, Medium or High")
    readiness: str = Field(..., description="Ready or Not Ready")


class RunModel(BaseModel):
    id: int
    timestamp: datetime
    signals: List[float]
    metrics: MetricsModel
    derived: DerivedSignalsModel


class SessionStateResponse(BaseModel):
    """Everything the presentation layer needs to draw the session"""
    session_id: str
    status: str = Field(..., description="idle, running, complete or error")
    signals: List[float] = Field(..., description="Draft manual signals")
    raw_input: str = Field(..., description="Draft raw input")
    error: Optional[str] = Field(None, description="Validation message, if any")
    metrics: Optional[MetricsModel] = Field(None, description="Metrics of the latest run")
    interpretation: InterpretationModel
    runs: List[RunModel] = Field(..., description="Run history, newest first")


# --- ENDPOINTS ---

@router.get("/health")
async def health_check(registry: SessionRegistry = Depends(get_registry)):
    """Check if calibration services are available"""
    return {
        "status": "healthy",
        "active_sessions": len(registry),
        "services": {
            "signal_deriver": "available",
            "metrics_aggregator": "available",
            "interpreter": "available",
        },
    }


@router.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    """Read-only: sessions are created by their first mutation, never here"""
    session = registry.find(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return _to_response(session_id, session.snapshot())


@router.put("/sessions/{session_id}/signals/{index}", response_model=SessionStateResponse)
async def update_signal(
    session_id: str,
    index: int,
    request: SignalUpdateRequest,
    registry: SessionRegistry = Depends(get_registry),
):
    session = registry.get(session_id)
    try:
        session.update_signal(index, request.value)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(session_id, session.snapshot())


@router.put("/sessions/{session_id}/raw-input", response_model=SessionStateResponse)
async def update_raw_input(
    session_id: str,
    request: RawInputRequest,
    registry: SessionRegistry = Depends(get_registry),
):
    session = registry.get(session_id)
    session.update_raw_input(request.value)
    return _to_response(session_id, session.snapshot())


@router.post("/sessions/{session_id}/submit", response_model=SessionStateResponse)
async def submit(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    """
    Runs the calibration pipeline on the session drafts.

    A blank raw input is not an HTTP error: the returned state carries
    status "error" and the validation message, with history untouched.
    """
    logger.info(f"Calibration submit for session {session_id}")
    session = registry.get(session_id)

    try:
        run = session.submit()
    except Exception as e:
        logger.error(f"Calibration failed for session {session_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Calibration failed")

    if run:
        interpretation = session.latest_interpretation()
        logger.info(
            f"Run {run.id}: pressure={interpretation.pressure.value}, "
            f"readiness={interpretation.readiness.value}"
        )
    return _to_response(session_id, session.snapshot())


@router.post("/sessions/{session_id}/reset", response_model=SessionStateResponse)
async def reset(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    session = registry.get(session_id)
    session.reset()
    return _to_response(session_id, session.snapshot())


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    if not registry.drop(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return {"deleted": session_id}


# --- HELPER FUNCTIONS ---

def _run_to_model(run: Run) -> RunModel:
    return RunModel(
        id=run.id,
        timestamp=run.timestamp,
        signals=list(run.signals),
        metrics=MetricsModel(
            min=run.metrics.min,
            max=run.metrics.max,
            mean=run.metrics.mean,
            count=run.metrics.count,
        ),
        derived=DerivedSignalsModel(
            text_length=run.derived.text_length,
            word_count=run.derived.word_count,
            sentence_count=run.derived.sentence_count,
            sentiment_score=run.derived.sentiment_score,
        ),
    )


def _to_response(session_id: str, snapshot: SessionSnapshot) -> SessionStateResponse:
    runs = [_run_to_model(run) for run in snapshot.runs]
    return SessionStateResponse(
        session_id=session_id,
        status=snapshot.status.value,
        signals=snapshot.signals,
        raw_input=snapshot.raw_input,
        error=snapshot.error,
        metrics=runs[0].metrics if runs else None,
        interpretation=InterpretationModel(
            pressure=snapshot.interpretation.pressure.value,
            load=snapshot.interpretation.load.value,
            clarity=snapshot.interpretation.clarity.value,
            readiness=snapshot.interpretation.readiness.value,
        ),
        runs=runs,
    )
