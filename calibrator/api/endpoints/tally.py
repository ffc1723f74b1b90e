"""
FastAPI endpoints for the tally board (counter + notes).
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Any, List
import logging
import os
from dotenv import load_dotenv

from ...services.tally import JsonStore, TallyBoard, TallyValidationError

logger = logging.getLogger(__name__)

load_dotenv()

STORE_PATH = os.getenv("CALIBRATOR_STORE_PATH", "tally_store.json")

router = APIRouter(prefix="/api/tally", tags=["tally"])

_board = None


def get_board() -> TallyBoard:
    """Loads the board from the store on first use (singleton)"""
    global _board
    if _board is None:
        _board = TallyBoard(JsonStore(STORE_PATH))
        logger.info(f"Tally board loaded from {STORE_PATH}")
    return _board


# --- REQUEST/RESPONSE MODELS ---

class CounterRequest(BaseModel):
    value: Any = Field(..., description="New counter value (integer)")


class NoteRequest(BaseModel):
    text: str = Field(..., description="Note text (blank is rejected)")


class NoteModel(BaseModel):
    id: int
    text: str
    created_at: str


class TallyResponse(BaseModel):
    value: int
    notes: List[NoteModel]


# --- ENDPOINTS ---

@router.get("/", response_model=TallyResponse)
async def get_tally(board: TallyBoard = Depends(get_board)):
    return _to_response(board)


@router.post("/counter/increment", response_model=TallyResponse)
async def increment(board: TallyBoard = Depends(get_board)):
    board.increment()
    return _to_response(board)


@router.post("/counter/decrement", response_model=TallyResponse)
async def decrement(board: TallyBoard = Depends(get_board)):
    board.decrement()
    return _to_response(board)


@router.post("/counter/reset", response_model=TallyResponse)
async def reset_counter(board: TallyBoard = Depends(get_board)):
    board.reset_counter()
    return _to_response(board)


@router.put("/counter", response_model=TallyResponse)
async def set_counter(request: CounterRequest, board: TallyBoard = Depends(get_board)):
    try:
        board.set_counter(request.value)
    except TallyValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _to_response(board)


@router.post("/notes", response_model=TallyResponse)
async def add_note(request: NoteRequest, board: TallyBoard = Depends(get_board)):
    try:
        board.add_note(request.text)
    except TallyValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _to_response(board)


@router.delete("/notes/{note_id}", response_model=TallyResponse)
async def remove_note(note_id: int, board: TallyBoard = Depends(get_board)):
    try:
        board.remove_note(note_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Note {note_id} not found")
    return _to_response(board)


@router.delete("/notes", response_model=TallyResponse)
async def clear_notes(board: TallyBoard = Depends(get_board)):
    board.clear_notes()
    return _to_response(board)


def _to_response(board: TallyBoard) -> TallyResponse:
    return TallyResponse(
        value=board.value,
        notes=[
            NoteModel(id=note.id, text=note.text, created_at=note.created_at)
            for note in board.notes
        ],
    )
