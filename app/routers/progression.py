import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.deps import get_current_user, get_progression_engine
from app.models.progression_suggestion import ProgressionSuggestion
from app.models.user import User
from app.models.workout_session import WorkoutSession
from app.progression.engine import ProgressionEngine
from app.progression.errors import (
    SessionNotFound,
    SessionStateError,
    SuggestionAlreadyResponded,
    SuggestionNotFound,
)
from app.progression.types import SessionStatus, Suggestion
from app.schemas.progression import RespondIn, StagnationOut, SuggestionListOut, SuggestionOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progression", tags=["progression"])


async def _get_owned_session(db: AsyncSession, session_id: int, user: User) -> WorkoutSession:
    res = await db.execute(
        select(WorkoutSession).where(
            WorkoutSession.id == session_id,
            WorkoutSession.user_id == user.id,
        )
    )
    session = res.scalar_one_or_none()
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return session


def _list_out(suggestions: list[Suggestion]) -> SuggestionListOut:
    return SuggestionListOut(items=[SuggestionOut.model_validate(s) for s in suggestions])


@router.get("/sessions/{session_id}/suggestions", response_model=SuggestionListOut)
async def get_session_suggestions(
    session_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    session = await _get_owned_session(db, session_id, user)

    # Abandoned sessions never get suggestions
    if session.status == SessionStatus.abandoned.value:
        return SuggestionListOut(items=[])

    suggestions = await engine.get_session_suggestions(session_id)
    if not suggestions:
        await engine.evaluate_session(session_id)
        await db.commit()
        suggestions = await engine.get_session_suggestions(session_id)

    return _list_out(suggestions)


@router.post("/sessions/{session_id}/evaluate", response_model=SuggestionListOut)
async def evaluate_session(
    session_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    await _get_owned_session(db, session_id, user)

    suggestions = await engine.evaluate_session(session_id)
    await db.commit()
    return _list_out(suggestions)


@router.post("/sessions/{session_id}/complete", response_model=SuggestionListOut)
async def complete_session(
    session_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    await _get_owned_session(db, session_id, user)

    try:
        suggestions = await engine.complete_session(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    except SessionStateError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    await db.commit()
    return _list_out(suggestions)


@router.get("/sessions/{session_id}/stagnation", response_model=StagnationOut)
async def detect_stagnation(
    session_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    await _get_owned_session(db, session_id, user)

    stagnation = await engine.detect_stagnation(session_id)
    await db.commit()
    return StagnationOut.model_validate(stagnation)


@router.patch("/suggestions/{suggestion_id}", response_model=SuggestionOut)
async def respond_to_suggestion(
    suggestion_id: int,
    payload: RespondIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    res = await db.execute(
        select(ProgressionSuggestion.id).where(
            ProgressionSuggestion.id == suggestion_id,
            ProgressionSuggestion.user_id == user.id,
        )
    )
    if res.scalar_one_or_none() is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found")

    try:
        suggestion = await engine.respond(suggestion_id, payload.status)
    except SuggestionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found")
    except SuggestionAlreadyResponded as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    await db.commit()
    return SuggestionOut.model_validate(suggestion)
