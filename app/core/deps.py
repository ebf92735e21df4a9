from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.core.security import decode_token
from app.models.user import User
from app.progression.config import ProgressionConfig
from app.progression.engine import ProgressionEngine
from app.stores.sessions import SqlSessionStore
from app.stores.suggestions import SqlSuggestionStore
from app.stores.templates import SqlTemplateStore

bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> User:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        data = decode_token(creds.credentials)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    if data.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")

    user_id = int(data["sub"])
    res = await db.execute(select(User).where(User.id == user_id))
    user = res.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


def get_progression_config() -> ProgressionConfig:
    return ProgressionConfig.from_settings(settings)


async def get_progression_engine(
    db: AsyncSession = Depends(get_db),
    config: ProgressionConfig = Depends(get_progression_config),
) -> ProgressionEngine:
    return ProgressionEngine(
        sessions=SqlSessionStore(db),
        suggestions=SqlSuggestionStore(db),
        templates=SqlTemplateStore(db),
        config=config,
        ai_coaching_configured=bool(settings.OPENAI_API_KEY),
    )
