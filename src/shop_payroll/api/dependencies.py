"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated, Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shop_payroll.api.security import decode_access_token
from shop_payroll.config import AppSettings, get_settings
from shop_payroll.database import init_db
from shop_payroll.services.document_store import DocumentStore, LocalDocumentStore

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


def get_app_settings() -> AppSettings:
    return get_settings()


def get_document_store(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> DocumentStore:
    return LocalDocumentStore(settings.upload_dir)


async def get_current_user(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> dict[str, Any]:
    """Verify the bearer token and return its claims."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials, settings.jwt_secret)
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Config = Annotated[AppSettings, Depends(get_app_settings)]
Documents = Annotated[DocumentStore, Depends(get_document_store)]
CurrentUser = Annotated[dict[str, Any], Depends(get_current_user)]
