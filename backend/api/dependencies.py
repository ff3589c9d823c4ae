"""
FastAPI dependencies for authentication and external collaborators.
"""
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from backend.auth.jwt import decode_access_token
from backend.clients.image_client import ImageFetcher
from backend.clients.openai_client import OpenAIClient
from backend.clients.protocol import ImageSource, LanguageModel
from backend.db.database import get_db
from backend.db.models import User
from backend.errors import LiftLensError, UnauthenticatedError

# HTTP Bearer token scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


def _unauthenticated(error: LiftLensError) -> HTTPException:
    return HTTPException(
        status_code=error.status_code,
        detail=error.to_detail(),
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user.

    Usage:
        @app.get("/me")
        def get_me(current_user: User = Depends(get_current_user)):
            return current_user

    Raises:
        HTTPException: 401 if the token is missing or invalid or the user is
            unknown, 403 if the account is inactive
    """
    if credentials is None:
        raise _unauthenticated(UnauthenticatedError())

    token_payload = decode_access_token(credentials.credentials)
    if token_payload is None:
        raise _unauthenticated(UnauthenticatedError("Invalid authentication credentials"))

    user = db.query(User).filter(User.id == token_payload.user_id).first()
    if user is None:
        raise _unauthenticated(UnauthenticatedError("User not found"))

    if not user.is_active:
        raise HTTPException(
            status_code=403,
            detail="User account is inactive",
        )

    return user


def get_language_model() -> LanguageModel:
    """
    Dependency providing the language model used by the services.

    A new client is built per request from the current settings. Tests
    override this dependency with a fake.
    """
    return OpenAIClient()


def get_image_source() -> ImageSource:
    """Dependency providing the image downloader for location photos."""
    return ImageFetcher()
