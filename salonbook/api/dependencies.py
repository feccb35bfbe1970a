# ============================================================================
# FILE: salonbook/api/dependencies.py
# Authentication dependencies for owner (dashboard) endpoints
# ============================================================================
"""
Owners sign in through the hosted auth service, which hands the browser a
signed JWT. We only verify that token here: ``sub`` is the user id and a
profile's id is the same value.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Dict, Any
from jose import JWTError, jwt
from uuid import UUID
import logging

from salonbook.config.database import get_db
from salonbook.config.settings import get_settings
from salonbook.models.profile import Profile
from salonbook.services.store.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)

# ============================================================================
# Security Schemes
# ============================================================================

jwt_security = HTTPBearer(
    scheme_name="JWT Bearer Token",
    description="Access token issued by the auth service",
    auto_error=False
)


# ============================================================================
# JWT Token Functions
# ============================================================================

def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        HTTPException 401 if the token is invalid, expired or has no subject
    """
    settings = get_settings()
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE
        )
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        raise credentials_exception

    if not payload.get("sub"):
        raise credentials_exception

    return payload


# ============================================================================
# Dependencies
# ============================================================================

async def get_token_payload(
        credentials: HTTPAuthorizationCredentials = Depends(jwt_security)
) -> Dict[str, Any]:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_access_token(credentials.credentials)


async def get_current_user_id(
        payload: Dict[str, Any] = Depends(get_token_payload)
) -> UUID:
    """Authenticated user id, whether or not a profile exists yet"""
    try:
        return UUID(str(payload["sub"]))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token subject",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_profile(
        user_id: UUID = Depends(get_current_user_id),
        db: Session = Depends(get_db)
) -> Profile:
    """
    Profile of the signed-in owner.
    Use in protected dashboard routes.
    """
    profile = ScheduleStore(db).get_profile(user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not set up yet"
        )
    return profile
