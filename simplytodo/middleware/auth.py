"""JWT authentication dependency for FastAPI."""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from pydantic import BaseModel

from simplytodo.config import Settings, get_settings

ALGORITHM = "HS256"


class CurrentUser(BaseModel):
    """User information extracted from JWT."""
    user_id: str
    email: Optional[str] = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(request: Request, settings: Settings = Depends(get_settings)) -> CurrentUser:
    """
    Validate the bearer token and extract the user.

    Raises:
        HTTPException: If the token is missing, invalid or expired
    """
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise _unauthorized("Missing or invalid Authorization header")
    if not settings.auth_secret:
        raise _unauthorized("Authentication is not configured")

    token = auth_header[len("Bearer "):]
    try:
        payload = jwt.decode(token, settings.auth_secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid token: missing user ID")
    return CurrentUser(user_id=user_id, email=payload.get("email"))


async def verify_user_access(user_id: str, current_user: CurrentUser = Depends(get_current_user)) -> str:
    """
    Verify that the authenticated user matches the user ID in the path.

    Returns:
        The verified user ID
    """
    if user_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this user's resources"
        )
    return user_id
