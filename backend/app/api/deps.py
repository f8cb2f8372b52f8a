from __future__ import annotations

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import AuthError
from app.core.security import verify_token
from app.db import SessionDep
from app.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    session: SessionDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthError("Access Denied: No Token Provided")

    try:
        payload = verify_token(credentials.credentials, token_type="access")
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise AuthError("Invalid or Expired Token") from None

    user = session.get(User, user_id)
    if not user:
        raise AuthError("User not found, authorization denied")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
