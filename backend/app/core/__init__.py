from .config import settings
from .security import (
    create_access_token,
    get_password_hash,
    verify_token,
    verify_password,
)

__all__ = [
    "settings",
    "create_access_token",
    "get_password_hash",
    "verify_token",
    "verify_password",
]
