from .security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_access_token,
    using_default_secret,
)

__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_access_token",
    "using_default_secret",
]
