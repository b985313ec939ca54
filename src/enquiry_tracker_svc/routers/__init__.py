from .auth import auth_router
from .users import users_router
from .enquiries import enquiries_router

__all__ = [
    "auth_router",
    "users_router",
    "enquiries_router",
]
