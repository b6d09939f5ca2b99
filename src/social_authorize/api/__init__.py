from social_authorize.api.auth import router as auth_router
from social_authorize.api.system import router as system_router

__all__ = ["auth_router", "system_router"]
