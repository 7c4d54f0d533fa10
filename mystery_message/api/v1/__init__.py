from .auth_controller import router as auth_router
from .message_controller import router as message_router


__all__ = ["auth_router", "message_router"]
