from api.router import router as api_router
from api.errors import register_exception_handlers

# Export router
__all__ = ['api_router', 'register_exception_handlers']
