from .auth_routes import router

__all__ = ["router"]
