from .auth import router as auth_router
from .me import router as me_router
from .bars import router as bars_router
from .pdf import router as pdf_router

ROUTERS = (auth_router, me_router, bars_router, pdf_router)

__all__ = [
    "ROUTERS",
    "auth_router",
    "me_router",
    "bars_router",
    "pdf_router",
]
