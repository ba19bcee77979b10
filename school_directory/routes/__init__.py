from .index import router as index_router
from .schools import router as schools_router

__all__ = [
    "index_router",
    "schools_router"
]
