from .base import Base
from .school import School

__all__ = [
    "Base",
    "School",
]
