"""
API routes for the Kisan Scheme Matcher
"""

from .schemes import router as schemes_router

__all__ = [
    "schemes_router"
]
