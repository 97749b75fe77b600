"""
API routers for the match predictor.
"""

from .predictor_router import predictor_router

__all__ = ["predictor_router"]
