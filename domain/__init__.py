"""
Domain layer - Pydantic schemas for meals and callers.
"""

from domain import schemas

__all__ = ["schemas"]
