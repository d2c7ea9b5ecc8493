"""
Adapters package - External service connections.
"""

from adapters import mongo_adapter

__all__ = ["mongo_adapter"]
