"""
Base service interface for business logic layer.
Services orchestrate business operations using repositories.
"""

from typing import Generic, TypeVar
from abc import ABC
import logging

RepositoryType = TypeVar("RepositoryType")


class BaseService(Generic[RepositoryType], ABC):
    """
    Base service providing common functionality.
    All service classes should inherit from this class.
    """

    def __init__(self, repository: RepositoryType, logger_name: str):
        self.repository = repository
        self.logger = logging.getLogger(logger_name)

    @staticmethod
    def _format(message: str, **kwargs) -> str:
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        return f"{message} {extra_data}".strip()

    def log_info(self, message: str, **kwargs):
        """Log info message with structured data"""
        self.logger.info(self._format(message, **kwargs))

    def log_warning(self, message: str, **kwargs):
        """Log warning message with structured data"""
        self.logger.warning(self._format(message, **kwargs))

    def log_error(self, message: str, **kwargs):
        """Log error message with structured data"""
        self.logger.error(self._format(message, **kwargs))
