"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar
from datetime import datetime

from app.domain.models.base import UnauthorizedError


logger = logging.getLogger(__name__)

R = TypeVar('R')


class BaseUseCase(ABC, Generic[R]):
    """
    Base class for all use cases.
    Domain errors propagate to the web layer, which maps them to responses.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    def execute(self, *args: Any, **kwargs: Any) -> R:
        """
        Execute the use case and log how long it took.
        """
        self.execution_start = datetime.utcnow()
        try:
            self._check_authorization()
            return self._execute_business_logic(*args, **kwargs)
        finally:
            self.execution_end = datetime.utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()
            logger.debug(f"{type(self).__name__} finished in {execution_time:.3f}s")

    def _check_authorization(self) -> None:
        """Check if the caller may run this use case. Override in subclasses."""
        pass

    @abstractmethod
    def _execute_business_logic(self, *args: Any, **kwargs: Any) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class TenantUseCase(BaseUseCase[R]):
    """
    Use case scoped to one tenant.
    Every read and write is restricted to the data of `current_user_id`.
    """

    def __init__(self):
        super().__init__()
        self.current_user_id: Optional[str] = None

    def set_current_user(self, user_id: str) -> "TenantUseCase[R]":
        """Set the tenant context."""
        self.current_user_id = user_id
        return self

    def _check_authorization(self) -> None:
        if not self.current_user_id:
            raise UnauthorizedError()
