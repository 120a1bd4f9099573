"""
Backtest storage interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any

from src.core.models.backtest import Backtest


class IBacktestRepository(ABC):
    """Abstract interface for whole-document backtest storage."""

    @abstractmethod
    async def load_document(self, backtest_id: str) -> dict[str, Any]:
        """Load the stored document exactly as written."""
        pass

    @abstractmethod
    async def get(self, backtest_id: str) -> Backtest:
        """Load and normalize a backtest."""
        pass

    @abstractmethod
    async def save(self, backtest_id: str, document: dict[str, Any]) -> Backtest:
        """Validate and replace the whole document for an id."""
        pass

    @abstractmethod
    async def exists(self, backtest_id: str) -> bool:
        """Check whether a document is stored for an id."""
        pass
