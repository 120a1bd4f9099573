"""
File-backed backtest store.

One JSON document per backtest id, stored as ``<data_dir>/<id>.json``.
Documents are only ever read or replaced whole. Parsed documents are kept
in a bounded LRU cache keyed by id and invalidated by file modification
time, so an external producer rewriting a file is picked up on next read.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from threading import RLock
from typing import Any

from cachetools import LRUCache
from loguru import logger

from src.core.constants import (
    DEFAULT_CACHE_SIZE,
    DEMO_BACKTEST_ID,
    DOCUMENT_INDENT,
    DOCUMENT_SUFFIX,
)
from src.core.exceptions.backtest import (
    BacktestNotFoundError,
    ConfigurationError,
    DataError,
    InvalidFormatError,
)
from src.core.interfaces.storage import IBacktestRepository
from src.core.models.backtest import Backtest
from src.core.utils.validation import validate_backtest_id

from .demo_backtest import build_demo_document
from .format_normalizer import normalize


class JsonBacktestStore(IBacktestRepository):
    """Stores backtest documents as JSON files in a data directory."""

    def __init__(
        self,
        data_dir: Path | str,
        cache_size: int = DEFAULT_CACHE_SIZE,
        enable_demo: bool = False,
    ) -> None:
        """
        Args:
            data_dir: Directory holding the documents; created on first write
            cache_size: Maximum number of parsed documents kept in memory
            enable_demo: Serve a generated backtest for the ``demo`` id when
                no such file exists
        """
        if cache_size <= 0:
            raise ValueError("Cache size must be positive")

        self.data_dir = Path(data_dir)
        if self.data_dir.exists() and not self.data_dir.is_dir():
            raise ConfigurationError(f"Data directory {self.data_dir} is not a directory")
        self.enable_demo = enable_demo
        self._cache: LRUCache[str, tuple[int, dict[str, Any]]] = LRUCache(maxsize=cache_size)
        self._cache_lock = RLock()

    def document_path(self, backtest_id: str) -> Path:
        """Path of the document for an id.

        Raises:
            ValidationError: If the id is not a safe file name
        """
        validate_backtest_id(backtest_id)
        return self.data_dir / f"{backtest_id}{DOCUMENT_SUFFIX}"

    async def exists(self, backtest_id: str) -> bool:
        return self.document_path(backtest_id).is_file()

    async def load_document(self, backtest_id: str) -> dict[str, Any]:
        """
        Load the stored document exactly as written.

        Raises:
            ValidationError: If the id is not a safe file name
            BacktestNotFoundError: If no document exists for the id
            DataError: If the file cannot be read or is not a JSON object
        """
        path = self.document_path(backtest_id)
        loop = asyncio.get_running_loop()
        document = await loop.run_in_executor(None, self._read_document, backtest_id, path)
        if document is None:
            if self.enable_demo and backtest_id == DEMO_BACKTEST_ID:
                logger.info("Serving generated demo backtest")
                return build_demo_document()
            raise BacktestNotFoundError(backtest_id)
        return document

    async def get(self, backtest_id: str) -> Backtest:
        """
        Load and normalize a backtest.

        Raises:
            BacktestNotFoundError: If no document exists for the id
            DataError: If the stored document is unreadable or no longer
                matches either schema
        """
        document = await self.load_document(backtest_id)
        try:
            return normalize(document)
        except InvalidFormatError as e:
            logger.error(
                f"Stored backtest {backtest_id} failed normalization: {e.missing_fields}"
            )
            raise DataError(f"Stored backtest {backtest_id} is invalid") from e

    async def save(self, backtest_id: str, document: dict[str, Any]) -> Backtest:
        """
        Validate and replace the whole document for an id.

        Nothing is written when validation fails.

        Raises:
            ValidationError: If the id is not a safe file name
            InvalidFormatError: If the document misses required fields
            DataError: If the file cannot be written
        """
        path = self.document_path(backtest_id)
        backtest = normalize(document)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_document, backtest_id, path, document)
        logger.info(f"Backtest {backtest_id} saved ({len(backtest.trades)} trades)")
        return backtest

    def _read_document(self, backtest_id: str, path: Path) -> dict[str, Any] | None:
        """Read and parse a document, serving it from cache when unchanged."""
        try:
            mtime = path.stat().st_mtime_ns
        except FileNotFoundError:
            with self._cache_lock:
                self._cache.pop(backtest_id, None)
            return None
        except OSError as e:
            logger.error(f"File system error reading {path.name}: {e}")
            raise DataError(f"File system error loading backtest {backtest_id}") from e

        with self._cache_lock:
            cached = self._cache.get(backtest_id)
            if cached is not None and cached[0] == mtime:
                logger.debug(f"Cache hit for backtest {backtest_id}")
                return cached[1]

        try:
            with path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {path.name}: {e}")
            raise DataError(f"Failed to read backtest {backtest_id}") from e
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt JSON in {path.name}: {e}")
            raise DataError(f"Stored backtest {backtest_id} is not valid JSON") from e

        if not isinstance(document, dict):
            raise DataError(f"Stored backtest {backtest_id} is not a JSON object")

        logger.debug(f"Loaded backtest {backtest_id} from {path}")
        with self._cache_lock:
            self._cache[backtest_id] = (mtime, document)
        return document

    def _write_document(self, backtest_id: str, path: Path, document: dict[str, Any]) -> None:
        """Write a document atomically: temp file in the same directory, then replace."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{backtest_id}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=DOCUMENT_INDENT, ensure_ascii=False)
                os.replace(temp_name, path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {path.name}: {e}")
            raise DataError(f"Failed to save backtest {backtest_id}") from e
        finally:
            with self._cache_lock:
                self._cache.pop(backtest_id, None)
