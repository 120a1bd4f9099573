"""
Backtest document schema normalization.

Two document shapes exist in the wild:

- **new**: carries a top-level ``backtest_id`` and nests its parts under
  ``metadata`` (``config``, ``strategy_config``) and ``statistics``
  (``global``, ``daily``, ``hourly``, ``monthly``).
- **legacy**: flat ``config``, ``strategy_config``, ``stats``, ``day_stats``,
  ``hour_stats`` and ``monthly_stats``.

Both are resolved here into one canonical ``Backtest``; nothing downstream
sees either raw shape.
"""

import copy
from typing import Any

from loguru import logger

from src.core.constants import NEW_SCHEMA_MARKER, SCHEMA_LEGACY, SCHEMA_NEW
from src.core.exceptions.backtest import InvalidFormatError
from src.core.models.backtest import Backtest, BacktestConfig, StrategyConfig
from src.core.models.trade import Trade

# (canonical field, path within the document, expected container kind)
NEW_SCHEMA_FIELDS: tuple[tuple[str, tuple[str, ...], type], ...] = (
    ("config", ("metadata", "config"), dict),
    ("strategy_config", ("metadata", "strategy_config"), dict),
    ("stats", ("statistics", "global"), dict),
    ("day_stats", ("statistics", "daily"), dict),
    ("hour_stats", ("statistics", "hourly"), dict),
    ("monthly_stats", ("statistics", "monthly"), dict),
    ("trades", ("trades",), list),
)

LEGACY_SCHEMA_FIELDS: tuple[tuple[str, tuple[str, ...], type], ...] = (
    ("config", ("config",), dict),
    ("strategy_config", ("strategy_config",), dict),
    ("stats", ("stats",), dict),
    ("day_stats", ("day_stats",), dict),
    ("hour_stats", ("hour_stats",), dict),
    ("monthly_stats", ("monthly_stats",), dict),
    ("trades", ("trades",), list),
)


def detect_schema(document: dict[str, Any]) -> str:
    """Tell which schema a document was written in."""
    return SCHEMA_NEW if NEW_SCHEMA_MARKER in document else SCHEMA_LEGACY


def _lookup(document: dict[str, Any], path: tuple[str, ...]) -> tuple[Any, str | None]:
    """Walk ``path``; return the value or the dotted path of the first missing part."""
    current: Any = document
    for depth, key in enumerate(path):
        if not isinstance(current, dict) or key not in current:
            return None, ".".join(path[: depth + 1])
        current = current[key]
    return current, None


def _extract_parts(document: dict[str, Any], schema: str) -> dict[str, Any]:
    """Pull every required part out of a document, collecting all problems."""
    fields = NEW_SCHEMA_FIELDS if schema == SCHEMA_NEW else LEGACY_SCHEMA_FIELDS
    parts: dict[str, Any] = {}
    missing: list[str] = []

    if schema == SCHEMA_NEW and not document.get(NEW_SCHEMA_MARKER):
        missing.append(NEW_SCHEMA_MARKER)

    for name, path, kind in fields:
        value, missing_path = _lookup(document, path)
        if missing_path is not None:
            if missing_path not in missing:
                missing.append(missing_path)
            continue
        if not isinstance(value, kind):
            missing.append(".".join(path))
            continue
        parts[name] = value

    if missing:
        raise InvalidFormatError(missing, schema_version=schema)
    return parts


def _parse_trades(records: list[Any]) -> list[Trade]:
    trades = []
    invalid: list[str] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            invalid.append(f"trades[{index}]")
            continue
        try:
            trades.append(Trade.from_dict(record))
        except InvalidFormatError as e:
            invalid.extend(f"trades[{index}].{name}" for name in e.missing_fields)
    if invalid:
        raise InvalidFormatError(invalid)
    return trades


def normalize(document: Any) -> Backtest:
    """
    Normalize a parsed JSON document into a canonical Backtest.

    The input is never mutated; stored aggregates are deep-copied.

    Args:
        document: Parsed JSON of either schema version

    Returns:
        Canonical Backtest

    Raises:
        InvalidFormatError: Listing every missing or malformed required field
    """
    if not isinstance(document, dict):
        raise InvalidFormatError(["<root>"])

    schema = detect_schema(document)
    parts = _extract_parts(document, schema)

    problems: list[str] = []
    config = strategy_config = None
    trades: list[Trade] = []
    try:
        config = BacktestConfig.from_dict(parts["config"])
    except InvalidFormatError as e:
        prefix = "metadata.config" if schema == SCHEMA_NEW else "config"
        problems.extend(f"{prefix}.{name}" for name in e.missing_fields)
    try:
        strategy_config = StrategyConfig.from_dict(parts["strategy_config"])
    except InvalidFormatError as e:
        prefix = "metadata.strategy_config" if schema == SCHEMA_NEW else "strategy_config"
        problems.extend(f"{prefix}.{name}" for name in e.missing_fields)
    try:
        trades = _parse_trades(parts["trades"])
    except InvalidFormatError as e:
        problems.extend(e.missing_fields)

    if problems or config is None or strategy_config is None:
        raise InvalidFormatError(problems, schema_version=schema)

    metadata = document.get("metadata") if schema == SCHEMA_NEW else None
    generated_at = metadata.get("timestamp") if isinstance(metadata, dict) else None

    logger.debug(f"Normalized {schema} schema document with {len(trades)} trades")
    return Backtest(
        config=config,
        strategy_config=strategy_config,
        trades=trades,
        stats=copy.deepcopy(parts["stats"]),
        day_stats=copy.deepcopy(parts["day_stats"]),
        hour_stats=copy.deepcopy(parts["hour_stats"]),
        monthly_stats=copy.deepcopy(parts["monthly_stats"]),
        backtest_id=document.get(NEW_SCHEMA_MARKER) if schema == SCHEMA_NEW else None,
        generated_at=generated_at,
        schema_version=schema,
    )


def is_valid_document(document: Any) -> bool:
    """Check whether a document would normalize without errors."""
    try:
        normalize(document)
    except InvalidFormatError as e:
        logger.warning(f"Document validation failed: {e.missing_fields}")
        return False
    return True


def to_legacy_schema(backtest: Backtest) -> dict[str, Any]:
    """Render a Backtest as a legacy (flat) document."""
    return backtest.to_dict()


def to_new_schema(backtest: Backtest, backtest_id: str, generated_at: str) -> dict[str, Any]:
    """Render a Backtest as a new (nested) document."""
    flat = backtest.to_dict()
    return {
        "backtest_id": backtest_id,
        "metadata": {
            "timestamp": generated_at,
            "config": flat["config"],
            "strategy_config": flat["strategy_config"],
        },
        "statistics": {
            "global": flat["stats"],
            "daily": flat["day_stats"],
            "hourly": flat["hour_stats"],
            "monthly": flat["monthly_stats"],
        },
        "trades": flat["trades"],
    }
