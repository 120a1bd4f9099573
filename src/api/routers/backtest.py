"""
Backtest API endpoints.
"""

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger

from src.config.settings import Settings, get_settings
from src.core.analytics import BacktestAnalyzer, build_balance_series, build_equity_series
from src.core.interfaces.storage import IBacktestRepository
from src.infrastructure.storage import JsonBacktestStore

from ..schemas.api_models import (
    ErrorResponse,
    SaveResponse,
    SeriesKind,
    SeriesResponse,
    TradeDetailResponse,
)

router = APIRouter()


@lru_cache
def get_store() -> IBacktestRepository:
    """Process-wide store built from settings."""
    settings = get_settings()
    logger.info(f"Using backtest data directory {settings.data_dir}")
    return JsonBacktestStore(
        settings.data_dir, cache_size=settings.cache_size, enable_demo=settings.enable_demo
    )


@router.get("/{backtest_id}", responses={404: {"model": ErrorResponse}})
async def get_backtest(
    backtest_id: str,
    recompute: bool = Query(default=False, description="Regenerate aggregates from trades"),
    store: IBacktestRepository = Depends(get_store),
) -> dict[str, Any]:
    """Get a backtest in canonical (legacy-shaped) form."""
    backtest = await store.get(backtest_id)
    if recompute:
        backtest = backtest.with_aggregates(BacktestAnalyzer(backtest).aggregates())
    return backtest.to_dict()


@router.post("/{backtest_id}", responses={400: {"model": ErrorResponse}})
@router.put("/{backtest_id}", responses={400: {"model": ErrorResponse}})
async def save_backtest(
    backtest_id: str,
    document: Any = Body(...),
    store: IBacktestRepository = Depends(get_store),
) -> SaveResponse:
    """Validate a document in either schema and replace the stored one."""
    backtest = await store.save(backtest_id, document)
    if backtest.backtest_id and backtest.backtest_id != backtest_id:
        logger.warning(
            f"Document id {backtest.backtest_id} differs from path id {backtest_id}; "
            "stored under the path id"
        )
    return SaveResponse(
        backtest_id=backtest_id,
        schema_version=backtest.schema_version,
        trade_count=len(backtest.trades),
        valid_trade_count=sum(1 for trade in backtest.trades if trade.is_valid),
    )


@router.get("/{backtest_id}/download", responses={404: {"model": ErrorResponse}})
async def download_backtest(
    backtest_id: str, store: IBacktestRepository = Depends(get_store)
) -> JSONResponse:
    """Export the stored document exactly as written."""
    document = await store.load_document(backtest_id)
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="backtest-{backtest_id}.json"'},
    )


@router.get("/{backtest_id}/analysis", responses={404: {"model": ErrorResponse}})
async def get_analysis(
    backtest_id: str, store: IBacktestRepository = Depends(get_store)
) -> dict[str, Any]:
    """Every derived statistic of a backtest, computed in one pass."""
    backtest = await store.get(backtest_id)
    return BacktestAnalyzer(backtest).analyze().to_dict()


@router.get(
    "/{backtest_id}/trades/{index}",
    response_model=TradeDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_trade(
    backtest_id: str, index: int, store: IBacktestRepository = Depends(get_store)
) -> TradeDetailResponse | JSONResponse:
    """One trade by stored position, with the positions of its neighbours."""
    backtest = await store.get(backtest_id)
    total = len(backtest.trades)
    if not 0 <= index < total:
        error = ErrorResponse(
            error="not_found",
            message=f"Trade {index} not found ({total} trades)",
            backtest_id=backtest_id,
        )
        return JSONResponse(status_code=404, content=error.model_dump(exclude_none=True))

    trade = backtest.trades[index]
    return TradeDetailResponse(
        backtest_id=backtest_id,
        index=index,
        total=total,
        previous_index=index - 1 if index > 0 else None,
        next_index=index + 1 if index < total - 1 else None,
        trade=trade.to_dict(),
        is_valid=trade.is_valid,
    )


@router.get("/{backtest_id}/series", responses={404: {"model": ErrorResponse}})
async def get_series(
    backtest_id: str,
    kind: SeriesKind = Query(default=SeriesKind.BALANCE),
    store: IBacktestRepository = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> SeriesResponse:
    """Cumulative balance series, optionally with cosmetic equity noise."""
    backtest = await store.get(backtest_id)
    if kind == SeriesKind.EQUITY:
        points = build_equity_series(
            backtest.trades,
            backtest.initial_balance,
            backtest.commission,
            jitter=settings.equity_jitter,
        )
    else:
        points = build_balance_series(
            backtest.trades, backtest.initial_balance, backtest.commission
        )
    return SeriesResponse(
        backtest_id=backtest_id,
        kind=kind,
        points=[point.to_dict() for point in points],
    )
