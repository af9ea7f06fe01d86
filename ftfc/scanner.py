"""FTFC watchlist scan: per-symbol multi-timeframe evaluation, batched across a watchlist.

A symbol scan starts every upstream fetch its timeframes need at once, sharing
a fetch between timeframes built on the same (interval, range), and evaluates
only after all of them have resolved. If any fetch fails the whole symbol is
reported empty with the error message attached.

The watchlist scan runs symbols in fixed-size batches, one batch at a time,
with a short pause between batches to stay under the upstream rate limit.
"""
import asyncio, time
from datetime import datetime, timezone
from typing import Dict, Hashable, List, Optional, Protocol, Sequence
import httpx
from .candles import Candle, aggregate_candles
from .logging_utils import get_logger
from .settings import ScannerConfig
from .strat import calc_alignment, check_timeframe
from .timeframes import AggregateSource, TimeframeDef, TimeframeSource, resolve_style
from .types import ScanReport, SymbolResult, TimeframeCheck, TimeframeResult
from .yahoo import ChartFetcher

logger = get_logger(__name__)

class Fetcher(Protocol):
    async def fetch(self, symbol: str, interval: str, range_: str) -> List[Candle]: ...

async def _rolled_up(source: "asyncio.Future[List[Candle]]", factor: int) -> List[Candle]:
    return aggregate_candles(await source, factor)

def _failed(symbol: str, defs: Sequence[TimeframeDef], error: str) -> SymbolResult:
    return SymbolResult(
        symbol=symbol,
        direction=None,
        timeframes=[TimeframeResult(d.label, TimeframeCheck()) for d in defs],
        alignment="none",
        error=error,
    )

async def scan_symbol(symbol: str, defs: Sequence[TimeframeDef], fetcher: Fetcher) -> SymbolResult:
    # lives for this call only; never shared across symbols or scans
    pending: Dict[Hashable, asyncio.Future] = {}

    def candles_for(source: TimeframeSource) -> asyncio.Future:
        base = source.base if isinstance(source, AggregateSource) else source
        if base.key not in pending:
            pending[base.key] = asyncio.ensure_future(fetcher.fetch(symbol, base.interval, base.range))
        if source is base:
            return pending[base.key]
        if source.key not in pending:
            pending[source.key] = asyncio.ensure_future(_rolled_up(pending[base.key], source.factor))
        return pending[source.key]

    outcomes = await asyncio.gather(*(candles_for(d.source) for d in defs), return_exceptions=True)

    for out in outcomes:
        if isinstance(out, BaseException) and not isinstance(out, Exception):
            raise out
    failure = next((out for out in outcomes if isinstance(out, Exception)), None)
    if failure is not None:
        msg = str(failure) or type(failure).__name__
        logger.warning("[%s] scan failed: %s", symbol, msg)
        return _failed(symbol, defs, msg)

    timeframes = [TimeframeResult(d.label, check_timeframe(series)) for d, series in zip(defs, outcomes)]
    alignment, direction = calc_alignment([t.check for t in timeframes])
    return SymbolResult(symbol=symbol, direction=direction, timeframes=timeframes, alignment=alignment)

async def _batch_pause(seconds: float):
    await asyncio.sleep(seconds)

async def _scan_batches(symbols: List[str], defs: List[TimeframeDef], fetcher: Fetcher,
                        cfg: ScannerConfig) -> List[SymbolResult]:
    results: List[SymbolResult] = []
    size = cfg.batch_size
    n_batches = (len(symbols) + size - 1) // size
    for i in range(0, len(symbols), size):
        batch = symbols[i:i + size]
        logger.info("batch %d/%d: %s", i // size + 1, n_batches, ", ".join(batch))
        results.extend(await asyncio.gather(*(scan_symbol(sym, defs, fetcher) for sym in batch)))
        if i + size < len(symbols):
            await _batch_pause(cfg.batch_delay_s)
    return results

async def scan_watchlist(symbols: Optional[Sequence[str]] = None, trading_style: Optional[str] = None, *,
                         fetcher: Optional[Fetcher] = None, config: Optional[ScannerConfig] = None) -> ScanReport:
    """Scan `symbols` (default: the configured watchlist) for FTFC under one trading style.

    Always returns a report; symbols whose data could not be fetched carry an
    `error` instead of a verdict. An unknown trading style raises ValueError
    before any request is made.
    """
    cfg = config or ScannerConfig()
    style = trading_style or cfg.default_style
    defs = resolve_style(style)
    syms = [s.strip().upper() for s in (cfg.symbols if symbols is None else symbols)]

    scanned_at = datetime.now(timezone.utc)
    t0 = time.monotonic()
    if fetcher is None:
        async with httpx.AsyncClient(timeout=cfg.timeout_s) as cli:
            chart = ChartFetcher(cli, base_url=cfg.base_url, timeout_s=cfg.timeout_s, user_agent=cfg.user_agent)
            results = await _scan_batches(syms, defs, chart, cfg)
    else:
        results = await _scan_batches(syms, defs, fetcher, cfg)
    duration_ms = int((time.monotonic() - t0) * 1000)

    failed = sum(1 for r in results if r.error)
    logger.info("scan %s done: %d symbols, %d failed, %d ms", style, len(results), failed, duration_ms)
    return ScanReport(
        results=results,
        scanned_at=scanned_at,
        duration_ms=duration_ms,
        trading_style=style,
        timeframe_labels=[d.label for d in defs],
    )
