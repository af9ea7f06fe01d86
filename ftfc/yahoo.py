import asyncio
from typing import List, Optional
from urllib.parse import quote
import httpx
from .candles import Candle
from .errors import FetchTimeoutError, NoDataError, TransportError, UpstreamHttpError
from .logging_utils import get_logger

logger = get_logger(__name__)

YAHOO_BASE = "https://query1.finance.yahoo.com/v8/finance/chart"
FETCH_TIMEOUT_S = 10.0
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

def _at(values: Optional[list], i: int):
    if not values or i >= len(values):
        return None
    return values[i]

def parse_chart(payload: dict, symbol: str, interval: str) -> List[Candle]:
    """Turn a v8 chart payload into candles, skipping bars without full OHLC."""
    malformed = f"Malformed chart payload for {symbol} ({interval})"
    chart = payload.get("chart") if isinstance(payload, dict) else None
    if not isinstance(chart, dict):
        raise NoDataError(malformed, symbol, interval)
    result = chart.get("result")
    if not result:
        err = chart.get("error") or {}
        detail = f": {err['description']}" if err.get("description") else ""
        raise NoDataError(f"No chart data returned for {symbol} ({interval}){detail}", symbol, interval)

    res = result[0] if isinstance(result, list) else None
    if not isinstance(res, dict) or not isinstance(res.get("indicators") or {}, dict):
        raise NoDataError(malformed, symbol, interval)
    timestamps = res.get("timestamp") or []
    quotes = (res.get("indicators") or {}).get("quote") or []
    if timestamps and not quotes:
        raise NoDataError(f"No quote block for {symbol} ({interval})", symbol, interval)
    q = quotes[0] if quotes else {}
    if not isinstance(q, dict):
        raise NoDataError(malformed, symbol, interval)

    candles: List[Candle] = []
    for i, ts in enumerate(timestamps):
        o, h, l, c = (_at(q.get(k), i) for k in ("open", "high", "low", "close"))
        if o is None or h is None or l is None or c is None:
            continue
        v = _at(q.get("volume"), i)
        try:
            candles.append(Candle(
                timestamp=int(ts), open=float(o), high=float(h), low=float(l), close=float(c),
                volume=float(v) if v is not None else 0.0,
            ))
        except (TypeError, ValueError):
            raise NoDataError(f"{malformed}: bad value at index {i}", symbol, interval) from None
    return candles

class ChartFetcher:
    """Fetches one candle series per call from the Yahoo Finance chart API.

    Pass a shared `httpx.AsyncClient` to reuse connections across calls;
    otherwise each call opens and closes its own client.
    """
    def __init__(self, client: Optional[httpx.AsyncClient] = None, base_url: str = YAHOO_BASE,
                 timeout_s: float = FETCH_TIMEOUT_S, user_agent: str = USER_AGENT):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}

    def url_for(self, symbol: str) -> str:
        return f"{self.base_url}/{quote(symbol, safe='')}"

    async def fetch(self, symbol: str, interval: str, range_: str) -> List[Candle]:
        params = {"interval": interval, "range": range_}
        logger.debug("GET chart %s interval=%s range=%s", symbol, interval, range_)
        try:
            if self.client is not None:
                res = await asyncio.wait_for(self._get(self.client, symbol, params), self.timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as cli:
                    res = await asyncio.wait_for(self._get(cli, symbol, params), self.timeout_s)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise FetchTimeoutError(
                f"Yahoo Finance request timed out after {self.timeout_s:g}s for {symbol} ({interval})",
                symbol, interval) from None
        except httpx.HTTPError as e:
            raise TransportError(f"Yahoo Finance request failed for {symbol} ({interval}): {e}",
                                 symbol, interval) from e

        if not res.is_success:
            raise UpstreamHttpError(res.status_code, symbol, interval)
        try:
            payload = res.json()
        except ValueError:
            raise NoDataError(f"Invalid JSON from Yahoo Finance for {symbol} ({interval})",
                              symbol, interval) from None
        candles = parse_chart(payload, symbol, interval)
        logger.debug("chart %s %s -> %d candles", symbol, interval, len(candles))
        return candles

    async def _get(self, cli: httpx.AsyncClient, symbol: str, params: dict) -> httpx.Response:
        return await cli.get(self.url_for(symbol), params=params, headers=self.headers)
