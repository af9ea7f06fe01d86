import os
import sys
from typing import Dict, List, Tuple

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from ftfc.candles import Candle  # noqa: E402


def bars(highs, lows, start_ts: int = 1_700_000_000, step: int = 3600) -> List[Candle]:
    """Build a series from parallel highs/lows; open/close sit inside the range."""
    out = []
    for i, (h, l) in enumerate(zip(highs, lows)):
        out.append(Candle(timestamp=start_ts + i * step, open=l, high=h, low=l, close=h, volume=100.0))
    return out


class StubFetcher:
    """Serves canned series per (interval, range) and records every call."""

    def __init__(self, series: Dict[Tuple[str, str], List[Candle]] = None, fail: Dict = None):
        self.series = series or {}
        self.fail = fail or {}
        self.calls: List[Tuple[str, str, str]] = []

    async def fetch(self, symbol, interval, range_):
        self.calls.append((symbol, interval, range_))
        exc = self.fail.get((symbol, interval)) or self.fail.get(interval)
        if exc is not None:
            raise exc
        return list(self.series.get((interval, range_), []))


@pytest.fixture
def stub_fetcher():
    return StubFetcher()
