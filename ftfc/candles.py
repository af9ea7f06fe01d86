from dataclasses import dataclass, asdict
from typing import List, Sequence
import pandas as pd

COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]

@dataclass(frozen=True)
class Candle:
    timestamp: int  # epoch seconds, bar open
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

def candles_to_frame(series: Sequence[Candle]) -> pd.DataFrame:
    """Build an OHLCV DataFrame with a fresh RangeIndex, one row per candle."""
    if not series:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame([asdict(c) for c in series], columns=COLUMNS)

def frame_to_candles(df: pd.DataFrame) -> List[Candle]:
    return [
        Candle(
            timestamp=int(row.timestamp),
            open=float(row.open), high=float(row.high),
            low=float(row.low), close=float(row.close),
            volume=float(row.volume),
        )
        for row in df.itertuples(index=False)
    ]

def aggregate_candles(series: Sequence[Candle], factor: int) -> List[Candle]:
    """Roll consecutive groups of `factor` candles into one higher-timeframe candle.

    Groups start at index 0; a trailing group shorter than `factor` is dropped.
    """
    if factor < 1:
        raise ValueError(f"Aggregation factor must be >= 1, got {factor}")
    usable = len(series) - len(series) % factor
    if usable == 0:
        return []
    df = candles_to_frame(series[:usable])
    out = df.groupby(df.index // factor).agg(
        timestamp=("timestamp", "first"),
        open=("open", "first"),
        high=("high", "max"),
        low=("low", "min"),
        close=("close", "last"),
        volume=("volume", "sum"),
    )
    return frame_to_candles(out)
