from typing import Sequence, Tuple
from .candles import Candle
from .types import Alignment, CandleType, Direction, TimeframeCheck

def classify_candle(curr: Candle, prev: Candle) -> CandleType:
    """The Strat candle type of `curr` relative to the bar before it.

    Equal bounds count as not broken, so a tie on the low with a higher high
    is still a 2-up rather than an outside bar.
    """
    if curr.high > prev.high and curr.low >= prev.low:
        return "2-up"
    if curr.low < prev.low and curr.high <= prev.high:
        return "2-down"
    if curr.high > prev.high and curr.low < prev.low:
        return "3"
    return "1"  # inside bar

def check_timeframe(series: Sequence[Candle]) -> TimeframeCheck:
    """Classify the last two completed transitions of one timeframe."""
    if len(series) < 3:
        return TimeframeCheck()
    type1 = classify_candle(series[-2], series[-3])
    type2 = classify_candle(series[-1], series[-2])
    direction: Direction = "none"
    if type1 == "2-up" and type2 == "2-up":
        direction = "bullish"
    elif type1 == "2-down" and type2 == "2-down":
        direction = "bearish"
    return TimeframeCheck(candle1=type1, candle2=type2, direction=direction)

def calc_alignment(checks: Sequence[TimeframeCheck]) -> Tuple[Alignment, Direction]:
    bullish = sum(1 for c in checks if c.direction == "bullish")
    bearish = sum(1 for c in checks if c.direction == "bearish")
    top = max(bullish, bearish)

    direction: Direction = "none"
    if bullish > bearish and bullish >= 2:
        direction = "bullish"
    elif bearish > bullish and bearish >= 2:
        direction = "bearish"

    alignment: Alignment = "none"
    if top == 3:
        alignment = "full-ftfc"
    elif top == 2:
        alignment = "partial"
    return alignment, direction
