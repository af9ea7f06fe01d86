import itertools

import pytest

from ftfc.candles import Candle
from ftfc.strat import calc_alignment, check_timeframe, classify_candle
from ftfc.types import TimeframeCheck

from conftest import bars


def _c(high, low):
    return Candle(timestamp=0, open=low, high=high, low=low, close=high)


PREV = _c(10, 5)


@pytest.mark.parametrize("curr,expected", [
    (_c(12, 6), "2-up"),
    (_c(9, 4), "2-down"),
    (_c(12, 4), "3"),
    (_c(9, 6), "1"),
    (_c(10, 5), "1"),
    (_c(12, 5), "2-up"),     # tie on the low
    (_c(10, 4), "2-down"),   # tie on the high
])
def test_classify_examples(curr, expected):
    assert classify_candle(curr, PREV) == expected


def test_classify_is_total_and_outside_wins():
    levels = [3, 5, 7, 10, 12]
    for h, l in itertools.product(levels, levels):
        kind = classify_candle(_c(h, l), PREV)
        assert kind in ("1", "2-up", "2-down", "3")
        if h > PREV.high and l < PREV.low:
            assert kind == "3"


@pytest.mark.parametrize("n", [0, 1, 2])
def test_check_timeframe_needs_three_candles(n):
    series = bars([10, 11, 12][:n], [5, 6, 7][:n])
    assert check_timeframe(series) == TimeframeCheck(None, None, None)


def test_check_timeframe_bullish():
    check = check_timeframe(bars([9, 10, 11, 12], [4, 5, 6, 7]))
    assert check == TimeframeCheck("2-up", "2-up", "bullish")


def test_check_timeframe_bearish():
    check = check_timeframe(bars([12, 11, 10], [7, 6, 5]))
    assert check == TimeframeCheck("2-down", "2-down", "bearish")


def test_check_timeframe_single_breakout_is_not_directional():
    check = check_timeframe(bars([10, 11, 10.5], [5, 6, 6.5]))
    assert check == TimeframeCheck("2-up", "1", "none")


def test_check_timeframe_uses_last_two_transitions_only():
    # early bars are outside/inside noise; only the tail matters
    check = check_timeframe(bars([10, 15, 12, 13, 14], [5, 1, 3, 4, 5]))
    assert check.candle1 == "2-up"
    assert check.candle2 == "2-up"


def _tf(direction):
    return TimeframeCheck("2-up", "2-up", direction)


@pytest.mark.parametrize("dirs,expected", [
    (["bullish", "bullish", "bullish"], ("full-ftfc", "bullish")),
    (["bearish", "bearish", "bearish"], ("full-ftfc", "bearish")),
    (["bullish", "bullish", "none"], ("partial", "bullish")),
    (["bearish", "none", "bearish"], ("partial", "bearish")),
    (["bullish", "bearish", "none"], ("none", "none")),
    (["bullish", "none", None], ("none", "none")),
    ([None, None, None], ("none", "none")),
])
def test_calc_alignment(dirs, expected):
    assert calc_alignment([_tf(d) for d in dirs]) == expected
