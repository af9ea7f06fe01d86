from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

INTERVALS = ("5m", "15m", "1h", "1d", "1wk", "1mo")

def _check_interval(interval: str):
    if interval not in INTERVALS:
        raise ValueError(f"Unsupported interval: {interval}")

@dataclass(frozen=True)
class DirectSource:
    interval: str
    range: str

    def __post_init__(self):
        _check_interval(self.interval)

    @property
    def key(self) -> Tuple:
        return ("direct", self.interval, self.range)

@dataclass(frozen=True)
class AggregateSource:
    source_interval: str
    source_range: str
    factor: int

    def __post_init__(self):
        _check_interval(self.source_interval)
        if self.factor < 1:
            raise ValueError(f"Aggregation factor must be >= 1, got {self.factor}")

    @property
    def base(self) -> DirectSource:
        return DirectSource(self.source_interval, self.source_range)

    @property
    def key(self) -> Tuple:
        return ("aggregate", self.source_interval, self.source_range, self.factor)

TimeframeSource = Union[DirectSource, AggregateSource]

@dataclass(frozen=True)
class TimeframeDef:
    label: str
    source: TimeframeSource

# Every style lists exactly three timeframes, shortest first.
# 4H has no native Yahoo interval, so it is rolled up from 1H bars.
STYLE_TIMEFRAMES: Dict[str, Tuple[TimeframeDef, ...]] = {
    "day-trade": (
        TimeframeDef("1H", DirectSource("1h", "15d")),
        TimeframeDef("4H", AggregateSource("1h", "15d", 4)),
        TimeframeDef("1D", DirectSource("1d", "30d")),
    ),
    "swing-trade": (
        TimeframeDef("1H", DirectSource("1h", "15d")),
        TimeframeDef("4H", AggregateSource("1h", "15d", 4)),
        TimeframeDef("1D", DirectSource("1d", "30d")),
    ),
    "position-trade": (
        TimeframeDef("1D", DirectSource("1d", "30d")),
        TimeframeDef("1W", DirectSource("1wk", "2y")),
        TimeframeDef("1M", DirectSource("1mo", "5y")),
    ),
}

DEFAULT_STYLE = "swing-trade"

def resolve_style(style: str) -> List[TimeframeDef]:
    try:
        return list(STYLE_TIMEFRAMES[style])
    except KeyError:
        raise ValueError(f"Unsupported trading style: {style}") from None
