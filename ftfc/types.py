from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Literal, Optional

CandleType = Literal["1", "2-up", "2-down", "3"]
Direction = Literal["bullish", "bearish", "none"]
Alignment = Literal["full-ftfc", "partial", "none"]
TradingStyle = Literal["day-trade", "swing-trade", "position-trade"]

@dataclass(frozen=True)
class TimeframeCheck:
    # all None when the series is too short to classify two transitions
    candle1: Optional[CandleType] = None
    candle2: Optional[CandleType] = None
    direction: Optional[Direction] = None

    def to_dict(self) -> Dict:
        return {"candle1": self.candle1, "candle2": self.candle2, "direction": self.direction}

@dataclass(frozen=True)
class TimeframeResult:
    label: str
    check: TimeframeCheck

    def to_dict(self) -> Dict:
        return {"label": self.label, "check": self.check.to_dict()}

@dataclass(frozen=True)
class SymbolResult:
    symbol: str
    direction: Optional[Direction]
    timeframes: List[TimeframeResult]
    alignment: Alignment
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        out = {
            "symbol": self.symbol,
            "direction": self.direction,
            "timeframes": [t.to_dict() for t in self.timeframes],
            "alignment": self.alignment,
        }
        if self.error is not None:
            out["error"] = self.error
        return out

@dataclass(frozen=True)
class ScanReport:
    results: List[SymbolResult]
    scanned_at: datetime  # scan start, UTC
    duration_ms: int
    trading_style: TradingStyle
    timeframe_labels: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "scannedAt": self.scanned_at.isoformat(),
            "duration": self.duration_ms,
            "tradingStyle": self.trading_style,
            "timeframeLabels": list(self.timeframe_labels),
        }
