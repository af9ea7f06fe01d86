import yaml, os, re
from dataclasses import dataclass, field
from typing import Any, Dict, List
from .timeframes import DEFAULT_STYLE, resolve_style
from .yahoo import FETCH_TIMEOUT_S, USER_AGENT, YAHOO_BASE

ENV = re.compile(r"\$\{([A-Z0-9_]+)\}")

WATCHLIST_TIER1 = ["AAPL", "AMZN", "GOOGL", "META", "MSFT", "NVDA", "TSLA", "SPY", "QQQ"]
WATCHLIST_TIER2 = ["BABA", "COIN", "HOOD", "NFLX", "ROKU", "SHOP", "SNOW", "UBER"]
DEFAULT_SYMBOLS = WATCHLIST_TIER1 + WATCHLIST_TIER2

BATCH_SIZE = 5
BATCH_DELAY_S = 0.6

def _expand(x):
    if isinstance(x, str):
        m = ENV.search(x)
        if m:
            return os.environ.get(m.group(1), x)
        return x
    if isinstance(x, dict):
        return {k:_expand(v) for k,v in x.items()}
    if isinstance(x, list):
        return [_expand(v) for v in x]
    return x

def _tier(wl: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    # a bare `tier1:` key loads as None; an explicit [] stays empty
    syms = wl.get(key)
    return [x.upper() for x in (default if syms is None else syms)]

@dataclass
class Settings:
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path="config/config.yaml"):
        with open(path, 'r', encoding='utf-8') as f:
            cfg = yaml.safe_load(f) or {}
        return cls(raw=_expand(cfg))

    def summary(self):
        c = ScannerConfig.from_settings(self)
        return (f"Source={c.base_url} timeout={c.timeout_s:g}s | Batch={c.batch_size} every {c.batch_delay_s:g}s "
                f"| Style={c.default_style} | Watchlist={len(c.symbols)} symbols")

@dataclass(frozen=True)
class ScannerConfig:
    base_url: str = YAHOO_BASE
    timeout_s: float = FETCH_TIMEOUT_S
    user_agent: str = USER_AGENT
    batch_size: int = BATCH_SIZE
    batch_delay_s: float = BATCH_DELAY_S
    default_style: str = DEFAULT_STYLE
    tier1: List[str] = field(default_factory=lambda: list(WATCHLIST_TIER1))
    tier2: List[str] = field(default_factory=lambda: list(WATCHLIST_TIER2))

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.batch_delay_s < 0:
            raise ValueError(f"batch_delay_s must be >= 0, got {self.batch_delay_s}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got {self.timeout_s}")
        resolve_style(self.default_style)

    @property
    def symbols(self) -> List[str]:
        return list(self.tier1) + list(self.tier2)

    @classmethod
    def from_settings(cls, s: Settings) -> "ScannerConfig":
        prov = s.raw.get('provider', {}) or {}
        scan = s.raw.get('scan', {}) or {}
        wl = s.raw.get('watchlist', {}) or {}
        return cls(
            base_url = prov.get('base_url', YAHOO_BASE),
            timeout_s = float(prov.get('timeout_s', FETCH_TIMEOUT_S)),
            user_agent = prov.get('user_agent', USER_AGENT),
            batch_size = int(scan.get('batch_size', BATCH_SIZE)),
            batch_delay_s = float(scan['batch_delay_ms']) / 1000.0 if 'batch_delay_ms' in scan else BATCH_DELAY_S,
            default_style = scan.get('default_style', DEFAULT_STYLE),
            tier1 = _tier(wl, 'tier1', WATCHLIST_TIER1),
            tier2 = _tier(wl, 'tier2', WATCHLIST_TIER2),
        )
