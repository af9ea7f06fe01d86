from typing import Optional

class FetchError(Exception):
    """Any failure to obtain a candle series for (symbol, interval)."""

    def __init__(self, message: str, symbol: Optional[str] = None, interval: Optional[str] = None):
        super().__init__(message)
        self.symbol = symbol
        self.interval = interval

class FetchTimeoutError(FetchError):
    pass

class UpstreamHttpError(FetchError):
    def __init__(self, status: int, symbol: Optional[str] = None, interval: Optional[str] = None):
        super().__init__(f"Yahoo Finance HTTP {status} for {symbol} ({interval})", symbol, interval)
        self.status = status

class NoDataError(FetchError):
    pass

class TransportError(FetchError):
    pass
