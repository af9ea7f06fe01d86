import argparse, asyncio, json, os
from .logging_utils import setup_logging
from .scanner import scan_watchlist
from .settings import ScannerConfig, Settings
from .timeframes import STYLE_TIMEFRAMES
from .types import ScanReport, SymbolResult

def fmt_symbol_line(r: SymbolResult) -> str:
    parts = []
    for tf in r.timeframes:
        c = tf.check
        parts.append(f"{tf.label}:{c.candle1 or '-'}/{c.candle2 or '-'}")
    verdict = f"ERROR {r.error}" if r.error else f"{r.alignment} {r.direction}"
    return f"[{r.symbol}] " + " ".join(parts) + f" | {verdict}"

def fmt_report(rep: ScanReport) -> str:
    lines = [fmt_symbol_line(r) for r in rep.results]
    aligned = sum(1 for r in rep.results if r.alignment != "none")
    lines.append("-"*60)
    lines.append(f"{rep.trading_style} ({'/'.join(rep.timeframe_labels)}) | {len(rep.results)} symbols "
                 f"| {aligned} aligned | {rep.duration_ms} ms | {rep.scanned_at.isoformat()}")
    return "\n".join(lines)

def main(argv=None):
    ap = argparse.ArgumentParser(prog="python -m ftfc", description="Scan a watchlist for Full Timeframe Continuity")
    ap.add_argument("symbols", nargs="*", help="tickers to scan (default: configured watchlist)")
    ap.add_argument("--style", choices=sorted(STYLE_TIMEFRAMES), help="trading style preset")
    ap.add_argument("--config", default="config/config.yaml")
    ap.add_argument("--json", action="store_true", help="print the report as JSON")
    args = ap.parse_args(argv)

    s = Settings.load(args.config) if os.path.exists(args.config) else Settings()
    setup_logging((s.raw.get('logging') or {}).get('level'))
    cfg = ScannerConfig.from_settings(s)

    rep = asyncio.run(scan_watchlist(args.symbols or None, args.style, config=cfg))
    if args.json:
        print(json.dumps(rep.to_dict(), indent=2))
    else:
        print("="*60)
        print(s.summary())
        print("-"*60)
        print(fmt_report(rep))
        print("="*60)
    return rep

if __name__ == '__main__':
    main()
