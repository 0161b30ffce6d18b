"""CLI entry point for consolelog.

Commands:
    consolelog demo              serve the demo page (needs a Chrome Logger extension)
    consolelog decode <value>    decode an X-ChromeLogger-Data header value
"""

from __future__ import annotations

import argparse
import json
import sys


def cli(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="consolelog",
        description="Log server-side values to the browser's developer console",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- demo ---
    demo_parser = subparsers.add_parser("demo", help="Serve the demo page")
    demo_parser.add_argument("--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)")
    demo_parser.add_argument("--port", type=int, default=8000, help="Server port (default: 8000)")

    # --- decode ---
    decode_parser = subparsers.add_parser("decode", help="Decode a header value")
    decode_parser.add_argument(
        "value", nargs="?", help="Header value or full header line (default: read stdin)"
    )
    decode_parser.add_argument("--raw", action="store_true", help="Print the JSON payload as-is")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "demo":
        _cmd_demo(args)
    elif args.command == "decode":
        _cmd_decode(args)


def _cmd_demo(args: argparse.Namespace) -> None:
    """Start the demo server."""
    import uvicorn

    from consolelog.server.app import create_app

    app = create_app()

    print(f"\n  consolelog demo at http://{args.host}:{args.port}")
    print("  Open it with a Chrome Logger extension and check the console.\n")

    uvicorn.run(app, host=args.host, port=args.port, log_level="info")


def _cmd_decode(args: argparse.Namespace) -> None:
    """Print the rows carried by a header value."""
    from consolelog.core.encoding import decode_header_value

    value = args.value if args.value is not None else sys.stdin.read()
    try:
        payload = decode_header_value(value)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.raw:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    rows = payload.get("rows", [])
    print(f"\nChrome Logger v{payload.get('version', '?')} ({len(rows)} rows)")
    print("-" * 80)
    depth = 0
    for data, call_site, kind in rows:
        if kind == "groupEnd":
            depth = max(depth - 1, 0)
            continue
        label = kind or "log"
        text = " ".join(
            item if isinstance(item, str) else json.dumps(item, ensure_ascii=False)
            for item in data
        )
        print(f"{'  ' * depth}[{label}] {text}")
        if call_site:
            print(f"{'  ' * depth}    at {call_site}")
        if kind in ("group", "groupCollapsed"):
            depth += 1
    print()


if __name__ == "__main__":
    cli()
