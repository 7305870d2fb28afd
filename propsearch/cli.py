#!/usr/bin/env python3
"""
Property Search CLI — search, load stats, one-shot questions, and the API server.

USAGE:
  python -m propsearch.cli search --city pune --bhk 3           # Structured search
  python -m propsearch.cli search --budget 12000000 --json      # JSON output
  python -m propsearch.cli stats                                # Load + merge report
  python -m propsearch.cli ask "3BHK ready to move in Pune under 1.2 Cr"

  python -m propsearch.cli serve                                # Start API server
  python -m propsearch.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

from propsearch.config import DATA_DIR, MAX_RESULTS
from propsearch.data.schemas import FilterCriteria, Property
from propsearch.data.store import PropertyStore
from propsearch.exceptions import LoadError
from propsearch.search import filter_properties, limit_results


def _load_store(args) -> PropertyStore | None:
    store = PropertyStore(Path(args.data_dir))
    try:
        asyncio.run(store.load())
    except LoadError as exc:
        print(f"  Load failed: {exc}", file=sys.stderr)
        return None
    return store


def _print_properties(properties: list[Property], total: int) -> None:
    print(f"\nPROPERTIES ({len(properties)} of {total:,} matches):\n")
    for i, p in enumerate(properties, 1):
        print(f"{i:<4}{p.project_name[:30]:<32}{p.unit_type[:8]:<10}Rs {p.price:>14,}  {p.status[:20]:<22}{p.full_address[:50]}")


def cmd_search(args):
    """Structured search against the merged snapshot."""
    store = _load_store(args)
    if store is None:
        return 1

    criteria = FilterCriteria(
        city=args.city,
        unit_type=args.bhk,
        max_price=args.budget,
        possession_status=args.status,
        locality=args.locality,
    )
    matches = filter_properties(store.get_all(), criteria, trace=args.trace)
    page = limit_results(matches, args.limit)

    if args.json:
        print(json.dumps({
            "filters": criteria.as_dict(),
            "total_matches": len(matches),
            "properties": [p.to_dict() for p in page],
        }, indent=2))
    else:
        _print_properties(page, len(matches))
    return 0


def cmd_stats(args):
    """Print the merge report."""
    store = _load_store(args)
    if store is None:
        return 1
    report = store.report
    print("\n" + "=" * 50)
    print("  PROPERTY DATA — MERGE REPORT")
    print("=" * 50)
    for key, value in report.to_dict().items():
        print(f"  {key.replace('_', ' '):<24}{value:>10,}")
    return 0


def cmd_ask(args):
    """Run the full parse → filter → summarize pipeline for one message."""
    from propsearch.assistant import PropertyAssistant

    store = _load_store(args)
    if store is None:
        return 1
    assistant = PropertyAssistant.from_config()

    async def _run():
        criteria = await assistant.parse_query(args.message)
        matches = filter_properties(store.get_all(), criteria)
        summary = await assistant.summarize(args.message, matches)
        return criteria, matches, summary

    criteria, matches, summary = asyncio.run(_run())
    print(f"\nFilters: {criteria.as_dict()}")
    print(f"\n{summary}")
    _print_properties(limit_results(matches, args.limit), len(matches))
    return 0


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Property Search API on port {args.port}...")
    if args.reload:
        # The reloader re-imports the app in a child process, which reads config from env
        os.environ["PROPSEARCH_DATA_DIR"] = str(args.data_dir)
        uvicorn.run("propsearch.main:app", host="0.0.0.0", port=args.port, reload=True,
                    timeout_keep_alive=65)
    else:
        from propsearch.main import create_app
        uvicorn.run(create_app(Path(args.data_dir)), host="0.0.0.0", port=args.port,
                    timeout_keep_alive=65)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Property Search — natural-language search over real-estate project data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", default=str(DATA_DIR), help=f"Directory holding the CSVs (default {DATA_DIR})")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # search subcommand
    search_parser = subparsers.add_parser("search", help="Structured property search")
    search_parser.add_argument("--city", help="City, matched within the address")
    search_parser.add_argument("--bhk", help="Bedroom count prefix, e.g. 3")
    search_parser.add_argument("--budget", type=int, help="Maximum price in rupees")
    search_parser.add_argument("--status", help="Possession status, e.g. Ready")
    search_parser.add_argument("--locality", help="Locality, matched within the address")
    search_parser.add_argument("--limit", type=int, default=MAX_RESULTS, help=f"Max results (default {MAX_RESULTS})")
    search_parser.add_argument("--json", action="store_true", help="Print JSON")
    search_parser.add_argument("--trace", action="store_true", help="Print every filter check")
    search_parser.set_defaults(func=cmd_search)

    # stats subcommand
    stats_parser = subparsers.add_parser("stats", help="Show the load/merge report")
    stats_parser.set_defaults(func=cmd_stats)

    # ask subcommand
    ask_parser = subparsers.add_parser("ask", help="Ask a free-text question (needs GROQ_API_KEY)")
    ask_parser.add_argument("message", help="Question, e.g. '2BHK in Mumbai under 50 L'")
    ask_parser.add_argument("--limit", type=int, default=MAX_RESULTS, help=f"Max results (default {MAX_RESULTS})")
    ask_parser.set_defaults(func=cmd_ask)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
