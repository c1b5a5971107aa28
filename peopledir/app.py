import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, List

from . import __version__
from .controller import SearchController
from .env import Settings, load_env, log_level_from_env
from .html_surface import HtmlGridSurface
from .loader import DEFAULT_DIVISION, division_info, extract_entries, fetch_document, load_people, to_people
from .logger import get_logger
from .ranking import compute_order
from .reconcile import MissingDisplaySurface, apply_order
from .records import CATEGORIES, Person, RecordId
from .scheduler import AsyncioScheduler
from .schema import validate_collection
from .stats import directory_stats


def _load(args: argparse.Namespace, settings: Settings) -> List[Person]:
    return load_people(
        args.data or settings.data_source,
        category=args.category,
        division=args.division,
        timeout=settings.http_timeout,
    )


def _print_people(ids: List[RecordId], by_id: Dict[RecordId, Person]) -> None:
    if not ids:
        print("No matches.")
        return
    for position, record_id in enumerate(ids, start=1):
        person = by_id[record_id]
        detail = person.title or person.pgy_level or person.fellowship_type
        print(f"{position:>3}. {person.name}" + (f" ({detail})" if detail else ""))


def cmd_search(args: argparse.Namespace, settings: Settings) -> None:
    people = _load(args, settings)
    ids = compute_order(people, args.query)
    _print_people(ids, {p.id: p for p in people})


def cmd_stats(args: argparse.Namespace, settings: Settings) -> None:
    source = args.data or settings.data_source
    document = fetch_document(source, timeout=settings.http_timeout)
    people = to_people(extract_entries(document, "faculty", args.division)) if document is not None else []
    stats = directory_stats(people)
    if args.json:
        print(json.dumps(stats, indent=2))
        return
    info = division_info(document, args.division) or {}
    label = info.get("name") or args.division or DEFAULT_DIVISION
    print(f"Faculty statistics ({label}):")
    for key, value in stats.items():
        if value is None:
            value = "n/a"
        elif isinstance(value, float):
            value = f"{value:.1f}"
        print(f"  {key.replace('_', ' ').capitalize()}: {value}")


def cmd_validate(args: argparse.Namespace, settings: Settings) -> None:
    document = fetch_document(args.data or settings.data_source, timeout=settings.http_timeout)
    if document is None:
        raise SystemExit(f"Could not load directory: {args.data or settings.data_source}")
    entries = extract_entries(document, args.category, args.division)
    problems = validate_collection(entries, strict=args.strict)
    if problems:
        print("Invalid:")
        for index, errors in problems:
            for e in errors:
                print(f" - entry {index}: {e}")
        raise SystemExit(2)
    print(f"Valid ({len(entries)} entries)")


def cmd_reconcile(args: argparse.Namespace, settings: Settings) -> None:
    html_path = Path(args.html)
    if not html_path.exists():
        raise SystemExit(f"HTML file not found: {html_path}")
    try:
        surface = HtmlGridSurface(html_path.read_text(encoding="utf-8"), args.container_id)
    except MissingDisplaySurface as e:
        get_logger().error("Cannot reconcile page", html=str(html_path), error=str(e))
        raise SystemExit(str(e))

    people = _load(args, settings)
    ordered = compute_order(people, args.query)
    apply_order(surface, ordered, [p.id for p in people])

    output = Path(args.output) if args.output else html_path
    output.write_text(surface.render(), encoding="utf-8")
    print(f"Showing {len(ordered)} of {len(people)} cards; wrote {output}")


async def _interactive_session(people: List[Person], delay_ms: int, name: str) -> None:
    loop = asyncio.get_running_loop()
    by_id = {p.id: p for p in people}

    def show(ids: List[RecordId]) -> None:
        print(f"--- {len(ids)} of {len(people)}")
        _print_people(ids, by_id)

    controller = SearchController(people, AsyncioScheduler(loop), show, delay_ms=delay_ms, name=name)
    controller.start()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        controller.on_input(line.rstrip("\n"))
    # Let the last pending evaluation settle before exiting
    while controller.has_pending:
        await asyncio.sleep(delay_ms / 1000.0)


def cmd_interactive(args: argparse.Namespace, settings: Settings) -> None:
    people = _load(args, settings)
    delay_ms = args.delay_ms if args.delay_ms is not None else settings.debounce_ms
    print("Type a query per line; empty line shows everyone; Ctrl-D to quit.")
    asyncio.run(_interactive_session(people, delay_ms, args.category))


def _add_source_args(p: argparse.ArgumentParser, category: bool = True) -> None:
    p.add_argument("--data", help="Directory JSON path or URL (default: $PEOPLEDIR_DATA or data/faculty.json)")
    if category:
        p.add_argument("--category", default="faculty", choices=CATEGORIES, help="Directory type (default: faculty)")
    p.add_argument("--division", help="Faculty division key (default: body-imaging)")


def main(argv: List[str] | None = None):
    load_env()
    get_logger(level=log_level_from_env(), enable_file=False)
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(prog="peopledir", description="People directory search")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    srch = subparsers.add_parser("search", help="Print a directory ranked against a query")
    _add_source_args(srch)
    srch.add_argument("--query", default="", help="Search text; empty shows the default order")
    srch.set_defaults(func=cmd_search)

    sts = subparsers.add_parser("stats", help="Print faculty statistics for a division")
    _add_source_args(sts, category=False)
    sts.add_argument("--json", action="store_true", help="Print statistics as JSON")
    sts.set_defaults(func=cmd_stats, category="faculty")

    val = subparsers.add_parser("validate", help="Validate every entry of a directory listing")
    _add_source_args(val)
    val.add_argument("--strict", action="store_true", help="Also reject unknown status values")
    val.set_defaults(func=cmd_validate)

    rec = subparsers.add_parser("reconcile", help="Show/hide and reorder the cards of a rendered HTML grid")
    rec.add_argument("--html", required=True, help="Rendered page containing the card grid")
    _add_source_args(rec)
    rec.add_argument("--query", default="", help="Search text; empty restores the default order")
    rec.add_argument("--container-id", default="facultyGrid", help="Id of the grid element (default: facultyGrid)")
    rec.add_argument("--output", help="Where to write the page (default: overwrite --html)")
    rec.set_defaults(func=cmd_reconcile)

    itr = subparsers.add_parser("interactive", help="Search as you type, one query per line")
    _add_source_args(itr)
    itr.add_argument("--delay-ms", type=int, help="Debounce delay (default: $PEOPLEDIR_DEBOUNCE_MS or 300)")
    itr.set_defaults(func=cmd_interactive)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args, settings)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
