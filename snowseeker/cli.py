"""
SnowSeeker Command Line Interface (CLI)
=======================================

The interactive resort browser you run like:

    python -m snowseeker.cli
    python -m snowseeker.cli --data my_resorts.json --device tablet

The dataset is read once at startup; failing to read it ends the program.
After that every command only changes the sort mode, the search text, the
favorites or the selected resort, and the list is re-derived from the
catalog.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import argparse
import logging
import shlex
import sys

from .catalog import ResortCatalog, load_catalog
from .detail import Presentation, presentation_for, render_detail, render_split
from .favorites import Favorites
from .loader import DEFAULT_DATASET, DatasetError
from .models import MatchMode, Resort, SortMode
from .view import ResortListView

logger = logging.getLogger(__name__)

HELP = """
Commands:
  help
  list [n]                         show the list (first n rows)
  stats

  sort default|alphabetical|country
  search <text>                    (example: search cham)
  clear                            remove the search text
  match case|accent                how search compares names

  open <id|row>                    show a resort (example: open 2)
  back                             close the detail view
  fav [id|row]                     toggle favorite (default: open resort)
  favorites

  values country [prefix]
  export csv|json "<path>"
  report "<path.docx>"
  quit
"""


@dataclass
class Session:
    """State of one interactive session."""
    view: ResortListView
    presentation: Presentation = Presentation.STACKED
    selected: Optional[Resort] = None
    dataset_name: str = DEFAULT_DATASET.name


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the SnowSeeker CLI.

    1) Load dataset (fatal on failure)
    2) Build the list view
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="snowseeker", description="Browse ski resorts.")
    ap.add_argument("--data", default=str(DEFAULT_DATASET), help="Path to resorts .json or .xlsx")
    ap.add_argument("--device", default="phone", choices=("phone", "tablet"),
                    help="Device class; tablets use the split layout")
    ap.add_argument("--match", default=MatchMode.CASE_INSENSITIVE.value,
                    choices=[m.value for m in MatchMode], help="Search comparison mode")
    ap.add_argument("--sort", default=SortMode.DEFAULT.value, help="Initial sort mode")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.data)
    except DatasetError as e:
        logger.error("Cannot start without resort data: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = new_session(catalog, device=args.device, match=MatchMode(args.match), sort=args.sort)
    session.dataset_name = args.data
    print(f"Loaded {len(catalog)} resorts. Type 'help' for commands.")
    print_screen(session)

    while True:
        try:
            line = input("resorts> ")
        except EOFError:
            break
        if not line.strip():
            continue
        if line.strip().lower() in ("quit", "exit"):
            break
        try:
            handle(session, line)
        except (KeyError, ValueError, OSError, ImportError) as e:
            msg = e.args[0] if isinstance(e, KeyError) and e.args else e
            print(f"Error: {msg}")
    return 0


def new_session(catalog: ResortCatalog, device: str = "phone",
                match: MatchMode = MatchMode.CASE_INSENSITIVE, sort="default") -> Session:
    view = ResortListView(catalog=catalog, favorites=Favorites())
    view.set_match_mode(match)
    view.set_sort(sort)
    return Session(view=view, presentation=presentation_for(device))


def handle(session: Session, line: str) -> None:
    """Handle one command line."""
    view = session.view

    # search text is taken verbatim (no shell-style splitting or trimming)
    if line.lower().startswith("search "):
        text = _unquote(line[len("search "):])
        view.set_search(text)
        view.command_log.append(f"search {text!r}")
        print_screen(session)
        return

    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd in ("list", "show"):
        n = int(parts[1]) if len(parts) >= 2 else None
        print_screen(session, limit=n)
        return

    if cmd == "stats":
        shown = view.displayed()
        print(f"Showing {len(shown)} of {len(view.catalog)} resorts | "
              f"sort={view.state.sort_mode.label} | search={view.state.search_text!r} | "
              f"favorites={len(view.favorites)}")
        return

    if cmd == "sort":
        if len(parts) < 2:
            raise ValueError("usage: sort default|alphabetical|country")
        mode = view.set_sort(parts[1])
        view.command_log.append(f"sort {mode.value}")
        print(f"Sorted: {mode.label}")
        print_screen(session)
        return

    if cmd == "clear" or (cmd == "search" and len(parts) == 1):
        view.clear_search()
        view.command_log.append("clear search")
        print_screen(session)
        return

    if cmd == "match":
        if len(parts) < 2:
            raise ValueError("usage: match case|accent")
        view.set_match_mode(MatchMode(parts[1].lower()))
        print(f"Search comparison: {view.state.match_mode.value}")
        return

    if cmd == "open":
        if len(parts) < 2:
            raise ValueError("usage: open <id|row>")
        session.selected = view.select(parts[1]).resort
        print_screen(session, show_detail=True)
        return

    if cmd == "back":
        session.selected = None
        print_screen(session)
        return

    if cmd == "fav":
        resort = view.select(parts[1]).resort if len(parts) >= 2 else session.selected
        if resort is None:
            raise ValueError("no resort open; use: fav <id|row>")
        now = view.favorites.toggle(resort)
        print(f"{resort.name} {'added to' if now else 'removed from'} favorites.")
        return

    if cmd == "favorites":
        favs = [r for r in view.catalog if view.favorites.contains(r)]
        if not favs:
            print("No favorites yet.")
        for r in favs:
            print(f"{r.id}: {r.name} ({r.country})")
        return

    if cmd == "values":
        if len(parts) < 2 or parts[1].lower() != "country":
            raise ValueError("values field must be: country")
        prefix = parts[2].lower() if len(parts) >= 3 else ""
        for c in view.catalog.countries():
            if c.lower().startswith(prefix):
                print(f"{c} ({len(view.catalog.by_country[c])})")
        return

    if cmd == "export":
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt, out_path = parts[1].lower(), parts[2]
        if fmt == "csv":
            n = view.export_csv(out_path)
        elif fmt == "json":
            n = view.export_json(out_path)
        else:
            print("Unknown export format. Use: csv or json")
            return
        print(f"Exported {n} resorts to {out_path}")
        return

    if cmd == "report":
        from .report import ReportConfig, generate_docx_report
        if len(parts) < 2:
            raise ValueError('usage: report "<path.docx>"')
        cfg = ReportConfig(dataset_name=session.dataset_name, command_log=view.command_log)
        label = f"{view.state.sort_mode.label}, search {view.state.search_text!r}"
        generate_docx_report(view.rows(), parts[1], config=cfg, scope_label=label)
        print(f"Report written to {parts[1]}")
        return

    print("Unknown command. Type 'help'.")


def list_lines(session: Session, limit: Optional[int] = None) -> List[str]:
    rows = session.view.rows()
    if not rows:
        return ["No resorts match your search."]
    shown = rows if limit is None else rows[:limit]
    out = [f"{i:>3}. {row.label()}" for i, row in enumerate(shown, start=1)]
    if len(shown) < len(rows):
        out.append(f"... ({len(rows)} total, showing {len(shown)})")
    return out


def print_screen(session: Session, limit: Optional[int] = None, show_detail: bool = False) -> None:
    """Print the list and/or detail view for the session's layout.

    The split layout always shows both panes; the stacked layout shows the
    detail view only when `show_detail` is set.
    """
    detail = None
    if session.selected is not None:
        detail = render_detail(session.selected, session.view.favorites.contains(session.selected))

    if session.presentation is Presentation.SPLIT:
        lines = render_split(["Resorts", ""] + list_lines(session, limit), detail)
    elif show_detail and detail is not None:
        lines = detail
    else:
        lines = ["Resorts", ""] + list_lines(session, limit)
    for line in lines:
        print(line)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] in ('"', "'") and text[-1] == text[0]:
        return text[1:-1]
    return text


if __name__ == "__main__":
    sys.exit(main())
