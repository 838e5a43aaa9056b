from __future__ import annotations

"""Command line export, import and reset of the persisted org chart state."""

import argparse
import json
import sys
from pathlib import Path

from orgchart.core.config import get_settings, resolve_path
from orgchart.core.logging import setup_logging
from orgchart.domain.errors import OrgChartError
from orgchart.services.state_store import get_store


def export_state(output: Path) -> None:
    state = get_store().get_or_seed_state()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(state, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Exported {len(state.get('employees') or [])} employees to {output}")


def import_state(source: Path) -> None:
    payload = json.loads(source.read_text(encoding="utf-8"))
    doc = get_store().replace_state(payload)
    print(f"Imported {len(doc['employees'])} employees from {source}")


def reset_state() -> None:
    get_store().reset()
    print("Stored state cleared; default data will be seeded on next read.")


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    parser = argparse.ArgumentParser(description="Manage the persisted org chart state.")
    sub = parser.add_subparsers(dest="command", required=True)
    export_cmd = sub.add_parser("export", help="write the current state to a JSON file")
    export_cmd.add_argument("--output", default="data/orgchart_export.json")
    import_cmd = sub.add_parser("import", help="replace the current state from a JSON file")
    import_cmd.add_argument("source")
    sub.add_parser("reset", help="clear the stored state")
    args = parser.parse_args(argv)

    if settings.state_backend == "memory":
        print("Warning: STATE_BACKEND=memory, changes will not outlive this process.")

    try:
        if args.command == "export":
            export_state(resolve_path(args.output))
        elif args.command == "import":
            import_state(resolve_path(args.source))
        else:
            reset_state()
    except (OrgChartError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
