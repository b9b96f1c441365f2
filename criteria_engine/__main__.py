"""
Assessment Criteria Engine — Administrative command line.

Usage:
    python -m criteria_engine show F1                       # print the summary
    python -m criteria_engine show F1 --json --language ar
    python -m criteria_engine configure F1 --type maturity --levels-file levels.json \\
        --weight D1=50 --weight D2=25 --weight D3=25
    python -m criteria_engine delete F1 --yes
    python -m criteria_engine distribute 3                  # preview equal weights

Storage is chosen by --config, --db (SQLite file) or --base-url (document API).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .config import CRITERIA_TYPES, SUPPORTED_LANGUAGES, EngineConfig
from .criteria import (
    CriteriaController,
    CriteriaGateway,
    CriteriaLevel,
    Domain,
    FieldError,
    IncompleteLevelError,
    SetDomainWeight,
    SetLevels,
    SetType,
    add_level,
    distribute_equal_weights,
)
from .reporting import build_summary, export_json
from .store import build_store

logger = logging.getLogger("criteria_engine.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="criteria_engine",
        description=f"Assessment Criteria Engine v{__version__}",
    )
    parser.add_argument("--config", "-c", type=Path, help="Path to JSON configuration file")
    parser.add_argument("--db", type=str, default=None, help="SQLite database path (overrides config)")
    parser.add_argument("--base-url", type=str, default=None, help="Document API base URL (overrides config)")
    parser.add_argument("--token", type=str, default=None, help="Bearer token for the document API")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    show_p = sub.add_parser("show", help="Show the configured criteria for a framework")
    show_p.add_argument("framework_id")
    show_p.add_argument("--json", action="store_true", help="Print JSON instead of text")
    show_p.add_argument("--language", choices=SUPPORTED_LANGUAGES, default="en")
    show_p.add_argument("--output", "-o", type=Path, help="Also export the summary to this directory")

    cfg_p = sub.add_parser("configure", help="Create or replace a framework's criteria")
    cfg_p.add_argument("framework_id")
    cfg_p.add_argument("--type", required=True, choices=CRITERIA_TYPES)
    cfg_p.add_argument("--levels-file", type=Path, help="JSON list of levels (maturity/compliance)")
    cfg_p.add_argument(
        "--weight", action="append", default=[], metavar="DOMAIN=N",
        help="Domain weight; unspecified domains keep the equal distribution",
    )

    del_p = sub.add_parser("delete", help="Delete a framework's criteria")
    del_p.add_argument("framework_id")
    del_p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    dist_p = sub.add_parser("distribute", help="Print the equal weight distribution")
    dist_p.add_argument("domains", nargs="+", help="Domain count, or a list of domain ids")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EngineConfig:
    """Build configuration from a config file and CLI overrides."""
    if args.config and args.config.exists():
        config = EngineConfig.from_file(args.config)
    else:
        config = EngineConfig()

    if args.db:
        config.store.backend = "sqlite"
        config.store.sqlite_path = args.db
    if args.base_url:
        config.store.backend = "http"
        config.store.base_url = args.base_url
    if args.token:
        config.store.api_token = args.token
    config.verbose = config.verbose or args.verbose
    return config


def format_error(field_name: str, error: FieldError) -> str:
    params = ", ".join(f"{k}={v}" for k, v in error.params.items())
    return f"{field_name}: {error.key}" + (f" ({params})" if params else "")


def load_levels(path: Path, criteria_type: str) -> list[CriteriaLevel]:
    data = json.loads(path.read_text(encoding="utf-8"))
    levels: list[CriteriaLevel] = []
    for item in data:
        levels = add_level(levels, CriteriaLevel.from_dict(item), criteria_type)
    return levels


def parse_weights(pairs: list[str]) -> dict[str, float]:
    weights = {}
    for pair in pairs:
        domain_id, sep, value = pair.partition("=")
        if not sep or not domain_id:
            raise ValueError(f"Expected DOMAIN=N, got {pair!r}")
        weights[domain_id] = float(value)
    return weights


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

async def cmd_show(controller: CriteriaController, args: argparse.Namespace) -> int:
    criteria = await controller.refresh()
    if "general" in controller.errors:
        print(f"  ❌ {format_error('general', controller.errors['general'])}")
        return 1
    if criteria is None:
        print(f"  No assessment criteria configured for {args.framework_id}.")
        return 0

    summary = build_summary(criteria, controller.domains, args.language)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(f"\n  Framework:  {args.framework_id}")
        print(f"  Type:       {summary.type}")
        print(f"  Saved:      {summary.created_at}")
        print(f"  Weights:    {summary.total_weight:g}/100 {'✓' if summary.weight_ok else '✗'}")
        for row in summary.domain_rows:
            print(f"    {row['name']:40s} {row['weight']:6g}")
        if summary.level_rows:
            print("  Levels:")
            for row in summary.level_rows:
                print(f"    {row['value']:6g}  {row['label']} — {row['description']}")
        print()

    if args.output:
        path = export_json(summary, args.output, args.framework_id)
        print(f"  📄 JSON:  {path}")
    return 0


async def cmd_configure(controller: CriteriaController, args: argparse.Namespace) -> int:
    try:
        levels = load_levels(args.levels_file, args.type) if args.levels_file else None
        weights = parse_weights(args.weight)
    except (OSError, ValueError, IncompleteLevelError) as e:
        print(f"  ❌ {e}")
        return 1

    if not await controller.open_wizard():
        for name, error in controller.errors.items():
            print(f"  ❌ {format_error(name, error)}")
        return 1

    controller.dispatch(SetType(args.type))
    if levels is not None:
        controller.dispatch(SetLevels(tuple(levels)))
    for domain_id, weight in weights.items():
        try:
            controller.dispatch(SetDomainWeight(domain_id, weight))
        except KeyError:
            print(f"  ❌ Unknown domain for {args.framework_id}: {domain_id}")
            return 1

    # type → (levels →) domains → preview, then confirm
    ready = False
    while not ready:
        step = controller.current_step
        ready = controller.next_step()
        if controller.errors:
            print(f"  ❌ Step '{step}' is invalid:")
            for name, error in controller.errors.items():
                print(f"      {format_error(name, error)}")
            return 1

    if not await controller.save_criteria():
        for name, error in controller.errors.items():
            print(f"  ❌ {format_error(name, error)}")
        return 1
    print(f"  ✅ Saved {args.type} criteria for {args.framework_id}.")
    return 0


async def cmd_delete(controller: CriteriaController, args: argparse.Namespace) -> int:
    if not args.yes:
        answer = input(f"  Delete assessment criteria for {args.framework_id}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("  Aborted.")
            return 0

    controller.open_delete_confirmation()
    if not await controller.delete_criteria():
        print(f"  ❌ {format_error('general', controller.errors['general'])}")
        return 1
    print(f"  ✅ Criteria for {args.framework_id} deleted.")
    return 0


def cmd_distribute(args: argparse.Namespace) -> int:
    if len(args.domains) == 1 and args.domains[0].isdigit():
        ids = [f"D{i + 1}" for i in range(int(args.domains[0]))]
    else:
        ids = args.domains
    for w in distribute_equal_weights([Domain(id=d) for d in ids]):
        print(f"  {w.domain_id:20s} {w.weight}")
    return 0


async def main_async(argv: list[str] | None = None) -> int:
    """Async entry point."""
    args = parse_args(argv)
    if args.command == "distribute":
        return cmd_distribute(args)

    config = build_config(args)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    async with build_store(config.store) as store:
        gateway = CriteriaGateway(store, timeout=config.io_timeout_seconds)
        controller = CriteriaController(args.framework_id, gateway)
        if args.command == "show":
            return await cmd_show(controller, args)
        if args.command == "configure":
            return await cmd_configure(controller, args)
        if args.command == "delete":
            return await cmd_delete(controller, args)
    return 2


def main():
    """Synchronous entry point for `python -m criteria_engine`."""
    sys.exit(asyncio.run(main_async()))


if __name__ == "__main__":
    main()
