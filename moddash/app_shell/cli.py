import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from moddash.adapters.clock import FixedClock, SystemClock
from moddash.api.auth_utils import get_password_hash
from moddash.api.deps import Settings, get_member_source, get_member_store
from moddash.api.schemas import StatsResponse
from moddash.app_shell.config import prepare_storage, seed_role_mappings
from moddash.components.importer import ImportInput, run_import
from moddash.components.status import ClassifyInput, run_classify
from moddash.rules.loader import load_rules
from moddash.rules.models import DashboardRules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> DashboardRules:
    try:
        return load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)


def handle_make_hash(args: argparse.Namespace) -> None:
    print(get_password_hash(args.password))


def handle_import(settings: Settings, rules: DashboardRules, args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File {path} not found.")
        sys.exit(1)

    store = get_member_store(settings)
    inp = ImportInput(filename=path.name, data=path.read_bytes())
    output = run_import(inp, store, rules.imports)
    if not output.success:
        logger.error(f"Import failed: {output.error}")
        sys.exit(1)

    for warning in output.warnings:
        print(f"warning: {warning}")
    print(f"Imported {output.count} members.")


def handle_stats(settings: Settings, rules: DashboardRules, args: argparse.Namespace) -> None:
    clock: FixedClock | SystemClock = SystemClock()
    if args.at:
        try:
            clock = FixedClock(datetime.fromisoformat(args.at))
        except ValueError:
            logger.error(f"--at {args.at!r} is not an ISO date.")
            sys.exit(1)

    source = get_member_source(get_member_store(settings), rules)
    summary = run_classify(ClassifyInput(), source, clock, rules.status).summary

    if args.json:
        payload = StatsResponse.from_summary(summary).model_dump(mode="json", by_alias=True)
        print(json.dumps(payload, indent=2))
        return

    print(f"Active:   {summary.active}")
    print(f"Expiring: {summary.expiring}")
    print(f"Lapsed:   {summary.lapsed}")
    print("Expiring soon:")
    for m in summary.expiring_soon:
        print(f" - {m.username} (tier {m.tier}) ends {m.end}")
    print("Moderators:")
    for m in summary.moderators:
        print(f" - {m.username}")


def handle_seed_roles(settings: Settings, rules: DashboardRules, args: argparse.Namespace) -> None:
    count = seed_role_mappings(settings.db_path, rules, force=args.force)
    if count == 0:
        print("Role mappings already present (use --force to overwrite).")
    else:
        print(f"Seeded {count} role mappings.")


def handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run("moddash.api.main:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
    parser = argparse.ArgumentParser(description="Mod Dashboard CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # make-hash
    hash_parser = subparsers.add_parser(
        "make-hash", help="Print an argon2 hash for MOD_PASSWORD_HASH"
    )
    hash_parser.add_argument("password", help="Plain password to hash")

    # import
    import_parser = subparsers.add_parser(
        "import", help="Replace stored members from a csv/xlsx file"
    )
    import_parser.add_argument("file", help="Path to the member file")

    # stats
    stats_parser = subparsers.add_parser("stats", help="Print the status summary")
    stats_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    stats_parser.add_argument("--at", help="Classify as of this ISO date instead of now")

    # seed-roles
    seed_parser = subparsers.add_parser("seed-roles", help="Copy role mappings from rules.yaml")
    seed_parser.add_argument("--force", action="store_true", help="Overwrite existing mappings")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the web app")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()

    if args.command == "make-hash":
        handle_make_hash(args)
        return
    if args.command == "serve":
        handle_serve(args)
        return

    settings = Settings()
    rules = get_rules(settings)
    prepare_storage(
        settings.db_path,
        settings.migrations_dir,
        rules,
        seed_roles=args.command != "seed-roles",
    )

    if args.command == "import":
        handle_import(settings, rules, args)
    elif args.command == "stats":
        handle_stats(settings, rules, args)
    elif args.command == "seed-roles":
        handle_seed_roles(settings, rules, args)


if __name__ == "__main__":
    main()
