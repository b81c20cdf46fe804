"""
Job Board - CLI Entry Point.

Commands:
    serve       run the API with uvicorn
    init-db     create the document table
    migrate     apply Alembic migrations
    reconcile   report (and with --apply, remove) items left under two partitions
"""

import argparse
import logging

from dotenv import load_dotenv

load_dotenv()

from jobboard.config import settings  # noqa: E402
from jobboard.db import DocumentStore, create_db_engine, init_db  # noqa: E402

logger = logging.getLogger("jobboard")


def _store() -> DocumentStore:
    return DocumentStore(create_db_engine(settings.database_url))


def serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("jobboard.api.app:create_app", factory=True, host=args.host, port=args.port, reload=args.reload)
    return 0


def init_schema(args: argparse.Namespace) -> int:
    store = _store()
    init_db(store.engine)
    print(f"Schema ready on {store.engine.url.render_as_string(hide_password=True)}")
    return 0


def migrate(args: argparse.Namespace) -> int:
    from alembic import command
    from alembic.config import Config

    command.upgrade(Config(args.config), "head")
    print("Upgrade completed successfully!")
    return 0


def reconcile_duplicates(args: argparse.Namespace) -> int:
    """Print stale copies per relocatable table; exit 1 if any remain unrepaired."""
    from jobboard.resources import build_resources
    from jobboard.services.relocation import reconcile

    store = _store()
    resources = build_resources(store)
    found = 0
    for controller in resources.relocatable:
        stale = reconcile(store, controller.table, apply=args.apply)
        found += len(stale)
        for item in stale:
            key = controller.schema.key_of(item)
            status = "deleted" if args.apply else "stale"
            print(f"{controller.table}: {status} {key}")

    if not found:
        print("No duplicate items found")
        return 0
    if args.apply:
        print(f"Removed {found} stale cop{'y' if found == 1 else 'ies'}")
        return 0
    print(f"{found} stale cop{'y' if found == 1 else 'ies'} found, rerun with --apply to remove")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the job board CLI."""
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(prog="jobboard", description="Job board backend")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the API server")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=5000)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=serve)

    p_init = sub.add_parser("init-db", help="Create the document table")
    p_init.set_defaults(func=init_schema)

    p_migrate = sub.add_parser("migrate", help="Apply Alembic migrations")
    p_migrate.add_argument("--config", default="alembic.ini")
    p_migrate.set_defaults(func=migrate)

    p_reconcile = sub.add_parser("reconcile", help="Find items stored under more than one partition")
    p_reconcile.add_argument("--apply", action="store_true", help="Delete the stale copies")
    p_reconcile.set_defaults(func=reconcile_duplicates)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
