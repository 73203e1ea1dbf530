import argparse
import logging
import sys
from pathlib import Path

from src.adapters.sqlite_db import SQLiteEventStore
from src.api.deps import Settings
from src.components.retention import run_sweep
from src.components.visitor import SaltInitError, init_salt
from src.core.ports import StoreError
from src.rules.loader import load_rules

logger = logging.getLogger("cli")


def handle_sweep(store: SQLiteEventStore, rules_path: Path) -> int:
    rules = load_rules(rules_path)
    result = run_sweep(store, rules.retention.retention_days)
    print(f"Deleted {result.deleted} events older than {result.cutoff.isoformat()}.")
    return 0


def handle_init_salt(store: SQLiteEventStore) -> int:
    existed = store.get_salt() is not None
    init_salt(store)
    print("Salt already present." if existed else "Salt created.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Nanolytica CLI")
    parser.add_argument("--db", help="Database path (default: $NANOLYTICA_DB_PATH)")
    parser.add_argument("--rules", help="Rules file (default: $NANOLYTICA_RULES_PATH)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("sweep", help="Delete events past the retention window now")
    subparsers.add_parser("init-salt", help="Create the visitor hash salt if absent")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    settings = Settings(
        db_path=args.db,
        rules_path=Path(args.rules) if args.rules else None,
    )

    try:
        store = SQLiteEventStore(settings.db_path)
    except StoreError as e:
        logger.error("Cannot open database %s: %s", settings.db_path, e)
        return 1

    try:
        if args.command == "sweep":
            return handle_sweep(store, settings.rules_path)
        return handle_init_salt(store)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Rules load failed: %s", e)
        return 1
    except (StoreError, SaltInitError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
