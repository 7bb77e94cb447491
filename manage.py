#!/usr/bin/env python3
"""
Stockflow management CLI.

Usage:
    python manage.py migrate             Apply pending schema migrations
    python manage.py status              Show migration status
    python manage.py reconcile           Retry pending stock restorations
    python manage.py verify-ledger ID    Replay a raw material's stock ledger
    python manage.py low-stock           List materials at or below minimum stock
"""

import argparse
import asyncio
import sys

from src.application import (
    ReconcileCompensationsRequest,
    get_list_low_stock_use_case,
    get_reconcile_compensations_use_case,
    get_verify_ledger_use_case,
)
from src.config import configure_logging
from src.core.exceptions import FulfillmentError
from src.infrastructure.storage.sqlite import close_pool
from src.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    initialize_database,
)


async def cmd_migrate(args: argparse.Namespace) -> int:
    results = await initialize_database(create_backup_before=not args.no_backup)
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    if not results:
        print("Database is up to date")
    return 0 if all(r.success for r in results) else 1


async def cmd_status(args: argparse.Namespace) -> int:
    status = await get_migration_status()
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Pending migrations: {status['pending_migrations']}")
    return 0


async def cmd_reconcile(args: argparse.Namespace) -> int:
    use_case = get_reconcile_compensations_use_case()
    result = await use_case.execute(
        ReconcileCompensationsRequest(limit=args.limit, actor=args.actor)
    )
    print(f"Examined: {result.examined}")
    print(f"Resolved: {result.resolved}")
    print(f"Still pending: {result.still_pending}")
    print(f"Failed (manual reconciliation needed): {result.failed}")
    return 1 if result.failed else 0


async def cmd_verify_ledger(args: argparse.Namespace) -> int:
    verification = await get_verify_ledger_use_case().execute(args.material_id)
    print(
        f"Material {verification.material_id}: {verification.transaction_count} rows, "
        f"ledger {verification.ledger_stock}, current {verification.current_stock}"
    )
    for issue in verification.issues:
        print(f"  [{issue.check}] tx={issue.transaction_id}: {issue.message}")
    print("OK" if verification.consistent else "INCONSISTENT")
    return 0 if verification.consistent else 1


async def cmd_low_stock(args: argparse.Namespace) -> int:
    materials = await get_list_low_stock_use_case().execute()
    for material in materials:
        print(
            f"{material.id:>5}  {material.name:<30} {material.current_stock} "
            f"{material.unit} (min {material.min_stock}) {material.status.value}"
        )
    if not materials:
        print("No materials below minimum stock")
    return 0


async def _run(args: argparse.Namespace) -> int:
    try:
        return await args.func(args)
    except FulfillmentError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    finally:
        await close_pool()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stockflow management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending schema migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    # reconcile
    p_reconcile = sub.add_parser("reconcile", help="Retry pending stock restorations")
    p_reconcile.add_argument("--limit", type=int, default=100, help="Records per run (default: 100)")
    p_reconcile.add_argument("--actor", default=None, help="Recorded on ledger rows")
    p_reconcile.set_defaults(func=cmd_reconcile)

    # verify-ledger
    p_verify = sub.add_parser("verify-ledger", help="Replay a raw material's stock ledger")
    p_verify.add_argument("material_id", type=int, help="Raw material ID")
    p_verify.set_defaults(func=cmd_verify_ledger)

    # low-stock
    p_low = sub.add_parser("low-stock", help="List materials at or below minimum stock")
    p_low.set_defaults(func=cmd_low_stock)

    args = parser.parse_args()
    configure_logging()
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
