#!/usr/bin/env python3
"""
Index migration runner for MongoDB.

Creates the unique indexes the application relies on for conflict
detection (users.email, users.federatedId, products.sku) and reports
which of them exist.

Usage:
    python run_migrations.py               # Create missing indexes
    python run_migrations.py --status      # Show index status
    python run_migrations.py --dry-run     # Show what would be created

Configuration:
    Set MONGODB_URI (and optionally MONGODB_DATABASE) in your .env file:
    MONGODB_URI=mongodb://localhost:27017/stockroom
"""

import argparse
import sys

from pymongo.database import Database
from pymongo.errors import OperationFailure, PyMongoError
from rich.console import Console
from rich.table import Table

from modules.auth.repository import UserRepository
from modules.products.repository import ProductRepository
from shared.config import get_settings
from shared.database import get_database, get_mongo_client

console = Console()

# collection -> index names that ensure_indexes() creates
EXPECTED_INDEXES = {
    UserRepository.collection_name: ["email_unique", "federatedId_unique"],
    ProductRepository.collection_name: ["sku_unique"],
}


def get_db() -> Database:
    """Connect and ping the configured database, exiting on failure."""
    settings = get_settings()

    if not settings.mongodb_uri:
        console.print("[red]Error:[/red] MONGODB_URI is not set.")
        console.print()
        console.print("Set it in your .env file:")
        console.print("  MONGODB_URI=mongodb://localhost:27017/stockroom")
        sys.exit(1)

    client = get_mongo_client()
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)

    return get_database(client)


def get_existing_indexes(db: Database) -> dict[str, set[str]]:
    """Index names currently present per collection."""
    existing = {}
    for collection in EXPECTED_INDEXES:
        try:
            existing[collection] = set(db[collection].index_information())
        except OperationFailure:
            # Collection does not exist yet
            existing[collection] = set()
    return existing


def get_pending_indexes(db: Database) -> list[tuple[str, str]]:
    """(collection, index name) pairs that still need creating."""
    existing = get_existing_indexes(db)
    return [
        (collection, name)
        for collection, names in EXPECTED_INDEXES.items()
        for name in names
        if name not in existing[collection]
    ]


def run_migrations(db: Database, dry_run: bool = False) -> None:
    """Create all missing indexes."""
    pending = get_pending_indexes(db)

    if not pending:
        console.print("[green]All indexes are up to date![/green]")
        return

    console.print(f"Found {len(pending)} missing index(es):")
    for collection, name in pending:
        console.print(f"  - {collection}.{name}")
    console.print()

    if dry_run:
        console.print("[cyan]Dry run, nothing created.[/cyan]")
        return

    try:
        for repository in (UserRepository(db), ProductRepository(db)):
            for name in repository.ensure_indexes():
                console.print(f"[green]✓[/green] {repository.collection_name}.{name}")
    except OperationFailure as e:
        # Typically existing duplicates that violate the new unique index
        console.print(f"[red]✗[/red] Index creation failed: {e}")
        raise

    console.print()
    console.print("[green]All indexes created successfully![/green]")


def show_status(db: Database) -> None:
    """Show which expected indexes exist."""
    existing = get_existing_indexes(db)

    table = Table(title="Index Status")
    table.add_column("Collection", style="cyan")
    table.add_column("Index")
    table.add_column("Status", style="green")

    for collection, names in EXPECTED_INDEXES.items():
        for name in names:
            state = "[green]Present[/green]" if name in existing[collection] else "[yellow]Missing[/yellow]"
            table.add_row(collection, name, state)

    console.print(table)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Create MongoDB indexes for Stockroom",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_migrations.py           Create missing indexes
  python run_migrations.py --status  Show index status
  python run_migrations.py --dry-run Show what would be created
        """
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show index status without creating anything"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which indexes would be created without creating them"
    )

    args = parser.parse_args()

    console.print("[bold]Stockroom Database Migrations[/bold]")
    console.print()

    db = get_db()
    try:
        if args.status:
            show_status(db)
        else:
            run_migrations(db, dry_run=args.dry_run)
    finally:
        db.client.close()


if __name__ == "__main__":
    main()
