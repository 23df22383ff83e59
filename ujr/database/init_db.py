"""
Database initialization and seeding.

This script:
- Creates all database tables
- Optionally adds sample users for development/testing
- Can reset the database (drop and recreate)
- Prints the users and jobs currently stored

Usage:
    # Create tables
    python -m ujr.database.init_db

    # Reset database (drops all tables and recreates)
    python -m ujr.database.init_db --reset

    # Add sample data for testing
    python -m ujr.database.init_db --sample-data
"""

import argparse
import logging
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from ujr.config import print_settings
from ujr.core.exceptions import UserAlreadyExistsError
from ujr.core.logging import configure_logging
from ujr.database.session import engine, get_db_context, create_all_tables, drop_all_tables
from ujr.models import Job, User
from ujr.services.users import get_users_service

logger = logging.getLogger(__name__)


def create_tables(reset: bool = False, engine_instance=None) -> None:
    """
    Create all database tables.

    Args:
        reset: If True, drop existing tables first
        engine_instance: Engine to use (defaults to the global engine)
    """
    engine_instance = engine_instance if engine_instance is not None else engine

    if reset:
        print("🗑️  Dropping existing tables...")
        drop_all_tables(engine_instance)
        print("✅ Tables dropped")

    print("📊 Creating database tables...")
    create_all_tables(engine_instance)
    print("✅ Tables created")


def sample_users() -> List[User]:
    """
    Build the sample users.

    Two of them share the "engineer" job so the seed exercises job
    reuse.
    """
    return [
        User(name="Ivan", surname="Petrov", age=30,
             job=Job(name="engineer", salary=1000)),
        User(name="Anna", surname="Smirnova", age=27,
             job=Job(name="engineer", salary=1000)),
        User(name="Oleg", surname="Ivanov", age=45,
             job=Job(name="manager", salary=1500)),
        User(name="Maria", surname="Sokolova", age=19),
    ]


def seed_sample_data(session_factory: Optional[sessionmaker] = None) -> int:
    """
    Seed sample users through the service so dedup rules apply.

    Users that already exist are skipped.

    Returns:
        Number of users created
    """
    print("\n🌱 Seeding sample users...")
    created = 0

    for user in sample_users():
        try:
            # Commit expires the user, so render it while the session is open
            with get_db_context(session_factory) as db:
                user_id = get_users_service(db).save(user)
                label = f"{user_id}: {user}"
            print(f"    ✅ {label}")
            created += 1
        except UserAlreadyExistsError:
            print(f"    ⏭️  {user.name} {user.surname} already exists")

    print(f"✅ Sample data seeded ({created} new)")
    return created


def print_database_status(session_factory: Optional[sessionmaker] = None) -> None:
    """Print current database status and counts."""
    print("\n" + "=" * 60)
    print("📊 Database Status")
    print("=" * 60)

    with get_db_context(session_factory) as db:
        service = get_users_service(db)
        users = service.list_users()
        jobs = service.repository.list_jobs()

        print(f"  Users: {len(users)}")
        print(f"  Jobs:  {len(jobs)}")

        if users:
            print("\n  Current Users:")
            for user in users:
                print(f"    • [{user.id}] {user}")

    print("=" * 60)


def initialize_database(reset: bool = False, sample_data: bool = False) -> None:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add sample users for testing
    """
    print("=" * 60)
    print("🗄️  Database Initialization")
    print("=" * 60)

    logger.info("Initializing database (reset=%s, sample_data=%s)", reset, sample_data)

    print("⚙️  Settings:")
    print_settings()

    create_tables(reset=reset)

    if sample_data:
        seed_sample_data()

    print_database_status()

    print("\n✅ Database initialization complete!")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the user/job registry database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create tables
  python -m ujr.database.init_db

  # Reset database (drop all tables and recreate)
  python -m ujr.database.init_db --reset

  # Add sample data for testing
  python -m ujr.database.init_db --sample-data

  # Full reset with sample data, no prompt
  python -m ujr.database.init_db --reset --sample-data --yes
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample users for development/testing"
    )

    parser.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before --reset"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level"
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.reset and not args.yes:
        print("⚠️  WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("❌ Aborted")
            return

    initialize_database(reset=args.reset, sample_data=args.sample_data)


if __name__ == "__main__":
    main()
