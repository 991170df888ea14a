"""
Migration script to create all database tables

Run this script to create all database tables:
    python -m movie_catalog.migrations.create_all_tables

Pass --drop to drop the existing tables first (destroys all data).
"""

import sys

from movie_catalog.database import engine, Base
# Importing the package registers every model with Base
import movie_catalog.models  # noqa: F401


def create_tables(drop_first: bool = False):
    """Create all database tables"""
    print("=" * 60)
    print("Creating all database tables...")
    print("=" * 60)

    try:
        if drop_first:
            Base.metadata.drop_all(bind=engine)
            print("\n🗑️  Existing tables dropped")

        Base.metadata.create_all(bind=engine)

        print("\n✅ All tables created successfully!")
        print("\nTables created:")
        for table_name in Base.metadata.tables:
            print(f"   - {table_name}")
        print("=" * 60)

    except Exception as e:
        print(f"\n❌ Error creating tables: {e}")
        import traceback
        traceback.print_exc()
        raise


if __name__ == "__main__":
    create_tables(drop_first="--drop" in sys.argv[1:])
