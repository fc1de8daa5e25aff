"""Script to remove cache entries from the database."""
import argparse
import sys

from app.db.session import SessionLocal
from app.services.cache import clear_cache, purge_expired


def main():
    parser = argparse.ArgumentParser(description="Purge cached search aggregates")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Delete every entry, not only the expired ones",
    )
    args = parser.parse_args()

    db = SessionLocal()
    try:
        count = clear_cache(db) if args.all else purge_expired(db)
        label = "cache entries" if args.all else "expired cache entries"
        print(f"Removed {count} {label}")
    except Exception as e:
        print(f"Purge error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
