"""
Create the database tables.

Usage: python -m db.init_db [DATABASE_URL]
"""
import sys

from db import database
from db.models import Base


def main(argv):
    url = argv[1] if len(argv) > 1 else database.DATABASE_URL
    database.bind_engine(url)
    print(f"Creating tables in {url} ...")
    database.init_database()
    for name in Base.metadata.tables:
        print(f"  - {name}")
    print("Database initialized.")


if __name__ == '__main__':
    main(sys.argv)
