"""Create the notes table.

    python scripts/init_db.py                      # DATABASE_URL or ./notes.db
    python scripts/init_db.py sqlite:///other.db
"""

import sys

from notesynth.db.connection import create_db_engine, get_database_url, init_db
from notesynth.db.models import Base


def main():
    db_url = sys.argv[1] if len(sys.argv) > 1 else get_database_url()
    print(f"📍 Database URL: {db_url}")

    init_db(create_db_engine(db_url))

    print(f"✅ Tables ready: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    main()
