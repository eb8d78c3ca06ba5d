"""Create the location directory tables in the configured database.

Usage: python -m app.init_db
"""

import logging

from app.database import init_db

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    init_db()
