import argparse
import logging

from app.config import get_settings
from app.database.dynamodb import (
    create_table_if_not_exists,
    delete_table,
    get_db_connection,
)
from app.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Create or delete the events table")
    parser.add_argument("--delete", action="store_true", help="Delete the table")
    parser.add_argument("--table", help="Table name (defaults to DYNAMODB_TABLE_NAME)")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)
    dynamodb = get_db_connection(settings)
    table_name = args.table or settings.table_name

    if args.delete:
        delete_table(dynamodb, table_name)
    else:
        create_table_if_not_exists(dynamodb, table_name)
    logging.getLogger(__name__).info("Done")


if __name__ == "__main__":
    main()
