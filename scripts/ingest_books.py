"""Ingest books from a CSV file into the catalog."""
import argparse
import asyncio
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookstore.db.connection import close_pool, init_db
from bookstore.services import book_service
from bookstore.utils.errors import BookConflictError, BookValidationError
from bookstore.utils.logger import get_logger

logger = get_logger(__name__)

BOOK_COLUMNS = ("isbn", "amazon_url", "author", "language", "pages", "publisher", "title", "year")
INTEGER_COLUMNS = ("pages", "year")


@dataclass
class IngestReport:
    created: int = 0
    invalid: int = 0
    duplicates: int = 0
    errors: List[str] = field(default_factory=list)


def row_to_payload(row: Dict[str, str]) -> Dict[str, Any]:
    """Turn a CSV row (all text) into a book payload.

    Blank cells are dropped so validation reports them as missing; integer
    columns that don't parse are kept as text so validation rejects them.
    """
    payload: Dict[str, Any] = {}
    for column, raw in row.items():
        value = raw.strip() if isinstance(raw, str) else raw
        if value is None or value == "":
            continue
        if column in INTEGER_COLUMNS:
            try:
                value = int(value)
            except ValueError:
                pass
        payload[column] = value
    return payload


async def ingest_books(csv_path: Path, limit: Optional[int] = None) -> IngestReport:
    """
    Ingest books from CSV file into the database.

    Args:
        csv_path: Path to the CSV file; its header must name the book columns
        limit: Maximum number of rows to read (None for all)
    """
    report = IngestReport()
    df = pd.read_csv(csv_path, nrows=limit, dtype=str, keep_default_na=False)
    logger.info(f"Loaded {len(df)} rows from {csv_path}")

    unknown = sorted(set(df.columns) - set(BOOK_COLUMNS))
    if unknown:
        logger.warning(f"Ignoring unknown columns: {', '.join(unknown)}")
    df = df[[c for c in df.columns if c in BOOK_COLUMNS]]

    await init_db()
    for idx, row in enumerate(df.to_dict(orient="records"), start=1):
        payload = row_to_payload(row)
        try:
            await book_service.create_book(payload)
        except BookValidationError as e:
            report.invalid += 1
            report.errors.append(f"row {idx}: {'; '.join(e.message)}")
        except BookConflictError as e:
            report.duplicates += 1
            report.errors.append(f"row {idx}: {e.message}")
        else:
            report.created += 1

    logger.info(
        f"Ingestion complete: {report.created} created, "
        f"{report.invalid} invalid, {report.duplicates} duplicates"
    )
    return report


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Ingest books from CSV file into the database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ingest every row of books.csv
  python scripts/ingest_books.py --csv books.csv

  # Ingest the first 100 rows
  python scripts/ingest_books.py --csv books.csv --limit 100
        """
    )
    parser.add_argument(
        "--csv",
        type=str,
        default="books.csv",
        help="Path to CSV file (default: books.csv)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of books to ingest (default: all)",
    )

    args = parser.parse_args()

    csv_path = Path(args.csv)
    if not csv_path.is_absolute():
        csv_path = Path(__file__).parent.parent / csv_path
    if not csv_path.exists():
        logger.error(f"CSV file not found: {csv_path}")
        sys.exit(1)

    try:
        report = await ingest_books(csv_path=csv_path, limit=args.limit)
    finally:
        await close_pool()

    for error in report.errors:
        logger.warning(error)


if __name__ == "__main__":
    asyncio.run(main())
