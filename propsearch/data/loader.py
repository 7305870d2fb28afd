"""
CSV table loading. Every value is read as text; typing happens in the joiner.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

import pandas as pd

from propsearch.config import (
    DATA_DIR, TABLE_FILES, TABLE_COLUMNS,
    PROJECT_TABLE, ADDRESS_TABLE, CONFIGURATION_TABLE, VARIANT_TABLE,
)
from propsearch.exceptions import SourceUnavailable, TableParseError


def table_path(table: str, data_dir: Path = DATA_DIR) -> Path:
    return Path(data_dir) / TABLE_FILES[table]


def read_table(table: str, data_dir: Path = DATA_DIR) -> pd.DataFrame:
    """Read one table into a frame of strings, in file order.

    Raises SourceUnavailable if the file cannot be opened and TableParseError
    if it is empty, has rows with the wrong number of fields, or lacks a
    required column.
    """
    path = table_path(table, data_dir)
    try:
        # dtype=str + keep_default_na=False: blank cells stay "" rather than NaN
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except FileNotFoundError as exc:
        raise SourceUnavailable(table, f"file not found: {path}") from exc
    except pd.errors.EmptyDataError as exc:
        raise TableParseError(table, f"{path.name} is empty") from exc
    except pd.errors.ParserError as exc:
        raise TableParseError(table, f"{path.name} is malformed: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise TableParseError(table, f"{path.name} is not valid UTF-8") from exc
    except OSError as exc:
        raise SourceUnavailable(table, f"cannot read {path}: {exc}") from exc

    # pandas turns "every row has one extra field" into an implicit index column
    if len(df) and not isinstance(df.index, pd.RangeIndex):
        raise TableParseError(table, f"{path.name} has more fields per row than header columns")

    # Short rows are padded with NaN even with keep_default_na=False
    short_rows = df.index[df.isna().any(axis=1)]
    if len(short_rows):
        # +2: one for the header, one for 1-based line numbers
        raise TableParseError(table, f"{path.name} line {int(short_rows[0]) + 2} has too few fields")

    missing = [c for c in TABLE_COLUMNS[table] if c not in df.columns]
    if missing:
        raise TableParseError(table, f"{path.name} is missing column(s): {', '.join(missing)}")

    return df


def load_table(table: str, data_dir: Path = DATA_DIR) -> list[dict[str, str]]:
    """Ordered rows of a table as column → text mappings."""
    return read_table(table, data_dir).to_dict(orient="records")


async def read_table_async(table: str, data_dir: Path = DATA_DIR) -> pd.DataFrame:
    """read_table on a worker thread so the event loop keeps serving."""
    return await asyncio.to_thread(read_table, table, data_dir)


async def read_all_tables(data_dir: Path = DATA_DIR) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Read the four tables concurrently.

    Returns (projects, addresses, configurations, variants). If any read
    fails, the first error is raised once all reads have finished.
    """
    results = await asyncio.gather(
        read_table_async(PROJECT_TABLE, data_dir),
        read_table_async(ADDRESS_TABLE, data_dir),
        read_table_async(CONFIGURATION_TABLE, data_dir),
        read_table_async(VARIANT_TABLE, data_dir),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    projects, addresses, configs, variants = results
    for name, df in zip(TABLE_FILES.values(), results):
        print(f"  {name}: {len(df):,} rows")
    return projects, addresses, configs, variants
