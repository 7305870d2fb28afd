"""
PropertyStore — In-memory snapshot of merged Property records.

Loaded once at startup, read on every request. The snapshot is a tuple of
frozen records and is never modified after a successful load.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from propsearch.config import DATA_DIR
from propsearch.data.joiner import merge_tables
from propsearch.data.loader import read_all_tables
from propsearch.data.schemas import MergeReport, Property


class PropertyStore:
    """Populate-once, read-many holder for the property snapshot."""

    def __init__(self, data_dir: Path = DATA_DIR) -> None:
        self.data_dir = Path(data_dir)
        self._properties: tuple[Property, ...] = ()
        self._report: Optional[MergeReport] = None
        self._loaded = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> tuple[Property, ...]:
        """Read and merge the four tables on first call; afterwards a no-op.

        Concurrent first callers wait for the same load. A failed load raises
        (LoadError) and leaves the store empty, so calling load() again retries.
        """
        if self._loaded:
            return self._properties

        async with self._lock:
            if self._loaded:
                return self._properties

            print(f"Loading property tables from {self.data_dir}...")
            tables = await read_all_tables(self.data_dir)
            properties, report = merge_tables(*tables)

            self._properties = tuple(properties)
            self._report = report
            self._loaded = True

            print(f"  Merged {report.merged:,} properties from {report.variants:,} variants")
            if report.skipped:
                print(f"  Skipped {report.skipped:,} orphan variants "
                      f"(no configuration: {report.missing_configuration}, "
                      f"no project: {report.missing_project}, "
                      f"no address: {report.missing_address})")
            if report.bad_price or report.bad_bathrooms:
                print(f"  Defaulted to 0 (price: {report.bad_price}, bathrooms: {report.bad_bathrooms})")
            if report.bad_images:
                print(f"  Warning: {report.bad_images} variant(s) had unreadable image lists")

        return self._properties

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> tuple[Property, ...]:
        """Current snapshot; empty until a load succeeds."""
        return self._properties

    @property
    def report(self) -> Optional[MergeReport]:
        return self._report

    def row_count(self) -> int:
        return len(self._properties)
