"""Table loading, joining, and the in-memory property store."""
from .loader import load_table, read_table, read_all_tables
from .joiner import merge_tables
from .store import PropertyStore
from .schemas import Property, FilterCriteria, MergeReport
