"""Filtering and result bounding over the property snapshot."""
from .filters import filter_properties, matches
from .limiter import limit_results
