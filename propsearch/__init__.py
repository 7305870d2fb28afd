"""Property Search — natural-language search over joined real-estate project tables."""
