# src/atlin/observability/names.py

"""Standard metric names for atlin observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Parse Metrics
# ============================================================================

# Duration
PARSE_DURATION = "atlin_parse_duration"

# Counters
PARSE_TOTAL = "atlin_parse_total"
PARSE_FILE_ERRORS_TOTAL = "atlin_parse_file_errors_total"

# Gauges
PARSE_INPUT_SIZE = "atlin_parse_input_size"


# ============================================================================
# Cache Metrics (orchestration level)
# ============================================================================

# Counters
CACHE_HITS_TOTAL = "atlin_cache_hits_total"
CACHE_MISSES_TOTAL = "atlin_cache_misses_total"
CACHE_ERRORS_TOTAL = "atlin_cache_errors_total"


# ============================================================================
# Cache Backend Metrics (SQLite / Postgres)
# ============================================================================

# Duration
CACHE_BACKEND_DURATION = "atlin_cache_backend_duration"

# Counters
CACHE_BACKEND_OPERATIONS_TOTAL = "atlin_cache_backend_operations_total"
