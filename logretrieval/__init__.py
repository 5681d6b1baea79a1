"""log-retrieval: query day-partitioned JSON log files by date or log ID."""
