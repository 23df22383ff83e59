"""User/Job registry: users deduplicated by natural key, sharing jobs."""

__version__ = "0.1.0"
