"""Storage core of a small relational database: disk files, buffer pool, LRU replacement, catalog metadata and transaction records."""

__version__ = "0.1.0"

__all__ = [
    "buffer_pool",
    "common",
    "context",
    "defs",
    "disk_manager",
    "errors",
    "meta",
    "page",
    "replacer",
    "system",
    "transaction",
]