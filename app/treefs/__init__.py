"""treefs - local filesystem abstraction with directory-tree operations."""

__version__ = "0.1.0"
