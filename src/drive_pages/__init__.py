"""drive-pages: tree index, page cache and move orchestration for a Drive-backed site."""

__version__ = "0.1.0"
