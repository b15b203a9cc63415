"""loganalyze — normalize ndjson application logs and summarize them."""

__version__ = "0.1.0"
