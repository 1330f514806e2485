"""Data ingestion module - input readers and Nikkei collectors."""

from nikkei_yprice.ingestion.record_iterator import Record, parse
from nikkei_yprice.ingestion.source_reader import RawDocument, load, read_text

__all__ = ["RawDocument", "Record", "load", "parse", "read_text"]
