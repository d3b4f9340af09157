from .base import Record, RecordSource, RECORD_FIELDS
from .utils import as_float, ensure_record_list
from .json_source import JsonRecords, InMemoryRecords
from .synthetic import SyntheticMovies

__all__ = [
    "Record",
    "RecordSource",
    "RECORD_FIELDS",
    "as_float",
    "ensure_record_list",
    "JsonRecords",
    "InMemoryRecords",
    "SyntheticMovies",
]
