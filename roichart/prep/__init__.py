from .normalize import NormalizedRecord, normalize_record, normalize_records, columns, MILLION

__all__ = ["NormalizedRecord", "normalize_record", "normalize_records", "columns", "MILLION"]
