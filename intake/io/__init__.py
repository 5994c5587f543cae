"""I/O utilities for extraction tables and run reports."""

from intake.io.artifacts import records_to_frame, write_extraction_table, write_json_atomic

__all__ = ["records_to_frame", "write_extraction_table", "write_json_atomic"]
