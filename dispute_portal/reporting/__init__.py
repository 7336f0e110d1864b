"""Export shaping and file sinks."""
from dispute_portal.reporting.sinks import excel_bytes, write_csv, write_excel
from dispute_portal.reporting.templates import (
    DEFAULT_DISPUTE_HEADERS,
    EXPORT_HEADERS,
    destination_row,
    dispute_to_export_row,
    disputes_to_export_rows,
    export_filename,
)

__all__ = [
    "DEFAULT_DISPUTE_HEADERS",
    "EXPORT_HEADERS",
    "destination_row",
    "dispute_to_export_row",
    "disputes_to_export_rows",
    "excel_bytes",
    "export_filename",
    "write_csv",
    "write_excel",
]
