"""Export services."""

from expense_ledger.services.export.json_exporter import (
    ExportError,
    export_filename,
    export_json,
    write_export,
)

__all__ = [
    "ExportError",
    "export_filename",
    "export_json",
    "write_export",
]
