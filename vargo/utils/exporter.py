"""
Export of result tables to CSV or plain text.
"""

import csv
from pathlib import Path
from typing import Sequence, Union

from .error_handler import ErrorContext, ErrorSeverity, ErrorType, ExportFailure


def export_results(filename: Union[str, Path], rows: Sequence[Sequence[str]]) -> None:
    """
    Write table rows to a file.

    A ".csv" suffix (any case) selects semicolon-delimited CSV; any other
    name gets one " | "-joined line per row.

    Args:
        filename: Destination path
        rows: Rows to write, header included if wanted

    Raises:
        ExportFailure: If the file cannot be written
    """
    path = Path(filename)

    try:
        if str(path).lower().endswith(".csv"):
            with open(path, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f, delimiter=";", lineterminator="\n")
                writer.writerows(rows)
        else:
            with open(path, "w", encoding="utf-8") as f:
                for row in rows:
                    f.write(" | ".join(row) + "\n")
    except OSError as e:
        raise ExportFailure(
            f"Could not write {path}: {e}",
            ErrorContext(
                error_type=ErrorType.EXPORT_FAILURE,
                severity=ErrorSeverity.HIGH,
                operation="export_results",
                component="exporter",
                additional_info={"file_path": str(path)},
            ),
        ) from e

