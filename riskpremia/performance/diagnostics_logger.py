"""
Daily diagnostics logging for CSV export.

Append-only sink for DailyDiagnosticsRecords, one row per instrument per
evaluated day. The logger owns header initialization: the header is
written once, when the file is missing or empty, and existing logs are
appended to across restarts.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from riskpremia.core.diagnostics import DIAGNOSTICS_COLUMNS, DailyDiagnosticsRecord

logger = logging.getLogger('PERFORMANCE.DIAGNOSTICS')


class DiagnosticsLogger:
    """
    Append DailyDiagnosticsRecords to a CSV file.

    Example:
        >>> diagnostics = DiagnosticsLogger(Path('logs/riskpremia_diagnostics.csv'))
        >>> diagnostics.log(decision.diagnostics)
    """

    def __init__(self, log_path: Path = Path('logs/riskpremia_diagnostics.csv')):
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self.header_written = self.log_path.exists() and self.log_path.stat().st_size > 0
        if not self.header_written:
            self._write_header()

        logger.info(f"DiagnosticsLogger initialized: {self.log_path}")

    def _write_header(self) -> None:
        with open(self.log_path, 'w', newline='') as f:
            csv.writer(f).writerow(DIAGNOSTICS_COLUMNS)
        self.header_written = True
        logger.debug(f"Wrote diagnostics header to {self.log_path}")

    def log(self, records: Iterable[DailyDiagnosticsRecord]) -> int:
        """
        Append records.

        Returns:
            Number of rows written
        """
        count = 0
        with open(self.log_path, 'a', newline='') as f:
            writer = csv.writer(f)
            for record in records:
                writer.writerow(record.as_row())
                count += 1

        logger.debug(f"Appended {count} diagnostics rows to {self.log_path}")
        return count

    def to_dataframe(self) -> pd.DataFrame:
        """Load the whole log for offline analysis."""
        return pd.read_csv(self.log_path)
