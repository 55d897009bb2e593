"""
Ruleset loading from the scheme applicability workbook
"""
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import openpyxl

from ..config import settings
from ..exceptions import DatasetConfigurationError
from ..models.scheme import HeaderField
from ..utils.normalizers import is_blank, normalize_key

logger = logging.getLogger(__name__)

SchemeRow = Mapping[str, Any]


class DatasetService:
    """Supplies scheme rows (column label -> raw cell value) from an .xlsx workbook"""

    def __init__(self, dataset_path: Optional[str] = None):
        self.dataset_path = Path(dataset_path or settings.dataset_path)
        self._cache_key: Optional[Tuple[float, int]] = None
        self._labels: List[str] = []
        self._rows: Tuple[SchemeRow, ...] = ()

    def load_rows(self) -> Tuple[SchemeRow, ...]:
        """
        Get the ruleset rows in sheet order

        Returns:
            Read-only snapshot of the rows; blank cells are ""

        Raises:
            DatasetConfigurationError: If the workbook is missing, unreadable or empty
        """
        self._refresh()
        return self._rows

    def get_headers(self) -> List[HeaderField]:
        """
        Get the ruleset column labels with the keys farmers answer under

        Raises:
            DatasetConfigurationError: If the workbook is missing, unreadable or empty
        """
        self._refresh()
        return [HeaderField(label=label, key=normalize_key(label)) for label in self._labels]

    def _refresh(self):
        """Re-read the workbook when it changed on disk"""
        if not self.dataset_path.is_file():
            logger.error(f"Scheme dataset not found at {self.dataset_path}")
            raise DatasetConfigurationError(f"Excel file not found: {self.dataset_path}")

        stat = os.stat(self.dataset_path)
        cache_key = (stat.st_mtime, stat.st_size)
        if cache_key == self._cache_key:
            return

        labels, rows = self._read_workbook()
        self._labels = labels
        self._rows = tuple(MappingProxyType(row) for row in rows)
        self._cache_key = cache_key
        logger.info(f"Loaded {len(self._rows)} scheme rows with {len(labels)} columns from {self.dataset_path}")

    def _read_workbook(self) -> Tuple[List[str], List[Dict[str, Any]]]:
        try:
            wb = openpyxl.load_workbook(self.dataset_path, read_only=True, data_only=True)
        except Exception as e:
            logger.error(f"Failed to open scheme dataset {self.dataset_path}: {e}")
            raise DatasetConfigurationError(f"Failed to read Excel file: {e}") from e

        try:
            if not wb.sheetnames:
                raise DatasetConfigurationError("Excel file has no sheets.")

            ws = wb[wb.sheetnames[0]]
            sheet_rows = ws.iter_rows(values_only=True)
            header_row = next(sheet_rows, None)
            if header_row is None or all(is_blank(value) for value in header_row):
                raise DatasetConfigurationError("Excel sheet is empty.")

            columns = self._label_columns(header_row)
            rows = []
            for values in sheet_rows:
                if all(is_blank(value) for value in values):
                    continue
                row = {}
                for index, label in columns:
                    value = values[index] if index < len(values) else None
                    row[label] = "" if value is None else value
                rows.append(row)
        except DatasetConfigurationError:
            raise
        except Exception as e:
            # read-only sheets are parsed lazily, so a corrupt sheet fails here
            logger.error(f"Failed to read rows from scheme dataset {self.dataset_path}: {e}")
            raise DatasetConfigurationError(f"Failed to read Excel file: {e}") from e
        finally:
            wb.close()

        return [label for _, label in columns], rows

    @staticmethod
    def _label_columns(header_row) -> List[Tuple[int, str]]:
        """Pair column indexes with unique, trimmed labels; unlabeled columns are dropped"""
        columns = []
        labels = {str(value).strip() for value in header_row if not is_blank(value)}
        taken = set()
        suffixes: Dict[str, int] = {}
        for index, value in enumerate(header_row):
            if is_blank(value):
                continue
            base = str(value).strip()
            label = base
            # a suffixed label must not clash with a real one, earlier or later
            while label in taken or (label != base and label in labels):
                suffixes[base] = suffixes.get(base, 0) + 1
                label = f"{base}_{suffixes[base]}"
            taken.add(label)
            columns.append((index, label))
        return columns


# Global dataset service instance
dataset_service = DatasetService()
