"""Adapter for tabular input exported from a spreadsheet.

Handles three formats, chosen by file extension and content:
  - JSON: an array of rows (each an array of cells), an object with a
          "rows" array, or (summary only) an object of named settings
  - TSV:  tab-separated values (.tsv / .tab)
  - CSV:  everything else; the delimiter can be overridden
"""

import csv
import io
import json
import os

from ..core.models import InputError
from .base import BaseAdapter


TSV_EXTENSIONS = ('.tsv', '.tab')


class TableAdapter(BaseAdapter):
    """Read a spreadsheet export into a list of rows.

    Args:
        table_name: Name used in error messages ("Registration", ...).
        delimiter: CSV delimiter override; by default ',' (or tab for TSV).
        allow_mapping: Accept a JSON object of named settings (summary).
    """

    def __init__(self, table_name: str, delimiter: str | None = None,
                 allow_mapping: bool = False):
        self.table_name = table_name
        self.delimiter = delimiter
        self.allow_mapping = allow_mapping

    def parse(self, data_path: str) -> list:
        if not data_path or not os.path.isfile(data_path):
            raise InputError(f'Could not find "{self.table_name}" table at {data_path}.')

        with open(data_path, 'r', encoding='utf-8-sig') as f:
            content = f.read()

        stripped = content.strip()
        if data_path.lower().endswith('.json') or stripped.startswith(('[', '{')):
            try:
                return self._parse_json(json.loads(stripped))
            except json.JSONDecodeError:
                if data_path.lower().endswith('.json'):
                    raise InputError(f'"{self.table_name}" table at {data_path} is not valid JSON.')

        return self._parse_delimited(content, data_path)

    def _parse_json(self, data):
        if isinstance(data, dict):
            rows = data.get('rows')
            if isinstance(rows, list):
                return [self._as_row(r) for r in rows]
            if self.allow_mapping:
                return data
        if isinstance(data, list):
            return [self._as_row(r) for r in data]
        raise InputError(f'"{self.table_name}" table must be a JSON array of rows.')

    @staticmethod
    def _as_row(raw) -> list:
        if isinstance(raw, list):
            return raw
        if isinstance(raw, dict):
            return list(raw.values())
        return [raw]

    def _parse_delimited(self, content: str, data_path: str) -> list:
        delimiter = self.delimiter
        if delimiter is None:
            delimiter = '\t' if data_path.lower().endswith(TSV_EXTENSIONS) else ','

        return list(csv.reader(io.StringIO(content), delimiter=delimiter))
