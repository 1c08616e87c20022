"""CSV formatter for tabular payloads."""

from __future__ import annotations

import csv
import io
from collections.abc import Mapping
from typing import Any

from responsekit.core.errors import SerializationError
from responsekit.support.content_type import ContentType
from responsekit.support.data import to_plain


class CsvFormatter:
    """
    Render a mapping (one row) or a list of mappings as CSV.

    :param delimiter: Field delimiter.
    :type delimiter: str
    :param quotechar: Field enclosure character.
    :type quotechar: str
    :param include_headers: Emit a header row built from the first row's keys.
    :type include_headers: bool
    :param lineterminator: Row separator.
    :type lineterminator: str

    .. note::
       With headers enabled every row is projected onto the first row's
       columns; missing cells are written empty and extra keys are ignored.
    """

    content_type = ContentType.CSV

    def __init__(
        self,
        delimiter: str = ",",
        quotechar: str = '"',
        include_headers: bool = True,
        lineterminator: str = "\n",
    ) -> None:
        self.delimiter = delimiter
        self.quotechar = quotechar
        self.include_headers = include_headers
        self.lineterminator = lineterminator

    def format(self, payload: Any) -> str:
        data = to_plain(payload)
        if isinstance(data, Mapping):
            rows: list[Any] = [data]
        elif isinstance(data, list):
            rows = data
        else:
            raise SerializationError("CSV formatter requires a mapping or a list of rows")
        if not rows:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(
            buffer,
            delimiter=self.delimiter,
            quotechar=self.quotechar,
            lineterminator=self.lineterminator,
        )
        first = rows[0]
        columns = list(first.keys()) if isinstance(first, Mapping) else []
        if self.include_headers and columns:
            writer.writerow(columns)

        for row in rows:
            if isinstance(row, Mapping):
                if self.include_headers and columns:
                    writer.writerow([self._cell(row.get(col)) for col in columns])
                else:
                    writer.writerow([self._cell(v) for v in row.values()])
            elif isinstance(row, list):
                writer.writerow([self._cell(v) for v in row])
            else:
                raise SerializationError(f"CSV row must be a mapping or a list, got {type(row).__name__}")
        return buffer.getvalue()

    @staticmethod
    def _cell(value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            raise SerializationError("CSV cells must be scalar values")
        return value


__all__ = ["CsvFormatter"]
