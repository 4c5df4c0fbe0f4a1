"""Output formats for the tracked plugin listings.

Every format renders the same input: a list of rows, each a mapping of column
name to value, e.g. `[{"plugin": "grafana", "installer": "helm"}]`.
"""

from abc import ABC, abstractmethod
import json
import sys
from typing import Any, TextIO

import yaml

__all__ = [
    "FORMATTERS",
    "Formatter",
    "TableFormatter",
]

COLUMN_GAP = 4

Rows = list[dict[str, Any]]


class Formatter(ABC):
    """Renders rows as text."""

    @abstractmethod
    def render(self, rows: Rows) -> str:
        """Return the rendered rows, without a trailing newline."""

    def print(self, rows: Rows, file: TextIO = sys.stdout) -> None:
        """Write the rendered rows to `file`."""
        if text := self.render(rows):
            print(text, file=file)


class TableFormatter(Formatter):
    """Aligned columns headed by the upper cased column names."""

    def __init__(self, columns: list[str] | None = None) -> None:
        """Initialize TableFormatter, defaulting to the columns of the first row."""
        self._columns = columns

    def render(self, rows: Rows) -> str:
        """Return the rows as a table, or nothing when there are no rows."""
        if not rows:
            return ""
        columns = self._columns if self._columns is not None else list(rows[0])
        table = [[col.upper() for col in columns]]
        table.extend([str(row[col]) for col in columns] for row in rows)
        widths = [max(len(line[i]) for line in table) for i in range(len(columns))]
        return "\n".join(
            "".join(
                value.ljust(width + COLUMN_GAP) for value, width in zip(line, widths)
            ).rstrip()
            for line in table
        )


class YamlFormatter(Formatter):
    """A single YAML document holding the list of rows."""

    def render(self, rows: Rows) -> str:
        return yaml.dump(rows, sort_keys=False, explicit_start=True).rstrip("\n")


class JsonFormatter(Formatter):
    """A JSON array holding the rows."""

    def render(self, rows: Rows) -> str:
        return json.dumps(rows, indent=4)


FORMATTERS: dict[str, type[Formatter]] = {
    "table": TableFormatter,
    "yaml": YamlFormatter,
    "json": JsonFormatter,
}
