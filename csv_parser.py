import logging
from dataclasses import dataclass, field
from functools import cached_property

import pandas as pd


logger = logging.getLogger(__name__)

DELIMITER = ","


@dataclass(frozen=True)
class ParsedTable:
    """Column schema plus row records, every record keyed by exactly the schema."""

    schema: tuple[str, ...] = ()
    rows: tuple[dict, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "ParsedTable":
        return cls()

    @classmethod
    def from_records(cls, records, schema=None) -> "ParsedTable":
        records = list(records or [])
        if schema is None:
            schema = list(records[0].keys()) if records else []
        schema = tuple(_distinct(str(col) for col in schema))
        rows = []
        for record in records:
            row = {}
            for col in schema:
                value = record.get(col, "") if isinstance(record, dict) else ""
                row[col] = "" if value is None else str(value)
            rows.append(row)
        return cls(schema=schema, rows=tuple(rows))

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def __len__(self):
        return len(self.rows)

    @cached_property
    def frame(self) -> pd.DataFrame:
        columns = list(self.schema)
        if not self.rows:
            return pd.DataFrame(columns=columns, dtype=object)
        return pd.DataFrame(list(self.rows), columns=columns, dtype=object)


def _distinct(names):
    seen = {}
    for name in names:
        seen.setdefault(name, None)
    return list(seen)


def _coerce_text(raw_text) -> str:
    if raw_text is None:
        return ""
    if isinstance(raw_text, bytes):
        return raw_text.decode("utf-8", errors="replace")
    if not isinstance(raw_text, str):
        return str(raw_text)
    return raw_text


def split_fields(line: str) -> list[str]:
    return [part.strip() for part in line.split(DELIMITER)]


def parse(raw_text) -> ParsedTable:
    """Parse comma-delimited text whose first non-empty line is the header.

    Quoting is not supported: every comma separates fields. Short rows are
    padded with "" and extra fields are dropped. Input without data lines
    yields an empty table.
    """
    text = _coerce_text(raw_text)
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        logger.debug("parse: no non-blank lines")
        return ParsedTable.empty()

    header = split_fields(lines[0])
    if len(lines) == 1:
        logger.debug("parse: header only (%d columns)", len(header))
        return ParsedTable.empty()

    padded = 0
    truncated = 0
    rows = []
    for line in lines[1:]:
        values = split_fields(line)
        if len(values) < len(header):
            padded += 1
        elif len(values) > len(header):
            truncated += 1
        row = {}
        # duplicate header names: the later field overwrites the earlier one
        for idx, name in enumerate(header):
            row[name] = values[idx] if idx < len(values) else ""
        rows.append(row)

    if padded or truncated:
        logger.debug(
            "parse: %d short rows padded, %d long rows truncated", padded, truncated
        )

    return ParsedTable(schema=tuple(_distinct(header)), rows=tuple(rows))
