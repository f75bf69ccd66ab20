"""A tiny file-backed table store that runs parsed CREATE, INSERT and SELECT."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from dbplus.expr import Expr, ExprType
from dbplus.statements import (
    CreateStatement,
    InsertStatement,
    SelectStatement,
    SQLStatement,
    StatementType,
    TableRefType,
)
from dbplus.util import split

__all__ = [
    "DatabaseError",
    "TableExistsError",
    "TableNotFoundError",
    "ColumnError",
    "Database",
    "format_cell",
    "format_separator",
]

TABLE_INDEX_FILE = "table_index.txt"
TABLE_SCHEMA_FILE = "table.db"
TABLE_DATA_FILE = "database.db"

CELL_WIDTH = 13
_FIELDS_PER_COLUMN = 4


class DatabaseError(Exception):
    """A statement could not be carried out."""


class TableExistsError(DatabaseError):
    """A table of that name has already been created."""


class TableNotFoundError(DatabaseError):
    """No table of that name exists."""


class ColumnError(DatabaseError):
    """The columns of a statement do not fit the table."""


def format_cell(text: str) -> str:
    """A fixed-width result cell: the text cut or padded to width, then a bar."""
    return text[:CELL_WIDTH].ljust(CELL_WIDTH) + "|"


def format_separator(count: int) -> str:
    """The rule drawn under the header of ``count`` cells."""
    return ("-" * CELL_WIDTH + "+") * count


def _value_text(expr: Expr) -> str:
    if expr.name is not None:
        return expr.name
    if expr.type == ExprType.LITERAL_INT:
        return str(expr.ival)
    if expr.type == ExprType.LITERAL_FLOAT:
        return repr(expr.fval)
    if expr.type == ExprType.LITERAL_NULL:
        return "NULL"
    raise DatabaseError(f"unsupported value expression: {expr.type.name}")


def _row_values(fields: list[str]) -> list[str]:
    values = fields[1:]
    # Rows are stored with a trailing space, which leaves one empty field.
    if values and values[-1] == "":
        values.pop()
    return values


class Database:
    """Tables kept as space-separated lines in three files under ``directory``."""

    def __init__(self, directory: str | Path = ".", out: Optional[TextIO] = None):
        self.directory = Path(directory)
        self.out = sys.stdout if out is None else out
        self.table_index: dict[str, int] = {}

    @property
    def index_path(self) -> Path:
        return self.directory / TABLE_INDEX_FILE

    @property
    def schema_path(self) -> Path:
        return self.directory / TABLE_SCHEMA_FILE

    @property
    def data_path(self) -> Path:
        return self.directory / TABLE_DATA_FILE

    def _lines(self, path: Path) -> Iterable[str]:
        try:
            with open(path, encoding="utf-8") as handle:
                for line in handle:
                    yield line.rstrip("\n")
        except FileNotFoundError:
            return

    def _append(self, path: Path, line: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            raise DatabaseError("failed to insertion") from exc

    def table_exists(self, name: str) -> bool:
        """Tell whether ``name`` is listed in the table index."""
        return name in set(self._lines(self.index_path))

    def table_columns(self, name: str) -> list[str]:
        """The column names of ``name`` in stored order; empty if unknown."""
        for line in self._lines(self.schema_path):
            fields = split(line, " ")
            if fields[0] == name:
                return fields[1::_FIELDS_PER_COLUMN]
        return []

    def load_table_index(self) -> dict[str, int]:
        """Read ``name number`` pairs from the table index into ``table_index``."""
        for line in self._lines(self.index_path):
            fields = split(line, " ")
            try:
                self.table_index[fields[0]] = int(fields[1])
            except (IndexError, ValueError) as exc:
                raise DatabaseError(f"malformed table index line: {line!r}") from exc
        return self.table_index

    def create(self, stmt: CreateStatement) -> None:
        """Record a new table and its columns."""
        table = stmt.table_name or ""
        if self.table_exists(table):
            raise TableExistsError(f"Table already exist : {table}")
        if stmt.columns is None:
            return
        parts = [table]
        for column in stmt.columns:
            parts += [column.name, "varchar", "0" if column.nullable else "1", "0"]
        self._append(self.index_path, table)
        self._append(self.schema_path, " ".join(parts))
        self.out.write("Table Created\n\n")

    def insert(self, stmt: InsertStatement) -> None:
        """Append one row; unnamed columns are filled with NULL."""
        table = stmt.table_name or ""
        if not self.table_exists(table):
            raise TableNotFoundError(f"Table Not exist : {table}")
        if stmt.values is None:
            raise DatabaseError("insert without a values list is not supported")

        sequence = self.table_columns(table)
        values = [_value_text(expr) for expr in stmt.values]

        if stmt.columns is not None:
            known = set(sequence)
            for column in stmt.columns:
                if column not in known:
                    raise ColumnError(f"{column} wrong column")
            given = iter(zip(stmt.columns, values))
            pending = next(given, None)
            row = []
            for column in sequence:
                if pending is not None and pending[0] == column:
                    row.append(pending[1])
                    pending = next(given, None)
                else:
                    row.append("NULL")
        else:
            if len(values) != len(sequence):
                raise ColumnError("Column mismatch; column info not provided")
            row = values

        self._append(self.data_path, table + " " + "".join(v + " " for v in row))
        self.out.write("1 row inserted\n\n")

    def _collect(self, expr: Optional[Expr], columns: list[str]) -> bool:
        """Add column references to ``columns``; tell whether ``*`` was seen."""
        if expr is None:
            return False
        if expr.type == ExprType.STAR:
            return True
        if expr.type == ExprType.COLUMN_REF:
            columns.append(expr.name or "")
            if expr.table:
                self.out.write(f"table :{expr.table}")
            return False
        sys.stderr.write(f"Unrecognized expression type {int(expr.type)}\n")
        return False

    def select(self, stmt: SelectStatement) -> list[list[str]]:
        """Print the rows of a table as a grid and return the printed rows."""
        columns: list[str] = []
        all_fields = False
        for expr in stmt.select_list or ():
            all_fields |= self._collect(expr, columns)

        table = ""
        if stmt.from_table is not None:
            if stmt.from_table.type == TableRefType.NAME:
                table = stmt.from_table.name or ""
            else:
                sys.stderr.write("Unrecognized expression type \n")

        if stmt.where_clause is not None:
            all_fields |= self._collect(stmt.where_clause, columns)

        if not self.table_exists(table):
            raise TableNotFoundError(f"Table Not exist : {table}")

        stored = self.table_columns(table)
        header = stored if all_fields else columns
        self.out.write("".join(format_cell(c) for c in header) + "\n")
        self.out.write(format_separator(len(header)) + "\n")

        rows: list[list[str]] = []
        for line in self._lines(self.data_path):
            fields = split(line, " ")
            if fields[0] != table:
                continue
            values = _row_values(fields)
            if all_fields:
                row = values
            else:
                wanted = iter(columns)
                target = next(wanted, None)
                row = []
                for column, value in zip(stored, values):
                    if target is not None and column == target:
                        row.append(value)
                        target = next(wanted, None)
            rows.append(row)
            self.out.write("".join(format_cell(v) for v in row) + "\n")

        self.out.write(f"({len(rows)} rows)\n")
        return rows

    def execute(self, statements: Iterable[SQLStatement]) -> None:
        """Run each statement in turn, reporting failures and carrying on."""
        for stmt in statements:
            try:
                kind = stmt.statement_type
                if kind == StatementType.CREATE:
                    self.create(stmt)
                elif kind == StatementType.SELECT:
                    self.select(stmt)
                elif kind == StatementType.INSERT:
                    self.insert(stmt)
                elif kind == StatementType.DELETE:
                    self.out.write("Table Deleted \n")
            except DatabaseError as exc:
                self.out.write(f"Error: {exc}\n\n")