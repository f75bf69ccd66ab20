"""The parsed forms of SQL statements and the parts they are built from."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from dbplus.expr import ColumnType, Expr

__all__ = [
    "StatementType",
    "SQLStatement",
    "ColumnDefinition",
    "CreateType",
    "CreateStatement",
    "DeleteStatement",
    "DropType",
    "DropStatement",
    "ExecuteStatement",
    "ImportType",
    "ImportStatement",
    "ExportStatement",
    "InsertType",
    "InsertStatement",
    "PrepareStatement",
    "OrderType",
    "SetType",
    "OrderDescription",
    "LimitDescription",
    "GroupByDescription",
    "WithDescription",
    "SetOperation",
    "SelectStatement",
    "ShowType",
    "ShowStatement",
    "TableRefType",
    "TableName",
    "Alias",
    "TableRef",
    "JoinType",
    "JoinDefinition",
    "TransactionCommand",
    "TransactionStatement",
    "UpdateClause",
    "UpdateStatement",
]


class StatementType(enum.IntEnum):
    ERROR = 0
    SELECT = 1
    IMPORT = 2
    INSERT = 3
    UPDATE = 4
    DELETE = 5
    CREATE = 6
    DROP = 7
    PREPARE = 8
    EXECUTE = 9
    EXPORT = 10
    RENAME = 11
    ALTER = 12
    SHOW = 13
    TRANSACTION = 14


@dataclass
class SQLStatement:
    """Base of every statement; subclasses fix ``statement_type``."""

    statement_type: ClassVar[StatementType] = StatementType.ERROR

    hints: Optional[list[Expr]] = field(default=None, kw_only=True)
    string_length: int = field(default=0, kw_only=True)

    def is_type(self, statement_type: StatementType) -> bool:
        return self.statement_type == statement_type


# --- CREATE -----------------------------------------------------------------


@dataclass
class ColumnDefinition:
    """The definition of one table column."""

    name: str
    type: ColumnType
    nullable: bool


class CreateType(enum.IntEnum):
    TABLE = 0
    TABLE_FROM_TBL = 1
    VIEW = 2


@dataclass
class CreateStatement(SQLStatement):
    """``CREATE TABLE students (name TEXT, grade DOUBLE)`` and the like."""

    statement_type: ClassVar[StatementType] = StatementType.CREATE

    type: CreateType
    if_not_exists: bool = False
    file_path: Optional[str] = None
    schema: Optional[str] = None
    table_name: Optional[str] = None
    columns: Optional[list[ColumnDefinition]] = None
    view_columns: Optional[list[str]] = None
    select: Optional[SelectStatement] = None


# --- DELETE / DROP ----------------------------------------------------------


@dataclass
class DeleteStatement(SQLStatement):
    """``DELETE FROM students WHERE grade > 3.0``; no condition deletes all rows."""

    statement_type: ClassVar[StatementType] = StatementType.DELETE

    schema: Optional[str] = None
    table_name: Optional[str] = None
    expr: Optional[Expr] = None


class DropType(enum.IntEnum):
    TABLE = 0
    SCHEMA = 1
    INDEX = 2
    VIEW = 3
    PREPARED_STATEMENT = 4


@dataclass
class DropStatement(SQLStatement):
    """``DROP TABLE students``."""

    statement_type: ClassVar[StatementType] = StatementType.DROP

    type: DropType
    if_exists: bool = False
    schema: Optional[str] = None
    name: Optional[str] = None


# --- PREPARE / EXECUTE ------------------------------------------------------


@dataclass
class ExecuteStatement(SQLStatement):
    """``EXECUTE ins_prep(100, 'test', 2.3)``."""

    statement_type: ClassVar[StatementType] = StatementType.EXECUTE

    name: Optional[str] = None
    parameters: Optional[list[Expr]] = None


@dataclass
class PrepareStatement(SQLStatement):
    """``PREPARE test FROM 'SELECT * FROM test WHERE a = ?'``."""

    statement_type: ClassVar[StatementType] = StatementType.PREPARE

    name: Optional[str] = None
    query: Optional[str] = None


# --- IMPORT / EXPORT --------------------------------------------------------


class ImportType(enum.IntEnum):
    CSV = 0
    TBL = 1
    BINARY = 2
    AUTO = 3


@dataclass
class ImportStatement(SQLStatement):
    """Load a table from a file."""

    statement_type: ClassVar[StatementType] = StatementType.IMPORT

    type: ImportType
    file_path: Optional[str] = None
    schema: Optional[str] = None
    table_name: Optional[str] = None


@dataclass
class ExportStatement(SQLStatement):
    """Write a table to a file."""

    statement_type: ClassVar[StatementType] = StatementType.EXPORT

    type: ImportType
    file_path: Optional[str] = None
    schema: Optional[str] = None
    table_name: Optional[str] = None


# --- INSERT -----------------------------------------------------------------


class InsertType(enum.IntEnum):
    VALUES = 0
    SELECT = 1


@dataclass
class InsertStatement(SQLStatement):
    """``INSERT INTO students VALUES ('Max', 1112233, 'Musterhausen', 2.3)``."""

    statement_type: ClassVar[StatementType] = StatementType.INSERT

    type: InsertType
    schema: Optional[str] = None
    table_name: Optional[str] = None
    columns: Optional[list[str]] = None
    values: Optional[list[Expr]] = None
    select: Optional[SelectStatement] = None


# --- tables -----------------------------------------------------------------


class TableRefType(enum.IntEnum):
    NAME = 0
    SELECT = 1
    JOIN = 2
    CROSS_PRODUCT = 3


@dataclass
class TableName:
    schema: Optional[str] = None
    name: Optional[str] = None


@dataclass
class Alias:
    name: str
    columns: Optional[list[str]] = None


@dataclass
class TableRef:
    """A reference to a table: a name, a sub-select, a join or a cross product."""

    type: TableRefType
    schema: Optional[str] = None
    name: Optional[str] = None
    alias: Optional[Alias] = None
    select: Optional[SelectStatement] = None
    tables: Optional[list[TableRef]] = None
    join: Optional[JoinDefinition] = None

    def has_schema(self) -> bool:
        return self.schema is not None

    def display_name(self) -> Optional[str]:
        """The alias if one is set, otherwise the name."""
        return self.alias.name if self.alias is not None else self.name


class JoinType(enum.IntEnum):
    INNER = 0
    FULL = 1
    LEFT = 2
    RIGHT = 3
    CROSS = 4
    NATURAL = 5


@dataclass
class JoinDefinition:
    left: Optional[TableRef] = None
    right: Optional[TableRef] = None
    condition: Optional[Expr] = None
    type: JoinType = JoinType.INNER


# --- SELECT -----------------------------------------------------------------


class OrderType(enum.IntEnum):
    ASC = 0
    DESC = 1


class SetType(enum.IntEnum):
    UNION = 0
    INTERSECT = 1
    EXCEPT = 2


@dataclass
class OrderDescription:
    type: OrderType
    expr: Optional[Expr]


@dataclass
class LimitDescription:
    limit: Optional[Expr] = None
    offset: Optional[Expr] = None


@dataclass
class GroupByDescription:
    columns: Optional[list[Expr]] = None
    having: Optional[Expr] = None


@dataclass
class WithDescription:
    alias: Optional[str] = None
    select: Optional[SelectStatement] = None


@dataclass
class SetOperation:
    """A UNION, INTERSECT or EXCEPT joining a select to a nested select."""

    set_type: SetType = SetType.UNION
    is_all: bool = False
    nested_select_statement: Optional[SelectStatement] = None
    result_order: Optional[list[OrderDescription]] = None
    result_limit: Optional[LimitDescription] = None


@dataclass
class SelectStatement(SQLStatement):
    """A full select.

    Set operations are applied in order: each nested select is evaluated,
    combined with the result so far, then its order and limit applied.
    """

    statement_type: ClassVar[StatementType] = StatementType.SELECT

    from_table: Optional[TableRef] = None
    select_distinct: bool = False
    select_list: Optional[list[Expr]] = None
    where_clause: Optional[Expr] = None
    group_by: Optional[GroupByDescription] = None
    set_operations: Optional[list[SetOperation]] = None
    order: Optional[list[OrderDescription]] = None
    with_descriptions: Optional[list[WithDescription]] = None
    limit: Optional[LimitDescription] = None


# --- SHOW / TRANSACTION / UPDATE -------------------------------------------


class ShowType(enum.IntEnum):
    COLUMNS = 0
    TABLES = 1


@dataclass
class ShowStatement(SQLStatement):
    """``SHOW TABLES`` or ``SHOW COLUMNS name``."""

    statement_type: ClassVar[StatementType] = StatementType.SHOW

    type: ShowType
    schema: Optional[str] = None
    name: Optional[str] = None


class TransactionCommand(enum.IntEnum):
    BEGIN = 0
    COMMIT = 1
    ROLLBACK = 2


@dataclass
class TransactionStatement(SQLStatement):
    """``BEGIN TRANSACTION``, ``COMMIT`` or ``ROLLBACK``."""

    statement_type: ClassVar[StatementType] = StatementType.TRANSACTION

    command: TransactionCommand


@dataclass
class UpdateClause:
    """A ``column = value`` assignment."""

    column: str
    value: Expr


@dataclass
class UpdateStatement(SQLStatement):
    statement_type: ClassVar[StatementType] = StatementType.UPDATE

    table: Optional[TableRef] = None
    updates: Optional[list[UpdateClause]] = None
    where: Optional[Expr] = None