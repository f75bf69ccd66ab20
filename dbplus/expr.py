"""Column types and SQL expression trees."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dbplus.statements import SelectStatement

__all__ = [
    "DataType",
    "ColumnType",
    "ExprType",
    "OperatorType",
    "DatetimeField",
    "Expr",
    "substr",
]


def substr(source: str, start: int, end: int) -> str:
    """Return the characters of ``source`` from ``start`` up to ``end``."""
    return source[start:end]


class DataType(enum.IntEnum):
    UNKNOWN = 0
    INT = 1
    LONG = 2
    FLOAT = 3
    DOUBLE = 4
    CHAR = 5
    VARCHAR = 6
    TEXT = 7
    DATETIME = 8
    DATE = 9


_SIZED_TYPES = (DataType.CHAR, DataType.VARCHAR)


@dataclass
class ColumnType:
    """The type of a column, such as FLOAT or VARCHAR(10)."""

    data_type: DataType = DataType.UNKNOWN
    length: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnType):
            return NotImplemented
        if self.data_type != other.data_type:
            return False
        if self.data_type in _SIZED_TYPES:
            return self.length == other.length
        return True

    def __hash__(self) -> int:
        if self.data_type in _SIZED_TYPES:
            return hash((self.data_type, self.length))
        return hash(self.data_type)

    def __str__(self) -> str:
        if self.data_type in _SIZED_TYPES:
            return f"{self.data_type.name}({self.length})"
        return self.data_type.name


class ExprType(enum.IntEnum):
    LITERAL_FLOAT = 0
    LITERAL_STRING = 1
    LITERAL_INT = 2
    LITERAL_NULL = 3
    STAR = 4
    PARAMETER = 5
    COLUMN_REF = 6
    FUNCTION_REF = 7
    OPERATOR = 8
    SELECT = 9
    HINT = 10
    ARRAY = 11
    ARRAY_INDEX = 12
    EXTRACT = 13
    CAST = 14


class OperatorType(enum.IntEnum):
    NONE = 0
    BETWEEN = 1
    CASE = 2
    CASE_LIST_ELEMENT = 3
    PLUS = 4
    MINUS = 5
    ASTERISK = 6
    SLASH = 7
    PERCENTAGE = 8
    CARET = 9
    EQUALS = 10
    NOT_EQUALS = 11
    LESS = 12
    LESS_EQ = 13
    GREATER = 14
    GREATER_EQ = 15
    LIKE = 16
    NOT_LIKE = 17
    ILIKE = 18
    AND = 19
    OR = 20
    IN = 21
    CONCAT = 22
    NOT = 23
    UNARY_MINUS = 24
    IS_NULL = 25
    EXISTS = 26


class DatetimeField(enum.IntEnum):
    NONE = 0
    SECOND = 1
    MINUTE = 2
    HOUR = 3
    DAY = 4
    MONTH = 5
    YEAR = 6


_LITERAL_TYPES = frozenset(
    {
        ExprType.LITERAL_INT,
        ExprType.LITERAL_FLOAT,
        ExprType.LITERAL_STRING,
        ExprType.PARAMETER,
        ExprType.LITERAL_NULL,
    }
)


@dataclass
class Expr:
    """A node of an SQL expression: literal, operator, column reference and so on."""

    type: ExprType
    expr: Optional[Expr] = None
    expr2: Optional[Expr] = None
    expr_list: Optional[list[Expr]] = None
    select: Optional[SelectStatement] = None
    name: Optional[str] = None
    table: Optional[str] = None
    alias: Optional[str] = None
    fval: float = 0.0
    ival: int = 0
    ival2: int = 0
    datetime_field: DatetimeField = DatetimeField.NONE
    column_type: ColumnType = field(default_factory=ColumnType)
    is_bool_literal: bool = False
    op_type: OperatorType = OperatorType.NONE
    distinct: bool = False

    def is_type(self, expr_type: ExprType) -> bool:
        return self.type == expr_type

    def is_literal(self) -> bool:
        return self.type in _LITERAL_TYPES

    def has_alias(self) -> bool:
        return self.alias is not None

    def has_table(self) -> bool:
        return self.table is not None

    def display_name(self) -> Optional[str]:
        """The alias if one is set, otherwise the name."""
        return self.alias if self.alias is not None else self.name

    @classmethod
    def make(cls, expr_type: ExprType) -> Expr:
        return cls(expr_type)

    @classmethod
    def make_op_unary(cls, op: OperatorType, operand: Optional[Expr]) -> Expr:
        return cls(ExprType.OPERATOR, op_type=op, expr=operand)

    @classmethod
    def make_op_binary(cls, left: Expr, op: OperatorType, right: Expr) -> Expr:
        return cls(ExprType.OPERATOR, op_type=op, expr=left, expr2=right)

    @classmethod
    def make_between(cls, operand: Expr, low: Expr, high: Expr) -> Expr:
        return cls(
            ExprType.OPERATOR,
            op_type=OperatorType.BETWEEN,
            expr=operand,
            expr_list=[low, high],
        )

    @classmethod
    def make_case_list(cls, element: Expr) -> Expr:
        # A temporary holder whose list is later moved into the CASE node.
        return cls(ExprType.OPERATOR, op_type=OperatorType.NONE, expr_list=[element])

    @classmethod
    def make_case_list_element(cls, when: Expr, then: Expr) -> Expr:
        return cls(
            ExprType.OPERATOR,
            op_type=OperatorType.CASE_LIST_ELEMENT,
            expr=when,
            expr2=then,
        )

    @classmethod
    def case_list_append(cls, case_list: Expr, element: Expr) -> Expr:
        if case_list.expr_list is None:
            case_list.expr_list = []
        case_list.expr_list.append(element)
        return case_list

    @classmethod
    def make_case(
        cls, operand: Optional[Expr], case_list: Expr, else_expr: Optional[Expr]
    ) -> Expr:
        items = case_list.expr_list
        case_list.expr_list = None
        return cls(
            ExprType.OPERATOR,
            op_type=OperatorType.CASE,
            expr=operand,
            expr2=else_expr,
            expr_list=items,
        )

    @classmethod
    def make_literal(cls, value: bool | int | float | str) -> Expr:
        """Build a literal node whose kind follows the Python type of ``value``."""
        if isinstance(value, bool):
            return cls(ExprType.LITERAL_INT, ival=int(value), is_bool_literal=True)
        if isinstance(value, int):
            return cls(ExprType.LITERAL_INT, ival=value)
        if isinstance(value, float):
            return cls(ExprType.LITERAL_FLOAT, fval=value)
        if isinstance(value, str):
            return cls(ExprType.LITERAL_STRING, name=value)
        raise TypeError(f"unsupported literal type: {type(value).__name__}")

    @classmethod
    def make_null_literal(cls) -> Expr:
        return cls(ExprType.LITERAL_NULL)

    @classmethod
    def make_column_ref(cls, name: str, table: Optional[str] = None) -> Expr:
        return cls(ExprType.COLUMN_REF, name=name, table=table)

    @classmethod
    def make_star(cls, table: Optional[str] = None) -> Expr:
        return cls(ExprType.STAR, table=table)

    @classmethod
    def make_function_ref(
        cls, name: str, args: Optional[list[Expr]], distinct: bool = False
    ) -> Expr:
        return cls(ExprType.FUNCTION_REF, name=name, expr_list=args, distinct=distinct)

    @classmethod
    def make_array(cls, items: list[Expr]) -> Expr:
        return cls(ExprType.ARRAY, expr_list=items)

    @classmethod
    def make_array_index(cls, operand: Expr, index: int) -> Expr:
        return cls(ExprType.ARRAY_INDEX, expr=operand, ival=index)

    @classmethod
    def make_parameter(cls, param_id: int) -> Expr:
        return cls(ExprType.PARAMETER, ival=param_id)

    @classmethod
    def make_select(cls, select: SelectStatement) -> Expr:
        return cls(ExprType.SELECT, select=select)

    @classmethod
    def make_exists(cls, select: SelectStatement) -> Expr:
        return cls(ExprType.OPERATOR, op_type=OperatorType.EXISTS, select=select)

    @classmethod
    def make_in_operator(cls, operand: Expr, candidates) -> Expr:
        """Build ``operand IN (...)`` from a list of expressions or a sub-select."""
        node = cls(ExprType.OPERATOR, op_type=OperatorType.IN, expr=operand)
        if isinstance(candidates, (list, tuple)):
            node.expr_list = list(candidates)
        else:
            node.select = candidates
        return node

    @classmethod
    def make_extract(cls, field: DatetimeField, operand: Expr) -> Expr:
        return cls(ExprType.EXTRACT, name="EXTRACT", datetime_field=field, expr=operand)

    @classmethod
    def make_cast(cls, operand: Expr, column_type: ColumnType) -> Expr:
        return cls(ExprType.CAST, name="CAST", column_type=column_type, expr=operand)