"""Readable, indented summaries of parsed SQL statements."""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from dbplus.expr import DatetimeField, Expr, ExprType, OperatorType
from dbplus.statements import (
    Alias,
    CreateStatement,
    ExportStatement,
    ImportStatement,
    ImportType,
    InsertStatement,
    InsertType,
    OrderType,
    SelectStatement,
    SetType,
    SQLStatement,
    StatementType,
    TableRef,
    TableRefType,
    TransactionCommand,
    TransactionStatement,
)

__all__ = [
    "format_operator",
    "format_datetime_field",
    "print_statement_info",
    "print_select_statement_info",
    "print_import_statement_info",
    "print_export_statement_info",
    "print_insert_statement_info",
    "print_create_statement_info",
    "print_transaction_statement_info",
    "print_expression",
    "print_table_ref_info",
]

_OPERATOR_TOKENS = {
    OperatorType.NONE: "None",
    OperatorType.BETWEEN: "BETWEEN",
    OperatorType.CASE: "CASE",
    OperatorType.CASE_LIST_ELEMENT: "CASE LIST ELEMENT",
    OperatorType.PLUS: "+",
    OperatorType.MINUS: "-",
    OperatorType.ASTERISK: "*",
    OperatorType.SLASH: "/",
    OperatorType.PERCENTAGE: "%",
    OperatorType.CARET: "^",
    OperatorType.EQUALS: "=",
    OperatorType.NOT_EQUALS: "!=",
    OperatorType.LESS: "<",
    OperatorType.LESS_EQ: "<=",
    OperatorType.GREATER: ">",
    OperatorType.GREATER_EQ: ">=",
    OperatorType.LIKE: "LIKE",
    OperatorType.NOT_LIKE: "NOT LIKE",
    OperatorType.ILIKE: "ILIKE",
    OperatorType.AND: "AND",
    OperatorType.OR: "OR",
    OperatorType.IN: "IN",
    OperatorType.CONCAT: "CONCAT",
    OperatorType.NOT: "NOT",
    OperatorType.UNARY_MINUS: "-",
    OperatorType.IS_NULL: "IS NULL",
    OperatorType.EXISTS: "EXISTS",
}

_DATETIME_TOKENS = {
    DatetimeField.NONE: "None",
    DatetimeField.SECOND: "SECOND",
    DatetimeField.MINUTE: "MINUTE",
    DatetimeField.HOUR: "HOUR",
    DatetimeField.DAY: "DAY",
    DatetimeField.MONTH: "MONTH",
    DatetimeField.YEAR: "YEAR",
}

_IMPORT_TYPE_NAMES = {
    ImportType.CSV: "CSV",
    ImportType.TBL: "TBL",
    ImportType.BINARY: "BINARY",
    ImportType.AUTO: "AUTO",
}

_SET_TYPE_LABELS = {
    SetType.INTERSECT: "Intersect:",
    SetType.UNION: "Union:",
    SetType.EXCEPT: "Except:",
}

_TRANSACTION_NAMES = {
    TransactionCommand.BEGIN: "BEGIN",
    TransactionCommand.COMMIT: "COMMIT",
    TransactionCommand.ROLLBACK: "ROLLBACK",
}


def format_operator(op: OperatorType) -> str:
    """The token for an operator, or its number if it has none."""
    return _OPERATOR_TOKENS.get(op, str(int(op)))


def format_datetime_field(field: DatetimeField) -> str:
    """The keyword for a datetime field, or its number if it has none."""
    return _DATETIME_TOKENS.get(field, str(int(field)))


def _stream(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


def _line(out: TextIO, indent: int, text: object) -> None:
    out.write("\t" * indent + ("" if text is None else str(text)) + "\n")


def _int_line(out: TextIO, indent: int, value: int) -> None:
    _line(out, indent, f"{value}  ")


def _float_line(out: TextIO, indent: int, value: float) -> None:
    _line(out, indent, format(value, "g"))


def _print_alias(alias: Alias, indent: int, out: TextIO) -> None:
    _line(out, indent + 1, "Alias")
    _line(out, indent + 2, alias.name)
    for column in alias.columns or ():
        _line(out, indent + 3, column)


def print_table_ref_info(
    table: TableRef, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of a table reference."""
    out = _stream(out)
    if table.type == TableRefType.NAME:
        _line(out, indent, table.name)
        if table.schema:
            _line(out, indent + 1, "Schema")
            _line(out, indent + 2, table.schema)
    elif table.type == TableRefType.SELECT:
        print_select_statement_info(table.select, indent, out)
    elif table.type == TableRefType.JOIN:
        join = table.join
        _line(out, indent, "Join Table")
        _line(out, indent + 1, "Left")
        print_table_ref_info(join.left, indent + 2, out)
        _line(out, indent + 1, "Right")
        print_table_ref_info(join.right, indent + 2, out)
        _line(out, indent + 1, "Join Condition")
        print_expression(join.condition, indent + 2, out)
    elif table.type == TableRefType.CROSS_PRODUCT:
        for inner in table.tables or ():
            print_table_ref_info(inner, indent, out)

    if table.alias is not None:
        _print_alias(table.alias, indent, out)


def _print_operator_expression(
    expr: Optional[Expr], indent: int, out: TextIO
) -> None:
    if expr is None:
        _line(out, indent, "null")
        return
    _line(out, indent, format_operator(expr.op_type))
    print_expression(expr.expr, indent + 1, out)
    if expr.expr2 is not None:
        print_expression(expr.expr2, indent + 1, out)
    elif expr.expr_list is not None:
        for item in expr.expr_list:
            print_expression(item, indent + 1, out)


def print_expression(
    expr: Optional[Expr], indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of an expression tree; nothing for ``None``."""
    if expr is None:
        return
    out = _stream(out)
    kind = expr.type
    if kind == ExprType.STAR:
        _line(out, indent, "*")
    elif kind == ExprType.COLUMN_REF:
        _line(out, indent, expr.name)
        if expr.table:
            _line(out, indent + 1, "Table:")
            _line(out, indent + 2, expr.table)
    elif kind == ExprType.LITERAL_FLOAT:
        _float_line(out, indent, expr.fval)
    elif kind in (ExprType.LITERAL_INT, ExprType.PARAMETER):
        _int_line(out, indent, expr.ival)
    elif kind == ExprType.LITERAL_STRING:
        _line(out, indent, expr.name)
    elif kind == ExprType.FUNCTION_REF:
        _line(out, indent, expr.name)
        for item in expr.expr_list or ():
            print_expression(item, indent + 1, out)
    elif kind == ExprType.EXTRACT:
        _line(out, indent, expr.name)
        _line(out, indent + 1, format_datetime_field(expr.datetime_field))
        print_expression(expr.expr, indent + 1, out)
    elif kind == ExprType.CAST:
        _line(out, indent, expr.name)
        _line(out, indent + 1, expr.column_type)
        print_expression(expr.expr, indent + 1, out)
    elif kind == ExprType.OPERATOR:
        _print_operator_expression(expr, indent, out)
    elif kind == ExprType.SELECT:
        print_select_statement_info(expr.select, indent, out)
    elif kind == ExprType.ARRAY:
        for item in expr.expr_list or ():
            print_expression(item, indent + 1, out)
    elif kind == ExprType.ARRAY_INDEX:
        print_expression(expr.expr, indent + 1, out)
        _int_line(out, indent, expr.ival)
    else:
        sys.stderr.write(f"Unrecognized expression type {int(kind)}\n")
        return

    if expr.alias is not None:
        _line(out, indent + 1, "Alias")
        _line(out, indent + 2, expr.alias)


def _print_order(order, indent: int, label: str, out: TextIO) -> None:
    first = order[0]
    _line(out, indent + 1, label)
    print_expression(first.expr, indent + 2, out)
    _line(
        out,
        indent + 2,
        "ascending" if first.type == OrderType.ASC else "descending",
    )


def print_select_statement_info(
    stmt: SelectStatement, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of a select statement."""
    out = _stream(out)
    _line(out, indent, "SelectStatement")
    _line(out, indent + 1, "Fields:")
    for item in stmt.select_list or ():
        print_expression(item, indent + 2, out)

    if stmt.from_table is not None:
        _line(out, indent + 1, "Sources:")
        print_table_ref_info(stmt.from_table, indent + 2, out)

    if stmt.where_clause is not None:
        _line(out, indent + 1, "Search Conditions:")
        print_expression(stmt.where_clause, indent + 2, out)

    if stmt.group_by is not None:
        _line(out, indent + 1, "GroupBy:")
        for item in stmt.group_by.columns or ():
            print_expression(item, indent + 2, out)
        if stmt.group_by.having is not None:
            _line(out, indent + 1, "Having:")
            print_expression(stmt.group_by.having, indent + 2, out)

    for operation in stmt.set_operations or ():
        _line(out, indent + 1, _SET_TYPE_LABELS[operation.set_type])
        print_select_statement_info(operation.nested_select_statement, indent + 2, out)
        if operation.result_order is not None:
            _print_order(operation.result_order, indent, "SetResultOrderBy:", out)
        limit = operation.result_limit
        if limit is not None:
            if limit.limit is not None:
                _line(out, indent + 1, "SetResultLimit:")
                print_expression(limit.limit, indent + 2, out)
            if limit.offset is not None:
                _line(out, indent + 1, "SetResultOffset:")
                print_expression(limit.offset, indent + 2, out)

    if stmt.order is not None:
        _print_order(stmt.order, indent, "OrderBy:", out)

    if stmt.limit is not None and stmt.limit.limit is not None:
        _line(out, indent + 1, "Limit:")
        print_expression(stmt.limit.limit, indent + 2, out)

    if stmt.limit is not None and stmt.limit.offset is not None:
        _line(out, indent + 1, "Offset:")
        print_expression(stmt.limit.offset, indent + 2, out)


def _print_file_statement(stmt, title: str, indent: int, out: TextIO) -> None:
    _line(out, indent, title)
    _line(out, indent + 1, stmt.file_path)
    _line(out, indent + 1, _IMPORT_TYPE_NAMES[stmt.type])
    _line(out, indent + 1, stmt.table_name)


def print_import_statement_info(
    stmt: ImportStatement, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of an import statement."""
    _print_file_statement(stmt, "ImportStatement", indent, _stream(out))


def print_export_statement_info(
    stmt: ExportStatement, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of an export statement."""
    _print_file_statement(stmt, "ExportStatement", indent, _stream(out))


def print_create_statement_info(
    stmt: CreateStatement, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of a create statement."""
    out = _stream(out)
    _line(out, indent, "CreateStatement")
    _line(out, indent + 1, stmt.table_name)
    if stmt.file_path:
        _line(out, indent + 1, stmt.file_path)


def print_insert_statement_info(
    stmt: InsertStatement, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of an insert statement."""
    out = _stream(out)
    _line(out, indent, "InsertStatement")
    _line(out, indent + 1, stmt.table_name)
    if stmt.columns is not None:
        _line(out, indent + 1, "Columns")
        for column in stmt.columns:
            _line(out, indent + 2, column)
    if stmt.type == InsertType.VALUES:
        _line(out, indent + 1, "Values")
        for value in stmt.values or ():
            print_expression(value, indent + 2, out)
    elif stmt.type == InsertType.SELECT:
        print_select_statement_info(stmt.select, indent + 1, out)


def print_transaction_statement_info(
    stmt: TransactionStatement, indent: int = 0, out: Optional[TextIO] = None
) -> None:
    """Write a summary of a transaction statement."""
    out = _stream(out)
    _line(out, indent, "TransactionStatement")
    _line(out, indent + 1, _TRANSACTION_NAMES[stmt.command])


_PRINTERS: dict[StatementType, Callable[..., None]] = {
    StatementType.SELECT: print_select_statement_info,
    StatementType.INSERT: print_insert_statement_info,
    StatementType.CREATE: print_create_statement_info,
    StatementType.IMPORT: print_import_statement_info,
    StatementType.EXPORT: print_export_statement_info,
    StatementType.TRANSACTION: print_transaction_statement_info,
}


def print_statement_info(stmt: SQLStatement, out: Optional[TextIO] = None) -> None:
    """Write a summary of any statement; kinds without a printer write nothing."""
    printer = _PRINTERS.get(stmt.statement_type)
    if printer is not None:
        printer(stmt, 0, _stream(out))