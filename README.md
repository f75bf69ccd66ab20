# dbplus

`dbplus` is a tiny table store kept in plain text files. It runs SQL
statements that have already been built as Python objects. It can create
tables, insert rows and select columns. It also has a typed model of SQL
statements and expressions, and helpers that print an indented outline
of that model.

## Modules

- `dbplus.util` has string helpers. `split(text, delimiter)` splits on a
  single character and keeps empty fields. `to_upper(text)` upper-cases
  ASCII letters. `is_known_data_type(name)` checks a name against
  VARCHAR, INT, INTEGER, TEXT, DECIMAL, DOUBLE and LONG.
  `show_help(path="help.txt", out=None)` copies a help file to a stream.
  The module also defines the `QueryKind` enumeration (`READ`, `WRITE`).
- `dbplus.expr` models expressions. `Expr` has factory class methods:
  `make`, `make_literal`, `make_null_literal`, `make_column_ref`,
  `make_star`, `make_op_unary`, `make_op_binary`, `make_between`,
  `make_case_list`, `make_case_list_element`, `case_list_append`,
  `make_case`, `make_function_ref`, `make_array`, `make_array_index`,
  `make_parameter`, `make_select`, `make_exists`, `make_in_operator`,
  `make_extract` and `make_cast`. Its query methods are `is_type`,
  `is_literal`, `has_alias`, `has_table` and `display_name`. The module
  also holds the enumerations `ExprType`, `OperatorType`,
  `DatetimeField` and `DataType`, and `ColumnType`. `ColumnType`
  compares lengths only for `CHAR` and `VARCHAR`, and prints as, for
  example, `VARCHAR(10)`.
- `dbplus.statements` models statements. Each statement class is a
  dataclass whose `statement_type` class attribute is a `StatementType`.
  The classes are `CreateStatement`, `InsertStatement`,
  `SelectStatement`, `UpdateStatement`, `DeleteStatement`,
  `DropStatement`, `ImportStatement`, `ExportStatement`,
  `PrepareStatement`, `ExecuteStatement`, `ShowStatement` and
  `TransactionStatement`. They are built from `ColumnDefinition`,
  `TableRef`, `TableName`, `Alias`, `JoinDefinition`,
  `OrderDescription`, `LimitDescription`, `GroupByDescription`,
  `WithDescription`, `SetOperation` and `UpdateClause`.
- `dbplus.sqlhelper` writes outlines. `print_statement_info` writes an
  indented outline of a statement, one tab per level. It covers select,
  insert, create, import, export and transaction statements and writes
  nothing for other kinds. The module also has `print_expression`,
  `print_table_ref_info`, the per-statement `print_*_statement_info`
  functions, `format_operator` and `format_datetime_field`.
- `dbplus.engine` holds the `Database` class, its errors, and
  `format_cell` / `format_separator`.

## Expressions and outlines

```python
import sys
from dbplus.expr import Expr, OperatorType
from dbplus.sqlhelper import print_expression

condition = Expr.make_op_binary(
    Expr.make_column_ref("age"),
    OperatorType.GREATER,
    Expr.make_literal(30),
)
print_expression(condition, 0, sys.stdout)
```

This prints:

```
>
	age
	30  
```

`make_literal` chooses the kind of literal from the Python type of the
value: `bool`, `int`, `float` or `str`.

## The storage engine

`Database(directory=".", out=None)` works in an existing directory and
keeps three files there:

- `table_index.txt` lists table names, one per line.
- `table.db` holds one line per table: the name, then four fields per
  column. Those fields are the column name, `varchar`, `0` or `1` for
  nullable or not, and `0`.
- `database.db` holds the rows. Each line starts with the table name,
  followed by the values separated by spaces.

Messages and result grids go to `out`, which is standard output by
default.

```python
import sys
from dbplus.engine import Database
from dbplus.expr import ColumnType, DataType, Expr
from dbplus.statements import (
    ColumnDefinition, CreateStatement, CreateType,
    InsertStatement, InsertType, SelectStatement, TableRef, TableRefType,
)

db = Database("data", sys.stdout)
db.create(CreateStatement(
    CreateType.TABLE,
    table_name="people",
    columns=[
        ColumnDefinition("name", ColumnType(DataType.TEXT), True),
        ColumnDefinition("city", ColumnType(DataType.TEXT), True),
    ],
))
db.insert(InsertStatement(
    InsertType.VALUES,
    table_name="people",
    values=[Expr.make_literal("ann"), Expr.make_literal("oslo")],
))
rows = db.select(SelectStatement(
    select_list=[Expr.make_star()],
    from_table=TableRef(TableRefType.NAME, name="people"),
))
# rows == [["ann", "oslo"]]
```

The methods behave as follows:

- `create` records a new table. Every column is stored as `varchar`.
  Nothing is written if the statement has no column list.
- `insert` appends one row. With a column list, the columns must be
  named in the table's own order, and every column left out gets
  `NULL`. Without a column list, the number of values must match the
  number of columns.
- `select` takes `*` or plain column references, and a single table
  name. It writes a grid: a header, a separator line, one line per row,
  then `(N rows)`. It returns the printed rows as lists of strings.
  Cells are cut or padded to 13 characters (`format_cell`).
- `table_exists`, `table_columns` and `load_table_index` read the files.
- `execute(statements)` runs CREATE, INSERT and SELECT statements in
  turn. For a DELETE statement it only writes `Table Deleted`. Other
  kinds are ignored. Any `DatabaseError` raised along the way is
  written to `out` as `Error: ...`, and execution carries on.

When these methods are called directly, they raise errors. All of them
are `DatabaseError` or one of its subclasses:

- `TableExistsError` when the table being created is already there.
- `TableNotFoundError` when the table does not exist.
- `ColumnError` for an unknown column name or a wrong number of values.

## What it does not do

- There is no SQL text parser. Statements must be built from the
  classes in `dbplus.statements` and `dbplus.expr`.
- There is no interactive prompt and no command-line program.
- WHERE conditions are not evaluated; a select returns every row of the
  table.
- UPDATE is not carried out, and DELETE removes nothing.
- Stored values are plain text split on spaces, so a value that holds a
  space does not survive storage intact.