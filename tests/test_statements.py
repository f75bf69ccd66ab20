import pytest

from dbplus.expr import ColumnType, DataType, Expr, OperatorType
from dbplus.statements import (
    Alias,
    ColumnDefinition,
    CreateStatement,
    CreateType,
    DeleteStatement,
    DropStatement,
    DropType,
    ExecuteStatement,
    ExportStatement,
    GroupByDescription,
    ImportStatement,
    ImportType,
    InsertStatement,
    InsertType,
    JoinDefinition,
    JoinType,
    LimitDescription,
    OrderDescription,
    OrderType,
    PrepareStatement,
    SelectStatement,
    SetOperation,
    SetType,
    ShowStatement,
    ShowType,
    SQLStatement,
    StatementType,
    TableRef,
    TableRefType,
    TransactionCommand,
    TransactionStatement,
    UpdateClause,
    UpdateStatement,
)


@pytest.mark.parametrize(
    "factory, expected",
    [
        (lambda: SelectStatement(), StatementType.SELECT),
        (lambda: ImportStatement(ImportType.CSV), StatementType.IMPORT),
        (lambda: InsertStatement(InsertType.VALUES), StatementType.INSERT),
        (lambda: UpdateStatement(), StatementType.UPDATE),
        (lambda: DeleteStatement(), StatementType.DELETE),
        (lambda: CreateStatement(CreateType.TABLE), StatementType.CREATE),
        (lambda: DropStatement(DropType.TABLE), StatementType.DROP),
        (lambda: PrepareStatement(), StatementType.PREPARE),
        (lambda: ExecuteStatement(), StatementType.EXECUTE),
        (lambda: ExportStatement(ImportType.TBL), StatementType.EXPORT),
        (lambda: ShowStatement(ShowType.TABLES), StatementType.SHOW),
        (
            lambda: TransactionStatement(TransactionCommand.BEGIN),
            StatementType.TRANSACTION,
        ),
    ],
)
def test_statement_type_and_is_type(factory, expected):
    stmt = factory()
    assert stmt.statement_type == expected
    assert stmt.is_type(expected)
    others = [t for t in StatementType if t != expected]
    assert not any(stmt.is_type(t) for t in others)


def test_statement_type_numbering_follows_declaration_order():
    assert StatementType(0) is StatementType.ERROR
    select = SelectStatement()
    assert select.statement_type == 1
    assert select.is_type(StatementType(1))
    transaction = TransactionStatement(TransactionCommand.BEGIN)
    assert transaction.statement_type == 14
    assert transaction.is_type(StatementType(14))


def test_base_fields_are_keyword_only():
    with pytest.raises(TypeError):
        SQLStatement([])


def test_hints_and_string_length_stored():
    hint = Expr.make_column_ref("idx")
    stmt = SelectStatement(hints=[hint], string_length=17)
    assert stmt.hints == [hint]
    assert stmt.string_length == 17


def test_create_statement_defaults():
    stmt = CreateStatement(CreateType.TABLE)
    assert stmt.type is CreateType.TABLE
    assert stmt.if_not_exists is False
    assert stmt.file_path is None
    assert stmt.schema is None
    assert stmt.table_name is None
    assert stmt.columns is None
    assert stmt.view_columns is None
    assert stmt.select is None
    assert stmt.hints is None


def test_create_statement_with_columns():
    cols = [
        ColumnDefinition("name", ColumnType(DataType.TEXT), True),
        ColumnDefinition("grade", ColumnType(DataType.DOUBLE), False),
    ]
    stmt = CreateStatement(CreateType.TABLE, table_name="students", columns=cols)
    assert [c.name for c in stmt.columns] == ["name", "grade"]
    assert [c.nullable for c in stmt.columns] == [True, False]
    assert stmt.columns[0].type == ColumnType(DataType.TEXT, 99)


def test_column_definition_varchar_length_matters():
    a = ColumnDefinition("city", ColumnType(DataType.VARCHAR, 10), True)
    b = ColumnDefinition("city", ColumnType(DataType.VARCHAR, 20), True)
    c = ColumnDefinition("city", ColumnType(DataType.VARCHAR, 10), True)
    assert a != b
    assert a == c


def test_drop_statement_defaults():
    stmt = DropStatement(DropType.VIEW, name="v")
    assert stmt.if_exists is False
    assert stmt.schema is None
    assert stmt.name == "v"
    assert stmt.type is DropType.VIEW


def test_insert_statement_holds_values():
    values = [Expr.make_literal("Max"), Expr.make_literal(1112233)]
    stmt = InsertStatement(
        InsertType.VALUES, table_name="students", columns=["name", "id"], values=values
    )
    assert stmt.values is values
    assert stmt.columns == ["name", "id"]
    assert stmt.select is None


def test_table_ref_schema_and_name():
    plain = TableRef(TableRefType.NAME, name="students")
    assert not plain.has_schema()
    assert plain.display_name() == "students"
    with_schema = TableRef(TableRefType.NAME, schema="main", name="students")
    assert with_schema.has_schema()


def test_table_ref_alias_wins_over_name():
    ref = TableRef(TableRefType.NAME, name="students", alias=Alias("s"))
    assert ref.display_name() == "s"
    assert ref.alias.columns is None


def test_join_definition_default_inner():
    join = JoinDefinition(
        left=TableRef(TableRefType.NAME, name="a"),
        right=TableRef(TableRefType.NAME, name="b"),
    )
    assert join.type is JoinType.INNER
    assert join.condition is None
    ref = TableRef(TableRefType.JOIN, join=join)
    assert ref.join.left.display_name() == "a"
    assert ref.join.right.display_name() == "b"


def test_select_statement_defaults():
    stmt = SelectStatement()
    assert stmt.select_distinct is False
    assert stmt.from_table is None
    assert stmt.select_list is None
    assert stmt.where_clause is None
    assert stmt.group_by is None
    assert stmt.set_operations is None
    assert stmt.order is None
    assert stmt.with_descriptions is None
    assert stmt.limit is None


def test_select_statement_full_structure():
    where = Expr.make_op_binary(
        Expr.make_column_ref("grade"), OperatorType.GREATER, Expr.make_literal(3.0)
    )
    nested = SelectStatement(select_list=[Expr.make_star()])
    op = SetOperation(
        set_type=SetType.INTERSECT,
        nested_select_statement=nested,
        result_order=[OrderDescription(OrderType.ASC, Expr.make_column_ref("grade"))],
        result_limit=LimitDescription(Expr.make_literal(5)),
    )
    stmt = SelectStatement(
        from_table=TableRef(TableRefType.NAME, name="students"),
        select_list=[Expr.make_star()],
        where_clause=where,
        group_by=GroupByDescription(columns=[Expr.make_column_ref("city")]),
        set_operations=[op],
        limit=LimitDescription(Expr.make_literal(10), Expr.make_literal(2)),
    )
    assert stmt.where_clause.op_type is OperatorType.GREATER
    assert stmt.set_operations[0].nested_select_statement is nested
    assert stmt.set_operations[0].is_all is False
    assert stmt.set_operations[0].result_limit.offset is None
    assert stmt.limit.offset.ival == 2
    assert stmt.group_by.having is None


def test_set_operation_defaults():
    op = SetOperation()
    assert op.set_type is SetType.UNION
    assert op.nested_select_statement is None
    assert op.result_order is None
    assert op.result_limit is None


def test_update_statement_clauses():
    clause = UpdateClause("grade", Expr.make_literal(1.0))
    stmt = UpdateStatement(
        table=TableRef(TableRefType.NAME, name="students"), updates=[clause]
    )
    assert stmt.updates[0].column == "grade"
    assert stmt.updates[0].value.fval == 1.0
    assert stmt.where is None
    assert stmt.table.display_name() == "students"


def test_transaction_and_prepare_fields():
    tx = TransactionStatement(TransactionCommand.ROLLBACK)
    assert tx.command is TransactionCommand.ROLLBACK
    prep = PrepareStatement(name="test", query="SELECT * FROM test WHERE a = ?")
    assert prep.name == "test"
    assert prep.query == "SELECT * FROM test WHERE a = ?"


def test_import_export_share_import_type():
    imp = ImportStatement(ImportType.BINARY, file_path="data.bin", table_name="t")
    exp = ExportStatement(ImportType.BINARY, file_path="data.bin", table_name="t")
    assert imp.type == exp.type
    assert imp.file_path == exp.file_path
    assert not imp.is_type(StatementType.EXPORT)
    assert exp.is_type(StatementType.EXPORT)


def test_statements_compare_by_value():
    a = DeleteStatement(table_name="students")
    b = DeleteStatement(table_name="students")
    c = DeleteStatement(table_name="teachers")
    assert a == b
    assert a != c