import pytest

from spendtalk.agents.sql_agent.utils.sqlguard import ensure_safe, is_safe
from spendtalk.core.errors import UnsafeSQLError


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT TOP 100 SUPPLIER_NAME FROM goods_invoicefields",
        "  select top 5 * from goods_lineitems_ps;",
        "SELECT TOP 10 SUPPLIER_NAME FROM goods_invoicefields WHERE SUPPLIER_NAME LIKE '%Merge Co%'",
        "SELECT TOP 10 PRODUCT_DESCRIPTION FROM goods_lineitems_ps WHERE PRODUCT_DESCRIPTION = 'drop; delete'",
        "SELECT TOP 1 UPDATED_AT FROM goods_invoicefields",
    ],
)
def test_read_only_selects_pass(sql):
    assert is_safe(sql)
    assert ensure_safe(sql) == sql


@pytest.mark.parametrize(
    "sql",
    [
        "DELETE FROM goods_invoicefields",
        "UPDATE goods_invoicefields SET LHN = 'x'",
        "SELECT 1; DROP TABLE goods_invoicefields",
        "SELECT * INTO backup_table FROM goods_invoicefields",
        "SELECT 1 -- sneaky\n; TRUNCATE TABLE goods_lineitems_ps",
        "SELECT 1 /* note */",
        "WITH x AS (SELECT 1) SELECT * FROM x",
        "EXEC sp_who",
        "MERGE goods_invoicefields USING t ON 1 = 1",
        "",
    ],
)
def test_everything_else_is_rejected(sql):
    assert not is_safe(sql)
    with pytest.raises(UnsafeSQLError):
        ensure_safe(sql)
