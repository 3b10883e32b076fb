import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool


@pytest.fixture
def sqlite_engine():
    """In-memory stand-in for the spend database; amounts are stored as text like production."""
    engine = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}, future=True,
    )
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE goods_invoicefields ("
            "INVOICE_NUMBER TEXT, INVOICE_DATE TEXT, SUPPLIER_NAME TEXT, LHN TEXT, INVOICE_TOTAL TEXT)"
        ))
        conn.execute(text(
            "INSERT INTO goods_invoicefields VALUES "
            "('INV-1', '2024-03-15', 'Acme', 'Central Adelaide', '1500.50'), "
            "('INV-2', '2024-04-01', 'Globex', 'Northern Adelaide', NULL), "
            "('INV-3', '2023-11-20', 'Acme', 'Central Adelaide', '250')"
        ))
        conn.execute(text("CREATE TABLE measures (LABEL TEXT, VALUE REAL)"))
        conn.execute(text("INSERT INTO measures VALUES ('a', 1.5), ('b', NULL)"))
    yield engine
    engine.dispose()
