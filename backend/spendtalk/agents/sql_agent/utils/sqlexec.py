from __future__ import annotations
from typing import Any, Dict, List, Tuple
import pandas as pd
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from spendtalk.core.errors import QueryExecutionError


def frame_to_rows(df: pd.DataFrame) -> Tuple[List[str], List[Dict[str, Any]]]:
    """Column names and row dicts, with NaN/NaT turned into None."""
    cols = [str(c) for c in df.columns]
    if df.empty:
        return cols, []
    clean = df.astype(object).where(pd.notna(df), None)
    return cols, clean.to_dict(orient="records")


def execute_query(engine: Engine, sql: str) -> Tuple[List[str], List[Dict[str, Any]]]:
    try:
        with engine.connect() as conn:
            df = pd.read_sql_query(sql, con=conn)
    except (SQLAlchemyError, pd.errors.DatabaseError) as e:
        raise QueryExecutionError(str(e)) from e
    return frame_to_rows(df)
