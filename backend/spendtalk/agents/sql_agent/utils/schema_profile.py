from __future__ import annotations
from typing import Any, Dict, List

from spendtalk.agents.sql_agent.utils.types import SchemaCatalog, TableSpec
from spendtalk.constants.spend_schema import SPEND_CATALOG


def profile_table(table: TableSpec) -> Dict[str, Any]:
    """
    Returns:
      {
        name, alias, description, columns, default_columns, sample_queries
      }
    """
    return {
        "name": table.name,
        "alias": table.alias,
        "description": table.description,
        "columns": [
            {
                "name": c.name,
                "description": c.description,
                "sql_type": c.sql_type,
                "category": c.category.value,
                "numeric_as_text": c.numeric_as_text,
            }
            for c in table.columns
        ],
        "default_columns": list(table.default_columns),
        "sample_queries": list(table.sample_queries),
    }


def catalog_profile(catalog: SchemaCatalog = SPEND_CATALOG) -> Dict[str, Any]:
    return {
        "join_key": catalog.join_key,
        "tables": [profile_table(t) for t in catalog.tables],
    }


def schema_text(catalog: SchemaCatalog = SPEND_CATALOG) -> str:
    lines: List[str] = []
    for t in catalog.tables:
        lines.append(f"- {t.name} ({t.description})")
        for c in t.columns:
            note = f", {c.category.value}"
            if c.numeric_as_text:
                note += ", stored as text"
            lines.append(f"    {c.name} [{c.sql_type}{note}]: {c.description}")
    lines.append(f"Tables join on {catalog.join_key}.")
    return "\n".join(lines)
