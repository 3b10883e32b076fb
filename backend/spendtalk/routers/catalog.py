# spendtalk/routers/catalog.py
from fastapi import APIRouter

from spendtalk.agents.sql_agent.utils.schema_profile import catalog_profile

router = APIRouter(prefix="/catalog", tags=["catalog"])

@router.get("")
def get_catalog():
    """Tables, columns and sample questions the assistant can answer."""
    return catalog_profile()
