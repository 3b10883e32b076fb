# spendtalk/routers/ask.py
from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal

from spendtalk.agents.sql_agent.interpreters.factory import make_interpreter
from spendtalk.agents.sql_agent.sql_agent import answer_question
from spendtalk.core.config import settings
from spendtalk.services.export_service import EXPORT_MEDIA_TYPES, export_rows

router = APIRouter(prefix="/ask", tags=["ask"])

class AskRequest(BaseModel):
    question: str = Field(..., description="Natural-language question about spend data")
    max_rows: Optional[int] = Field(None, ge=1, le=settings.MAX_ROW_LIMIT, description="Row cap when the question names none")
    # "rules" = deterministic parser, "llm" = Ollama intent extraction; server default when omitted
    interpreter: Optional[Literal["rules", "llm"]] = Field(None, description="Question interpreter")
    model: Optional[str] = Field(None, description="Ollama model for the llm interpreter")
    include_export: bool = Field(False, description="Append export options to the answer")

class ExportRequest(AskRequest):
    format: Literal["csv", "json", "xlsx"] = Field("csv", description="File format")

class AskResponse(BaseModel):
    sql: Optional[str] = None
    columns: List[str] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    row_count: int = 0
    intent: Optional[Dict[str, Any]] = None
    answer: Optional[str] = None
    error: Optional[str] = None

def _run(req: AskRequest) -> Dict[str, Any]:
    question = (req.question or "").strip()
    if not question:
        raise HTTPException(status_code=422, detail="question must not be empty")
    return answer_question(
        question=question,
        max_rows=req.max_rows,
        interpreter=make_interpreter(req.interpreter, model=req.model),
        include_export=req.include_export,
    )

@router.post("", response_model=AskResponse, response_model_exclude_none=True)
def ask(req: AskRequest) -> AskResponse:
    return AskResponse(**_run(req))

@router.post("/export")
def export(req: ExportRequest) -> Response:
    out = _run(req)
    if out.get("error"):
        raise HTTPException(status_code=400, detail=out["answer"])
    body = export_rows(out["columns"], out["rows"], req.format)
    return Response(
        content=body,
        media_type=EXPORT_MEDIA_TYPES[req.format],
        headers={"Content-Disposition": f'attachment; filename="spend_results.{req.format}"'},
    )
