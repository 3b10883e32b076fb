import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spendtalk.core.config import settings
from spendtalk.routers import ask, catalog

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="SpendTalk API",
    version="0.3.0",
    description="Ask questions about invoice and line-item spend in plain English.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS, allow_methods=["*"], allow_headers=["*"],
)

app.include_router(ask.router)
app.include_router(catalog.router)

@app.get("/healthz", tags=["meta"])
def healthz():
    return {"status": "ok"}
