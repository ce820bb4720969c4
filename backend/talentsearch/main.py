import logging
import os
from fastapi import FastAPI
from .db import init_db
from .routers import candidates, search

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(title="talentsearch")

@app.on_event("startup")
def on_startup():
    init_db()

# search is mounted first so /search and /advanced-search win over /{candidate_id}
app.include_router(search.router, prefix="/api/candidates", tags=["search"])
app.include_router(candidates.router, prefix="/api/candidates", tags=["candidates"])

@app.get("/")
def root():
    return {"ok": True, "service": "talentsearch"}
