"""
FastAPI application exposing the course advisor to a hosting platform.

- One engine is built at startup from the catalog at ``CATALOG_PATH``
- ``POST /query`` runs the full intent -> handler flow
- ``/recommend``, ``/learning-path`` and ``/skill-gaps`` call the
  individual operations directly
- Every request carries its own learner context; nothing is stored
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .catalog_build import CatalogError
from .config import CATALOG_PATH, LOG_DIR, GoalRequest, HealthResponse, QueryRequest, SkillGapRequest
from .engine import QueryEngine, as_context
from .models import Course, QueryResult, SkillGapReport

app = FastAPI(title="course-advisor")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_engine: Optional[QueryEngine] = None
_log_sink_id: Optional[int] = None


@app.on_event("startup")
def startup_event() -> None:
    global _engine, _log_sink_id
    if _log_sink_id is None:
        _log_sink_id = logger.add(LOG_DIR / "api.log", rotation="10 MB", retention=5, level="INFO")
    logger.info("Starting course advisor, catalog {}", CATALOG_PATH)
    try:
        _engine = QueryEngine.from_catalog_file(CATALOG_PATH)
    except CatalogError as e:
        _engine = None
        logger.error("Catalog failed to load: {}", e)
        return
    logger.info("Engine ready with {} courses", len(_engine.index))


def _require_engine() -> QueryEngine:
    if _engine is None:
        raise HTTPException(status_code=500, detail="Catalog not loaded")
    return _engine


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    courses = len(_engine.index) if _engine is not None else 0
    return HealthResponse(status="healthy" if _engine is not None else "degraded", courses=courses)


@app.post("/query", response_model=QueryResult)
def query(req: QueryRequest) -> QueryResult:
    text = req.query.strip()
    if not text:
        raise HTTPException(status_code=422, detail="Query must be non-empty")
    engine = _require_engine()
    return engine.process_query(text, as_context(req.context))


@app.post("/recommend", response_model=List[Course])
def recommend(req: GoalRequest) -> List[Course]:
    engine = _require_engine()
    return engine.recommend_courses(req.goal, as_context(req.context))


@app.post("/learning-path", response_model=List[Course])
def learning_path(req: GoalRequest) -> List[Course]:
    engine = _require_engine()
    return engine.build_path(req.goal, as_context(req.context))


@app.post("/skill-gaps", response_model=SkillGapReport)
def skill_gaps(req: SkillGapRequest) -> SkillGapReport:
    engine = _require_engine()
    return engine.analyze_skill_gaps(req.current_skills, req.target_goal)
