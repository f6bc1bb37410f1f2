"""
Planner API Router — conflict checks, optimization and agenda.

Endpoints:
- POST /conflicts/check — check a new or edited task against the collection
- POST /schedule/optimize — suggest times for flexible tasks
- POST /agenda — today's display-ordered agenda with summary counts
- GET /health — liveness and active config

The collection travels in the request body; the API stores nothing.
"""

import logging
from dataclasses import asdict
from datetime import UTC, date, datetime

from fastapi import APIRouter, HTTPException

from api.response_models import (
    AgendaRequest,
    AgendaResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
    HealthResponse,
    OptimizeRequest,
    OptimizeResponse,
    ScheduleItemModel,
    SummaryModel,
    TaskModel,
)
from planner import __version__
from planner.agenda import build_agenda, summarize, upcoming_flexible
from planner.config import get_config
from planner.conflicts import detect_conflicts, detect_edit_conflicts
from planner.models import ScheduleKind
from planner.scheduling_engine import apply_optimization, optimize
from planner.time_utils import to_minutes

logger = logging.getLogger(__name__)

router = APIRouter(tags=["planner"])


@router.post("/conflicts/check", response_model=ConflictCheckResponse)
def check_conflicts(req: ConflictCheckRequest):
    """Check a candidate task. severity=error means the save must be refused."""
    candidate = req.task.to_task()
    tasks = [t.to_task() for t in req.tasks]

    known = any(t.id == candidate.id for t in tasks)
    if req.edit:
        if not known:
            raise HTTPException(status_code=404, detail=f"Task {candidate.id} not found for edit")
        report = detect_edit_conflicts(
            candidate, tasks, reference_date=req.reference_date, config=get_config()
        )
    else:
        if known:
            raise HTTPException(
                status_code=409, detail=f"Task {candidate.id} already exists; check it as an edit"
            )
        report = detect_conflicts(
            candidate, tasks, reference_date=req.reference_date, config=get_config()
        )

    return ConflictCheckResponse.model_validate(report.to_dict())


@router.post("/schedule/optimize", response_model=OptimizeResponse)
def optimize_schedule(req: OptimizeRequest):
    """Run one optimization pass and return the collection with suggestions applied."""
    tasks = [t.to_task() for t in req.tasks]
    result = optimize(tasks, config=get_config())
    updated = apply_optimization(tasks, result)

    payload = result.to_dict()
    payload["tasks"] = [TaskModel.from_task(t) for t in updated]
    return OptimizeResponse.model_validate(payload)


@router.post("/agenda", response_model=AgendaResponse)
def agenda(req: AgendaRequest):
    tasks = [t.to_task() for t in req.tasks]
    day = req.reference_date or date.today()
    items = build_agenda(tasks, reference_date=day)

    if req.now is not None:
        upcoming = {id(i) for i in upcoming_flexible(items, to_minutes(req.now))}
        items = [i for i in items if i.kind == ScheduleKind.SCHEDULED or id(i) in upcoming]

    return AgendaResponse(
        date=day.isoformat(),
        items=[
            ScheduleItemModel(time=i.display_time, kind=i.kind, task=TaskModel.from_task(i.task))
            for i in items
        ],
        summary=SummaryModel(**summarize(tasks)),
    )


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
        config=asdict(get_config()),
    )
