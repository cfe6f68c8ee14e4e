from __future__ import annotations

from dataclasses import asdict
import logging
from typing import Any, Dict
from urllib.parse import quote

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from fastapi.encoders import jsonable_encoder

from api.schemas import LogRequest, MetaMonthsResponse, MetaPeopleResponse
from core.data import build_data_context, prepare_context
from core.export import export_bytes, export_filename
from core.filters import FilterState, normalize_filters
from core.metrics_debug import compute_debug
from core.metrics_overview import compute_overview
from core.metrics_people import compute_people


app = FastAPI(title="Meal Attendance API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_request(req: LogRequest) -> FilterState:
    return normalize_filters(req.filters.model_dump())


def _context(req: LogRequest) -> Dict[str, Any]:
    data_ctx = build_data_context(req.text, skip_blank=req.skip_blank)
    return prepare_context(_filters_from_request(req), data_ctx)


def _json(data: object) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(data))


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/meta/people", response_model=MetaPeopleResponse)
def meta_people(req: LogRequest):
    try:
        ctx = _context(req)
        return _json({"people": ctx["people"]})
    except Exception as exc:
        logger.exception("meta_people failed")
        return _error(exc)


@app.post("/meta/months", response_model=MetaMonthsResponse)
def meta_months(req: LogRequest):
    try:
        ctx = _context(req)
        return _json({"months": ctx["months"]})
    except Exception as exc:
        logger.exception("meta_months failed")
        return _error(exc)


@app.post("/records")
def records(req: LogRequest):
    try:
        ctx = _context(req)
        return _json({"filters": asdict(ctx["filters"]), "records": [r.to_dict() for r in ctx["filtered_records"]]})
    except Exception as exc:
        logger.exception("records failed")
        return _error(exc)


@app.post("/stats")
def stats(req: LogRequest):
    try:
        ctx = _context(req)
        return _json(asdict(ctx["stats"]))
    except Exception as exc:
        logger.exception("stats failed")
        return _error(exc)


@app.post("/overview")
def overview(req: LogRequest):
    try:
        ctx = _context(req)
        return _json(compute_overview(ctx["filters"], ctx))
    except Exception as exc:
        logger.exception("overview failed")
        return _error(exc)


@app.post("/people")
def people(req: LogRequest, top_n: int = Query(default=20, ge=1, le=200)):
    try:
        ctx = _context(req)
        return _json(compute_people(ctx["filters"], ctx, top_n=top_n))
    except Exception as exc:
        logger.exception("people failed")
        return _error(exc)


@app.post("/debug")
def debug(req: LogRequest):
    try:
        ctx = _context(req)
        return _json(compute_debug(ctx["filters"], ctx))
    except Exception as exc:
        logger.exception("debug failed")
        return _error(exc)


@app.post("/export")
def export(req: LogRequest):
    ctx = _context(req)
    filt: FilterState = ctx["filters"]
    filename = export_filename(filt.person, filt.month)
    return Response(
        content=export_bytes(ctx["filtered_records"]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
