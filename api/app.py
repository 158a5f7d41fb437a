import os, time, logging, threading
from typing import Any, Dict, List, Optional
from fastapi import (
    FastAPI,
    HTTPException,
    Request,
    Depends,
)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

from Generate.params import Number, PlotDimensions, Room, RoomDraft, RoomSize
from Generate.registry import RoomRegistry
from Generate.rules import RuleCatalog, UnknownRoomType, default_catalog
from render.export import content_disposition, export_png
from render.render_svg import render_floor_plan_svg

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("floorplan_api")


def _load_api_keys() -> set:
    return set(filter(None, os.environ.get("API_KEYS", "testkey").split(",")))


def _get_api_key(request: Request) -> str:
    api_key = request.headers.get("X-API-Key")
    if not api_key or api_key not in request.app.state.api_keys:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Invalid API key"},
        )
    return api_key


class CatalogEntry(BaseModel):
    type: str
    label: str
    direction: str
    default_size: RoomSize
    description: str
    declared_preferences: List[str]


class PlanOut(BaseModel):
    plot: PlotDimensions
    draft: RoomDraft
    rooms: List[Room]


class SelectTypeRequest(BaseModel):
    type: str


class DraftUpdate(BaseModel):
    length: Optional[Number] = None
    width: Optional[Number] = None
    has_attached_washroom: Optional[bool] = None
    is_open: Optional[bool] = None
    is_inside: Optional[bool] = None
    is_combined: Optional[bool] = None


class AddRoomResponse(BaseModel):
    added: List[Room]
    plan: PlanOut


class RemoveRoomResponse(BaseModel):
    removed: List[Room]
    plan: PlanOut


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None
    metadata: Dict[str, float]


def _plan_out(registry: RoomRegistry) -> PlanOut:
    return PlanOut(plot=registry.plot, draft=registry.draft, rooms=list(registry.rooms))


def _processing_time(request: Request) -> float:
    return time.perf_counter() - getattr(request.state, "start_time", time.perf_counter())


def create_app(catalog: Optional[RuleCatalog] = None) -> FastAPI:
    """Build the API around its own catalog and plan registry."""
    app = FastAPI(title="Vastu Floor Plan API", version="1.0.0")
    app.state.catalog = catalog if catalog is not None else default_catalog()
    app.state.registry = RoomRegistry(app.state.catalog)
    app.state.lock = threading.Lock()
    app.state.api_keys = _load_api_keys()

    # Prometheus metrics
    prom_registry = CollectorRegistry()
    request_count = Counter(
        "request_total", "Total HTTP requests", ["method", "endpoint", "http_status"],
        registry=prom_registry,
    )
    request_latency = Histogram(
        "request_latency_seconds", "Latency of HTTP requests", ["endpoint"],
        registry=prom_registry,
    )
    error_count = Counter(
        "request_errors_total", "Total HTTP errors",
        registry=prom_registry,
    )
    app.state.prom_registry = prom_registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        body = await request.body()
        if body:
            logger.info("Request %s %s body: %s", request.method, request.url.path, body.decode("utf-8", "ignore"))
        else:
            logger.info("Request %s %s", request.method, request.url.path)

        async def receive():
            return {"type": "http.request", "body": body}

        request._receive = receive  # type: ignore
        response = await call_next(request)

        resp_body = b""
        async for chunk in response.body_iterator:
            resp_body += chunk
        if response.headers.get("content-type", "").startswith("application/json"):
            logger.info(
                "Response %s %s status %s body: %s",
                request.method,
                request.url.path,
                response.status_code,
                resp_body.decode("utf-8", "ignore"),
            )
        else:
            logger.info(
                "Response %s %s status %s (%d bytes)",
                request.method,
                request.url.path,
                response.status_code,
                len(resp_body),
            )
        return Response(
            content=resp_body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.perf_counter()
        request.state.start_time = start_time
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as exc:
            status_code = 500
            error_count.inc()
            logger.exception("Unhandled exception during request: %s", exc)
            raise
        finally:
            duration = time.perf_counter() - start_time
            endpoint = request.url.path
            request_count.labels(request.method, endpoint, status_code).inc()
            request_latency.labels(endpoint).observe(duration)
            logger.info(
                "%s %s -> %s in %.3fs",
                request.method,
                endpoint,
                status_code,
                duration,
            )
        return response

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning("HTTPException %s: %s", exc.status_code, exc.detail)
        detail = exc.detail
        if isinstance(detail, dict):
            content = dict(detail)
        else:
            content = {"code": "error", "message": str(detail)}
        content["metadata"] = {"processing_time": _processing_time(request)}
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(UnknownRoomType)
    async def unknown_room_type_handler(request: Request, exc: UnknownRoomType):
        logger.warning("Unknown room type requested: %s", exc.room_type)
        return JSONResponse(
            status_code=400,
            content={
                "code": "unknown_room_type",
                "message": str(exc),
                "details": {"type": exc.room_type},
                "metadata": {"processing_time": _processing_time(request)},
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "code": "internal_error",
                "message": "Internal server error",
                "metadata": {"processing_time": _processing_time(request)},
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error: %s", exc)
        return JSONResponse(
            status_code=422,
            content={
                "code": "validation_error",
                "message": "Invalid request",
                "details": exc.errors(),
                "metadata": {"processing_time": _processing_time(request)},
            },
        )

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/metrics")
    def metrics():
        return Response(generate_latest(prom_registry), media_type=CONTENT_TYPE_LATEST)

    @app.get("/catalog", response_model=List[CatalogEntry])
    def catalog_entries(request: Request, api_key: str = Depends(_get_api_key)):
        cat: RuleCatalog = request.app.state.catalog
        entries = []
        for room_type in cat.selectable_types():
            rule = cat.lookup(room_type)
            entries.append(CatalogEntry(
                type=room_type,
                label=cat.option_label(room_type),
                direction=rule.direction,
                default_size=rule.default_size,
                description=rule.description,
                declared_preferences=rule.preferences.declared(),
            ))
        return entries

    @app.get("/plan", response_model=PlanOut)
    def get_plan(request: Request, api_key: str = Depends(_get_api_key)):
        with request.app.state.lock:
            return _plan_out(request.app.state.registry)

    @app.put("/plot", response_model=PlanOut)
    def put_plot(request: Request, plot: PlotDimensions, api_key: str = Depends(_get_api_key)):
        registry: RoomRegistry = request.app.state.registry
        with request.app.state.lock:
            registry.set_plot_dimensions(plot)
            return _plan_out(registry)

    @app.post(
        "/draft/type",
        response_model=PlanOut,
        responses={400: {"model": ErrorResponse}},
    )
    def select_type(request: Request, req: SelectTypeRequest, api_key: str = Depends(_get_api_key)):
        registry: RoomRegistry = request.app.state.registry
        if req.type not in request.app.state.catalog.selectable_types():
            raise UnknownRoomType(req.type)
        with request.app.state.lock:
            registry.select_room_type(req.type)
            return _plan_out(registry)

    @app.patch("/draft", response_model=PlanOut)
    def patch_draft(request: Request, req: DraftUpdate, api_key: str = Depends(_get_api_key)):
        registry: RoomRegistry = request.app.state.registry
        changes = req.model_dump(exclude_none=True)
        with request.app.state.lock:
            registry.update_draft(**changes)
            return _plan_out(registry)

    @app.post("/rooms", response_model=AddRoomResponse)
    def add_room(request: Request, api_key: str = Depends(_get_api_key)):
        registry: RoomRegistry = request.app.state.registry
        with request.app.state.lock:
            added = registry.add_room()
            return AddRoomResponse(added=added, plan=_plan_out(registry))

    @app.delete("/rooms/{room_id}", response_model=RemoveRoomResponse)
    def remove_room(request: Request, room_id: str, api_key: str = Depends(_get_api_key)):
        registry: RoomRegistry = request.app.state.registry
        with request.app.state.lock:
            removed = registry.remove_room(room_id)
            return RemoveRoomResponse(removed=removed, plan=_plan_out(registry))

    @app.get("/plan.svg")
    def plan_svg(request: Request, api_key: str = Depends(_get_api_key)):
        with request.app.state.lock:
            layout = request.app.state.registry.to_layout()
        return Response(render_floor_plan_svg(layout), media_type="image/svg+xml")

    @app.get("/export")
    def export(request: Request, api_key: str = Depends(_get_api_key)):
        with request.app.state.lock:
            layout = request.app.state.registry.to_layout()
        png = export_png(layout)
        if png is None:
            return Response(status_code=204)
        return Response(
            png,
            media_type="image/png",
            headers={"Content-Disposition": content_disposition()},
        )

    return app


app = create_app()
