# traininglog/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from sqlalchemy import text

from traininglog.errors import register_exception_handlers
from traininglog.route_gate import gate, is_authenticated
from traininglog.routers.auth import router as auth_router
from traininglog.routers.exercises import router as exercises_router
from traininglog.routers.sessions import router as sessions_router
from traininglog.routers.templates import router as templates_router
from traininglog.routers.progress import router as progress_router
from traininglog.db import SessionLocal  # for healthz DB check
from traininglog.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()

app = FastAPI(
    title="Training Log API",
    openapi_tags=[
        {"name": "auth", "description": "Signup, login & password reset"},
        {"name": "exercises", "description": "Global and custom exercise library"},
        {"name": "sessions", "description": "Logged workouts, their exercises and set logs"},
        {"name": "templates", "description": "Reusable session templates"},
        {"name": "progress", "description": "Per-exercise progress rollups"},
    ],
)

# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

@app.middleware("http")
async def gate_page_routes(request: Request, call_next):
    target = gate(request.url.path, is_authenticated(request))
    if target:
        return RedirectResponse(url=str(request.url.replace(path=target, query="")), status_code=307)
    return await call_next(request)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "Training Log API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(auth_router)
app.include_router(exercises_router)
app.include_router(sessions_router)
app.include_router(templates_router)
app.include_router(progress_router)
