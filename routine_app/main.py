# routine_app/main.py
import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routine_app.config import settings
from routine_app.database import Base, engine, SessionLocal
from routine_app.logging_config import setup_logging
from routine_app.routers import auth, routine
from routine_app.utils.conflict import ConflictError

# register tables on Base.metadata
from routine_app.models import user as _user_model  # noqa: F401
from routine_app.models import routine as _routine_model  # noqa: F401


setup_logging()
logger = logging.getLogger("routine_app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 建立資料表（若不存在）
    Base.metadata.create_all(bind=engine)
    if settings.SEED_ADMIN_USERNAME:
        db = SessionLocal()
        try:
            auth.seed_admin(db, settings.SEED_ADMIN_USERNAME, settings.SEED_ADMIN_PASSWORD)
        finally:
            db.close()
    yield


app = FastAPI(title="School Routine Backend", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": str(exc),
            "conflict": exc.conflict.to_dict(),
        },
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(routine.router)


@app.get("/")
def root():
    return {"message": "Routine backend is running!"}
