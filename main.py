# backend/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS, LOG_LEVEL
from routers import (
    ai,
    analytics,
    assessments,
    auth,
    current_affairs,
    essay,
    gamification,
    goals,
    mood,
    notes,
    questions,
    sections,
    study_timer,
    subjects,
)

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


# --------- App Setup ---------
app = FastAPI(title="UPSC Study Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    subjects, goals, assessments, mood, current_affairs, essay, questions, gamification,
    analytics, ai, auth, notes, study_timer,
):
    app.include_router(module.router)
app.include_router(sections.optional_router)
app.include_router(sections.psir_router)
app.include_router(gamification.stats_router)


# --------- Error Handlers ---------
# every error body is {"error": ...}
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in e["loc"][1:]), "message": e["msg"]}
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": errors})


@app.exception_handler(SQLAlchemyError)
async def database_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Database error"})


@app.get("/")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
