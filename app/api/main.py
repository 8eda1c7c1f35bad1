# app/api/main.py

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.core.logger import setup_logging
from app.utils.exceptions import DomainError

# Роутеры
from app.api.v1.achievements import router as achievements_router
from app.api.v1.daily_tasks import router as daily_tasks_router
from app.api.v1.study_activity import router as study_activity_router
from app.api.v1.admin import router as admin_router


# Настраиваем логи (файлы + консоль)
setup_logging()
logger = logging.getLogger("api.main")
API_PREFIX = "/api/v1"

app = FastAPI(title="Devotional Core API")

# CORS (уберите или сузьте, если не нужно)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(level, "Domain error at %s: %s (%s)", request.url.path, exc.detail, exc.status_code)
    content = {"detail": exc.detail}
    if exc.payload:
        content["payload"] = exc.payload
    return JSONResponse(status_code=exc.status_code, content=content)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error at %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()},
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception at %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )

@app.get("/health", tags=["health"])
async def health_check():
    return {"status": "ok"}


app.include_router(achievements_router, prefix=API_PREFIX)
app.include_router(daily_tasks_router, prefix=API_PREFIX)
app.include_router(study_activity_router, prefix=API_PREFIX)
app.include_router(admin_router, prefix=API_PREFIX)
