# prep_admin/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from prep_admin import init_db
from prep_admin.api.v1.endpoints import (
    activation_codes,
    ai,
    announcements,
    app_settings,
    exams,
    health,
    news,
    questions,
    storage,
    subjects,
    tags,
    users,
)
from prep_admin.core.config import settings
from prep_admin.core.errors import NotImplementedBackendError
from prep_admin.core.logging_config import setup_logging
from prep_admin.services.ai_flows import AIFlowError
from prep_admin.services.question_service import InvalidQuestionError
from prep_admin.services.storage_service import StorageError

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info(f"{settings.PROJECT_NAME} started")


@app.exception_handler(NotImplementedBackendError)
def not_implemented_handler(request: Request, exc: NotImplementedBackendError):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_501_NOT_IMPLEMENTED, content={"detail": str(exc)})


@app.exception_handler(AIFlowError)
def ai_flow_error_handler(request: Request, exc: AIFlowError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "AI service request failed"},
    )


@app.exception_handler(InvalidQuestionError)
def invalid_question_handler(request: Request, exc: InvalidQuestionError):
    errors = [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(errors)},
    )


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(SQLAlchemyError)
def database_error_handler(request: Request, exc: SQLAlchemyError):
    # already logged with details by the service layer
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database operation failed"},
    )


API_PREFIX = "/api/v1"

for router in (
    subjects.router,
    questions.router,
    tags.router,
    exams.router,
    news.router,
    announcements.router,
    activation_codes.router,
    users.router,
    app_settings.router,
    ai.router,
    storage.router,
    health.router,
):
    app.include_router(router, prefix=API_PREFIX)
