"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the study planner backend.
Controllers are intentionally thin: they parse the request, delegate to a
repository that issues a single statement, and return JSON.

Endpoints implemented, for each resource in users, courses, modules,
class_schedules and assessments:
- GET /api/{resource}
- POST /api/{resource}
- PUT /api/{resource}/{id}
- DELETE /api/{resource}/{id}

plus GET /api as a liveness check.

Every store error is reported as HTTP 500 with `{"error": <message>}`.
"""

import json
import logging
import time
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlmodel import Session

from . import repositories
from .config import Settings, settings
from .database import create_db_and_tables, get_session, make_engine
from .schemas import (
    AssessmentCreate, AssessmentRow, AssessmentUpdate,
    ChangesOut, ClassScheduleCreate, ClassScheduleRow, ClassScheduleUpdate,
    CourseCreate, CourseRow, CourseUpdate, CreatedOut, ErrorOut, MessageOut,
    ModuleCreate, ModuleRow, ModuleUpdate,
    UserCreate, UserRow, UserUpdate,
)

logger = logging.getLogger("studyplanner.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

router = APIRouter(prefix="/api", responses={500: {"model": ErrorOut}})


async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/api"):
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
    return response


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    """Report a failed statement as a generic server error.

    The DBAPI message (e.g. `UNIQUE constraint failed: users.email`) is
    passed through verbatim.
    """
    message = str(exc.orig) if isinstance(exc, DBAPIError) else str(exc)
    logger.warning("store_error %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=500, content={"error": message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report an unparseable request body in the same envelope as store errors."""
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=500, content={"error": message})


@router.get("", response_model=MessageOut)
def liveness():
    """Lightweight liveness check."""
    return {"message": "API is running 🚀"}


# users

@router.get("/users", response_model=List[UserRow])
def list_users(db: Session = Depends(get_session)):
    """List all users with the name of the course each is enrolled on."""
    return repositories.UserRepository(db).list()


@router.post("/users", response_model=CreatedOut)
def create_user(payload: UserCreate, db: Session = Depends(get_session)):
    """Create a user. A duplicate email fails with a uniqueness error."""
    return {"id": repositories.UserRepository(db).create(payload)}


@router.put("/users/{user_id}", response_model=ChangesOut)
def update_user(user_id: int, payload: Optional[UserUpdate] = None, db: Session = Depends(get_session)):
    return {"changes": repositories.UserRepository(db).update(user_id, payload or UserUpdate())}


@router.delete("/users/{user_id}", response_model=ChangesOut)
def delete_user(user_id: int, db: Session = Depends(get_session)):
    """Delete a user; courses they created are deleted with them."""
    return {"changes": repositories.UserRepository(db).delete(user_id)}


# courses

@router.get("/courses", response_model=List[CourseRow])
def list_courses(db: Session = Depends(get_session)):
    return repositories.CourseRepository(db).list()


@router.post("/courses", response_model=CreatedOut)
def create_course(payload: CourseCreate, db: Session = Depends(get_session)):
    return {"id": repositories.CourseRepository(db).create(payload)}


@router.put("/courses/{course_id}", response_model=ChangesOut)
def update_course(course_id: int, payload: Optional[CourseUpdate] = None, db: Session = Depends(get_session)):
    return {"changes": repositories.CourseRepository(db).update(course_id, payload or CourseUpdate())}


@router.delete("/courses/{course_id}", response_model=ChangesOut)
def delete_course(course_id: int, db: Session = Depends(get_session)):
    """Delete a course.

    Its modules (and their schedules and assessments) are deleted too;
    enrolled users keep their row with `course_id` set to null.
    """
    return {"changes": repositories.CourseRepository(db).delete(course_id)}


# modules

@router.get("/modules", response_model=List[ModuleRow])
def list_modules(db: Session = Depends(get_session)):
    return repositories.ModuleRepository(db).list()


@router.post("/modules", response_model=CreatedOut)
def create_module(payload: ModuleCreate, db: Session = Depends(get_session)):
    return {"id": repositories.ModuleRepository(db).create(payload)}


@router.put("/modules/{module_id}", response_model=ChangesOut)
def update_module(module_id: int, payload: Optional[ModuleUpdate] = None, db: Session = Depends(get_session)):
    return {"changes": repositories.ModuleRepository(db).update(module_id, payload or ModuleUpdate())}


@router.delete("/modules/{module_id}", response_model=ChangesOut)
def delete_module(module_id: int, db: Session = Depends(get_session)):
    """Delete a module together with its class schedules and assessments."""
    return {"changes": repositories.ModuleRepository(db).delete(module_id)}


# class schedules

@router.get("/class_schedules", response_model=List[ClassScheduleRow])
def list_class_schedules(db: Session = Depends(get_session)):
    return repositories.ClassScheduleRepository(db).list()


@router.post("/class_schedules", response_model=CreatedOut)
def create_class_schedule(payload: ClassScheduleCreate, db: Session = Depends(get_session)):
    return {"id": repositories.ClassScheduleRepository(db).create(payload)}


@router.put("/class_schedules/{schedule_id}", response_model=ChangesOut)
def update_class_schedule(schedule_id: int, payload: Optional[ClassScheduleUpdate] = None, db: Session = Depends(get_session)):
    return {"changes": repositories.ClassScheduleRepository(db).update(schedule_id, payload or ClassScheduleUpdate())}


@router.delete("/class_schedules/{schedule_id}", response_model=ChangesOut)
def delete_class_schedule(schedule_id: int, db: Session = Depends(get_session)):
    return {"changes": repositories.ClassScheduleRepository(db).delete(schedule_id)}


# assessments

@router.get("/assessments", response_model=List[AssessmentRow])
def list_assessments(db: Session = Depends(get_session)):
    return repositories.AssessmentRepository(db).list()


@router.post("/assessments", response_model=CreatedOut)
def create_assessment(payload: AssessmentCreate, db: Session = Depends(get_session)):
    return {"id": repositories.AssessmentRepository(db).create(payload)}


@router.put("/assessments/{assessment_id}", response_model=ChangesOut)
def update_assessment(assessment_id: int, payload: Optional[AssessmentUpdate] = None, db: Session = Depends(get_session)):
    return {"changes": repositories.AssessmentRepository(db).update(assessment_id, payload or AssessmentUpdate())}


@router.delete("/assessments/{assessment_id}", response_model=ChangesOut)
def delete_assessment(assessment_id: int, db: Session = Depends(get_session)):
    return {"changes": repositories.AssessmentRepository(db).delete(assessment_id)}


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around its own database engine.

    The schema is created before the app is returned, so no request is
    served against a missing table. Failure to open the store or create
    the schema raises out of this function.
    """
    app_settings = app_settings or settings
    app = FastAPI(title="Study Planner API")

    engine = make_engine(app_settings.DB_PATH)
    create_db_and_tables(engine)
    app.state.engine = engine

    # Wide-open CORS lets a front-end served from another origin call the API in dev.
    if app_settings.ALLOW_DEV_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(router)

    # Mounted last so the API routes take precedence over the front-end files.
    if app_settings.FRONTEND_DIR.exists():
        app.mount("/", StaticFiles(directory=app_settings.FRONTEND_DIR, html=True), name="frontend")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
