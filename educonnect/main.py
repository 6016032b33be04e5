import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from educonnect.core import config
from educonnect.database import Base, engine
from educonnect.models import course_class, feedback, payment, teacher_request, user  # noqa: F401
from educonnect.routes import (
    auth_routes,
    class_routes,
    feedback_routes,
    payment_routes,
    prompt_routes,
    teacher_request_routes,
    user_routes,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

config.validate_runtime_config()

app = FastAPI(title='EduConnect API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'],
    allow_headers=['Content-Type', 'Authorization'],
)


@app.middleware('http')
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.exception('%s %s failed after %.1fms', request.method, request.url.path, elapsed_ms)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info('%s %s %s %.1fms', request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Hello from EduConnect Server.'}


app.include_router(auth_routes.router)
app.include_router(user_routes.router)
app.include_router(class_routes.router)
app.include_router(teacher_request_routes.router)
app.include_router(payment_routes.router)
app.include_router(feedback_routes.router)
app.include_router(prompt_routes.router)
