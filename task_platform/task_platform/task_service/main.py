from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import close_db, init_db
from .errors import register_exception_handlers
from .routes import auth, health, owned_tasks, profile, protected, tasks
from .utils.request_logging import configure_logging, log_requests

configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Connect to MongoDB on startup and close the client on shutdown"""
    await init_db()
    yield
    await close_db()


app = FastAPI(
    title="Task Platform",
    description="Task management API with JWT authentication and role-based access",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

register_exception_handlers(app)

app.include_router(profile.router)
app.include_router(tasks.router)
app.include_router(auth.router)
app.include_router(owned_tasks.router)
app.include_router(protected.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """API information and endpoint listing"""
    return {
        "message": "Task Platform API",
        "version": API_VERSION,
        "endpoints": {
            "profile": [
                "GET /api/profile",
                "GET /api/profile/role",
                "GET /api/profile/skills",
            ],
            "tasks": [
                "GET /api/tasks",
                "GET /api/tasks/{id}",
                "POST /api/tasks",
                "PUT /api/tasks/{id}",
                "PATCH /api/tasks/{id}",
                "DELETE /api/tasks/{id}",
                "GET /api/tasks/filter/pending",
                "GET /api/tasks/filter/completed",
            ],
            "auth": [
                "POST /auth/register",
                "POST /auth/login",
                "GET /auth/me (protected)",
            ],
            "my_tasks": [
                "GET /tasks (protected)",
                "POST /tasks (protected)",
                "PATCH /tasks/{id} (owner)",
                "DELETE /tasks/{id} (owner or admin)",
            ],
            "protected": [
                "GET /profile (any user)",
                "GET /admin (admin)",
                "GET /moderator (admin, moderator)",
                "GET /admin/users (admin)",
                "DELETE /users/{id} (admin)",
            ],
        },
    }


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
