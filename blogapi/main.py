import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from blogapi.config import settings
from blogapi.database import create_tables
from blogapi.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("%s %s started", settings.APP_NAME, settings.VERSION)
    yield


async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Users, posts, comments and messages with session log-in",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_error)

    from blogapi.api import auth, users, messages

    app.include_router(auth.router, tags=["auth"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(messages.router, prefix="/messages", tags=["messages"])

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("blogapi.main:app", host=settings.HOST, port=settings.PORT)
