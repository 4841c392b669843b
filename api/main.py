import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from admin import router as admin_router
from auth import router as auth_router
from contact import router as contact_router
from core import db
from core.config import cors_origins
from core.logging import configure_logging
from core.storage import StorageError
from demographics import router as demographics_router
from external_articles import router as external_articles_router
from faq import router as faq_router
from likes import router as likes_router
from members import router as members_router
from menus import router as menus_router
from news import router as news_router
from questions import router as questions_router
from slides import router as slides_router
from uploads import router as uploads_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

# Allow the SPA dev server (or CORS_ORIGINS) to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("storage_failed path=%s error=%s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": "Blob storage is unavailable."})


app.include_router(auth_router.router, tags=["auth"])
app.include_router(questions_router.router, tags=["questions"])
app.include_router(questions_router.rankings_router, tags=["rankings"])
app.include_router(likes_router.router, tags=["likes"])
app.include_router(members_router.router, tags=["members"])
app.include_router(news_router.router, tags=["news"])
app.include_router(external_articles_router.router, tags=["external-articles"])
app.include_router(slides_router.router, tags=["slides"])
app.include_router(faq_router.router, tags=["faq"])
app.include_router(contact_router.router, tags=["contact"])
app.include_router(admin_router.router, tags=["admin"])
app.include_router(demographics_router.router, tags=["demographics"])
app.include_router(menus_router.router, tags=["menus"])
app.include_router(uploads_router.router, tags=["uploads"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "council-transparency api"}
