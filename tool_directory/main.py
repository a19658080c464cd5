import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tool_directory.api.routes import api_router
from tool_directory.core.config import settings
from tool_directory.core.database import Base, engine
from tool_directory.core.errors import register_exception_handlers
from tool_directory.initial_data import create_initial_data
from tool_directory import models  # noqa: F401  registers tables on Base.metadata

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def read_root():
    return {"message": f"{settings.PROJECT_NAME} backend is running"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
async def on_startup():
    Base.metadata.create_all(bind=engine)
    create_initial_data()
    logger.info("[Startup] Database ready, reference data seeded")


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
