import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from aswbxml import __version__
from aswbxml.logging_config import setup_logging
from inspector_service.config import settings
from inspector_service.routers import api_router
from inspector_service.routers.health import router as health_router

logger = logging.getLogger("inspector_service")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Initializing WBXML inspector service")
    yield
    logger.info("WBXML inspector service shutdown complete")


app = FastAPI(title="ActiveSync WBXML Inspector", version=__version__, lifespan=lifespan)

app.include_router(health_router)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"service": "wbxml-inspector", "status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
