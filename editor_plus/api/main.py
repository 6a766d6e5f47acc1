"""
Block Editor+ — FastAPI app
Start: uvicorn editor_plus.api.main:app --reload --port 8001
"""
import logging, os

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse

from .. import __version__
from .responses import fail
from .routes import admin, patterns, records, render, settings

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(),
                    format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Block Editor+ — admin API", version=__version__, docs_url="/docs")


@app.exception_handler(HTTPException)
async def envelope_http_errors(request: Request, exc: HTTPException):
    return JSONResponse(fail(exc.status_code, str(exc.detail)), status_code=exc.status_code,
                        headers=getattr(exc, "headers", None))


@app.on_event("startup")
def startup():
    from .. import database
    if database.ENGINE is None:
        database.init_db()
    log.info("Block Editor+ %s ready", __version__)


@app.get("/health")
def health():
    return {"status": "ok", "service": "editor_plus", "version": __version__}


app.include_router(patterns.router)
for r in records.routers:
    app.include_router(r)
app.include_router(settings.router)
app.include_router(render.router)
app.include_router(admin.router)
