import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
import config
from deps.db import store
from routers import plinko, rounds, verify, admin

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("plinko")


@asynccontextmanager
async def lifespan(app):
    if config.DB_DSN:
        store.init_schema()
    else:
        logger.warning("DB_DSN not set, rounds cannot be stored")
    yield


app = FastAPI(title="Plinko API (provably fair)", lifespan=lifespan)

# Routers
app.include_router(plinko.router)
app.include_router(rounds.router)
app.include_router(verify.router)
app.include_router(admin.router)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")

@app.get("/healthz")
def healthz():
    return {"ok": True}
