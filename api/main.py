from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legalops.db import create_all
from legalops.settings import API_DEBUG, API_HOST, API_PORT, LOG_LEVEL


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_all()
    yield


app = FastAPI(
    title="LegalOps Compliance API",
    version="0.1.0",
    description="HTTP layer over the annual-report compliance evaluator and business health score.",
    debug=API_DEBUG,
    lifespan=lifespan,
)

# --- CORS ----------------------------------------------------------
# Temporary dev-only setting: allow specific origins for development.
# This should be tightened in production to specific origins.
origins = [
    "http://localhost:3000",    # Next.js dev server default port
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

# --- Include Routers ----------------------------------------------------------
from .health_score import router as health_score_router  # noqa: E402

app.include_router(health_score_router)


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "LegalOps API is alive"}


if __name__ == "__main__":
    import logging

    import uvicorn

    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_DEBUG)
