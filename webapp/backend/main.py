"""FastAPI application for the DayPlan assignment engine."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayplan import __version__
from routers import assignments

app = FastAPI(
    title="DayPlan",
    description="Daily task assignment by skill, capacity and priority",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins in development
    allow_credentials=False,  # Must be False when allow_origins is "*"
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assignments.router, prefix="/api/assignments", tags=["assignments"])


@app.get("/")
def root():
    return {"message": "DayPlan assignment API", "docs": "/docs"}


@app.get("/api/health")
def health():
    return {"status": "ok", "version": __version__}
