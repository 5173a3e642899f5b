# main.py
# Entry point for the backend service.
# - Initializes FastAPI app
# - Registers the contributor ranking routes
# - Provides root health-check endpoint
# - Run with: uvicorn backend.src.main:app --reload
from fastapi import FastAPI

from .api.contributor_routes import router as contributor_router

app = FastAPI(
    title="Contributor Ranking API",
    description="Ranks repository contributors by impact score",
    version="1.0.0"
)


@app.get("/")
def root():
    return {"status": "healthy", "message": "Backend API is running"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


# Register API routes
app.include_router(contributor_router)
