"""FastAPI application entry point."""
from fastapi import FastAPI

from feedwriter import __version__
from feedwriter.api.routes import feeds

app = FastAPI(
    title="FeedWriter API",
    description="API for rendering and validating RSS 2.0 feed documents",
    version=__version__,
)

# Register routers
app.include_router(feeds.router)


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
