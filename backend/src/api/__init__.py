# API routes module
# Contains all API endpoint definitions

from .contributor_routes import router as contributor_router

__all__ = ["contributor_router"]
