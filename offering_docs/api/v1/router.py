"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from offering_docs.api.v1.dependencies.
"""

from fastapi import APIRouter

from offering_docs.api.v1.endpoints import documents, health, offerings, storage

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(offerings.router, prefix="/offerings", tags=["offerings"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
