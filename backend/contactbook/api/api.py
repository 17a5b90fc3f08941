"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from contactbook.api.endpoints import auth, admin, contacts, tags

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, tags=["authentication"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
