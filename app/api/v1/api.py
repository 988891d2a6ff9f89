"""
API v1 router
"""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    agents,
    sessions,
    archive,
    dashboard,
    insights,
    library,
    training,
    views,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router)
api_router.include_router(agents.router, tags=["Agents"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
api_router.include_router(archive.router, prefix="/archive", tags=["Archive"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(insights.router, tags=["Insights"])
api_router.include_router(library.router, prefix="/library", tags=["Libraries"])
api_router.include_router(training.router, prefix="/training-examples", tags=["Training"])
api_router.include_router(views.router, prefix="/views", tags=["Views"])


@api_router.get("/")
async def api_root():
    """API v1 root endpoint"""
    return {
        "message": "QC Dashboard API v1",
        "status": "active",
        "version": "1.0.0",
        "endpoints": {
            "auth": "/auth/admin-login",
            "agents": "/agents",
            "sessions": "/sessions",
            "archive": "/archive",
            "dashboard": "/dashboard",
            "insights": "/agents/{agent_id}/insights",
            "library": "/library",
            "training_examples": "/training-examples",
            "views": "/views/{view}",
            "docs": "/docs",
            "health": "/health"
        }
    }
