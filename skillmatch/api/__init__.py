"""API routes."""

from fastapi import APIRouter

from skillmatch.api.routes import auth, connections, health, mail, messages, profiles, projects, skills

api_router = APIRouter()

# Include all route modules
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(mail.router, prefix="/api", tags=["Mail"])
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(profiles.router, prefix="/users", tags=["Profiles"])
api_router.include_router(skills.router, tags=["Skills"])
api_router.include_router(projects.router, tags=["Projects"])
api_router.include_router(connections.router, tags=["Connections"])
api_router.include_router(messages.router, tags=["Messages"])
