from fastapi import APIRouter

from tool_directory.api.endpoints import auth, tools

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])
