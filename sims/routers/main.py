from fastapi import APIRouter

from .chat import chat_router
from .health import health_router
from .students import students_router

main_router = APIRouter()

main_router.include_router(students_router, prefix="/students", tags=["Students"])
main_router.include_router(chat_router, prefix="/chat", tags=["Chat"])
main_router.include_router(health_router, prefix="/health", tags=["Health Checks"])
