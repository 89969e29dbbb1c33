"""API v1 router aggregation."""

from fastapi import APIRouter

from coachhub.api.v1.endpoints import (
    auth,
    chats,
    exercises,
    health,
    posts,
    programs,
    users,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(programs.router, prefix="/programs", tags=["programs"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(chats.router, prefix="/chats", tags=["chats"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
