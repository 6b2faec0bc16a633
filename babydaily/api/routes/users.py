"""User profile lookup."""

from fastapi import APIRouter, HTTPException

from babydaily.api.dependencies import DbDep
from babydaily.models.user import UserSession
from babydaily.services import auth_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserSession)
async def get_user(user_id: int, db: DbDep) -> UserSession:
    """Return who a user is, for the profile screen."""
    user = await auth_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user
