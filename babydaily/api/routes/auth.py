"""Account endpoints: register, login, password reset."""

from fastapi import APIRouter, HTTPException, status

from babydaily.api.dependencies import DbDep
from babydaily.models.user import LoginRequest, RegisterRequest, ResetPasswordRequest, UserSession
from babydaily.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserSession, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: DbDep) -> UserSession:
    """Create an account with three security answers."""
    try:
        return await auth_service.register(db, payload.username, payload.password, payload.answers)
    except auth_service.UsernameTaken as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/login", response_model=UserSession)
async def login(payload: LoginRequest, db: DbDep) -> UserSession:
    try:
        return await auth_service.login(db, payload.username, payload.password)
    except auth_service.InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail="Invalid credentials") from exc


@router.post("/reset-password")
async def reset_password(payload: ResetPasswordRequest, db: DbDep) -> dict:
    """Replace the password once the security answers match."""
    try:
        await auth_service.reset_password(
            db, payload.username, payload.answers, payload.new_password
        )
    except auth_service.AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"message": "Password updated successfully"}
