"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import (
    AuthResponse,
    InviteRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenClaims,
)
from ..core.schemas.common import MessageResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import require_admin, require_auth

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new tenant and its admin user."""
    auth_service = AuthService(session)
    return await auth_service.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get a JWT."""
    auth_service = AuthService(session)
    return await auth_service.login(request)


@router.post("/invite", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def invite(
    request: InviteRequest,
    claims: TokenClaims = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Invite a user into the admin's tenant (pro plan)."""
    auth_service = AuthService(session)
    return await auth_service.invite(claims, request)


@router.get("/me", response_model=ProfileResponse)
async def get_current_user(
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Get current user and tenant."""
    auth_service = AuthService(session)
    return await auth_service.get_profile(claims)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Revoke the current access token."""
    auth_service = AuthService(session)
    return await auth_service.logout(claims)
