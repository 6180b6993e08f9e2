"""Authentication service implementation."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...security import hash_password, issue_token, needs_update, revoke_token, verify_password
from ..errors import AuthenticationRequired, Conflict, NotFound, ProSubscriptionRequired
from ..locks import get_tenant_locks
from ..logging import get_logger
from ..models.user import User, UserRole
from ..repositories.tenant_repository import TenantRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    AuthResponse,
    InviteRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TenantResponse,
    TokenClaims,
    UserResponse,
)
from ..schemas.common import MessageResponse
from ..subscription import SubscriptionTier, get_limits
from .interfaces import IAuthService

logger = get_logger("auth_service")


def claims_for(user: User, tier: SubscriptionTier) -> TokenClaims:
    """Claim set for a user, carrying the tenant's current plan."""
    return TokenClaims(
        user_id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
        subscription=tier,
    )


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.tenant_repo = TenantRepository(session)

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """Create a tenant on the free plan and its first user as admin."""
        if await self.user_repo.is_email_taken(request.email):
            raise Conflict("User already exists")

        tenant = await self.tenant_repo.create_tenant(
            {"name": request.tenant_name, "subscription": SubscriptionTier.FREE}
        )
        user = await self.user_repo.create_user(
            {
                "email": request.email,
                "password_hash": hash_password(request.password),
                "role": UserRole.ADMIN,
                "tenant_id": tenant.id,
                "subscription": tenant.subscription,
            }
        )
        await self._commit_new_user()

        logger.info(
            "Tenant registered",
            extra={"tenant_id": str(tenant.id), "user_id": str(user.id)},
        )
        return self._auth_response("User registered successfully", user, tenant.subscription)

    async def login(self, request: LoginRequest) -> AuthResponse:
        """Login user and return a fresh token."""
        user = await self.user_repo.get_by_email(request.email)
        if not user or not verify_password(request.password, user.password_hash):
            logger.warning("Failed login attempt", extra={"email": request.email})
            raise AuthenticationRequired("Invalid credentials")

        tier = await self.tenant_repo.get_subscription(user.tenant_id)
        if tier is None:
            raise NotFound("User or tenant not found")

        if needs_update(user.password_hash):
            user.password_hash = hash_password(request.password)
            await self.session.commit()

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self._auth_response("Login successful", user, tier)

    async def invite(self, claims: TokenClaims, request: InviteRequest) -> AuthResponse:
        """Admin adds a user to their own tenant; the plan must allow invites."""
        async with get_tenant_locks().hold(claims.tenant_id):
            tenant = await self.tenant_repo.get_by_id(claims.tenant_id)
            if not tenant:
                raise NotFound("Tenant not found")

            if not get_limits(tenant.subscription).can_invite_users:
                logger.warning(
                    "Invite refused on current plan",
                    extra={"tenant_id": str(tenant.id), "subscription": tenant.subscription.value},
                )
                raise ProSubscriptionRequired()

            if await self.user_repo.is_email_taken(request.email):
                raise Conflict("User already exists")

            user = await self.user_repo.create_user(
                {
                    "email": request.email,
                    "password_hash": hash_password(request.password),
                    "role": request.role,
                    "tenant_id": tenant.id,
                    "subscription": tenant.subscription,
                }
            )
            await self._commit_new_user()

        logger.info(
            "User invited",
            extra={
                "tenant_id": str(tenant.id),
                "user_id": str(user.id),
                "invited_by": str(claims.user_id),
            },
        )
        return self._auth_response("User invited successfully", user, tenant.subscription)

    async def get_profile(self, claims: TokenClaims) -> ProfileResponse:
        """Current user and tenant, read live from the database."""
        user = await self.user_repo.get_in_tenant(claims.user_id, claims.tenant_id)
        tenant = await self.tenant_repo.get_by_id(claims.tenant_id)
        if not user or not tenant:
            raise NotFound("User or tenant not found")

        return ProfileResponse(
            user=UserResponse.model_validate(user),
            tenant=TenantResponse.model_validate(tenant),
        )

    async def logout(self, claims: TokenClaims) -> MessageResponse:
        """Revoke the presented token for the rest of its lifetime."""
        revoked = await revoke_token(claims)
        if not revoked:
            # without Redis the token simply stays valid until it expires
            logger.warning("Token could not be revoked", extra={"user_id": str(claims.user_id)})
        return MessageResponse(message="Logged out successfully")

    async def _commit_new_user(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            # concurrent registration with the same email
            await self.session.rollback()
            raise Conflict("User already exists")

    def _auth_response(self, message: str, user: User, tier: SubscriptionTier) -> AuthResponse:
        return AuthResponse(
            message=message,
            token=issue_token(claims_for(user, tier)),
            user=UserResponse.model_validate(user),
        )
