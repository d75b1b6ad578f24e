from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from storefront.domain.exceptions import AccessDeniedError
from storefront.domain.model.identity import Principal, Role, authorize
from storefront.infrastructure.settings import Settings, get_settings

security = HTTPBearer(auto_error=False)


def issue_token(principal: Principal, settings: Settings | None = None) -> str:
    """
    Sign a bearer token for *principal*. Login lives in another service;
    this exists for the CLI and for tests.
    """
    settings = settings or get_settings()
    expires = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRES_MINUTES)
    claims = {
        "sub": principal.user_id,
        "email": principal.email,
        "role": principal.role.value,
        "exp": expires,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings | None = None) -> Principal:
    settings = settings or get_settings()
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    try:
        return Principal(
            user_id=payload["sub"],
            email=payload["email"],
            role=Role(payload.get("role", Role.CUSTOMER.value)),
        )
    except (KeyError, ValueError) as exc:
        raise JWTError(f"Malformed token claims: {exc}") from exc


async def get_current_principal(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Principal:
    """
    Validate the bearer JWT and return the authenticated principal.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if token is None:
        raise credentials_exception

    try:
        return decode_token(token.credentials)
    except JWTError:
        raise credentials_exception


def require_roles(*roles: Role):
    """
    Dependency factory: allow the request through only for *roles*.
    """

    async def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        try:
            return authorize(principal, roles)
        except AccessDeniedError:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient privileges",
            )

    return dependency


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
AdminPrincipal = Annotated[Principal, Depends(require_roles(Role.ADMIN))]
CatalogEditor = Annotated[Principal, Depends(require_roles(Role.ADMIN, Role.BRAND_PARTNER))]
