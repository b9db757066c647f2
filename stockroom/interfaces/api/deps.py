"""FastAPI dependency — tenant resolution gate.

Every `/api/*` router depends on `get_tenant_id`. The resolver is pluggable:
`HeaderTenantResolver` trusts the tenant header sent by the single-page client,
`BearerTokenTenantResolver` verifies a signed JWT and reads the tenant from a claim.
Handlers receive the tenant id explicitly and never read it from global state.
"""

from typing import Optional, Protocol

from fastapi import Depends, Request
from jose import JWTError, jwt

from stockroom.config import Settings, get_settings
from stockroom.core.exceptions import AuthenticationMissingError


class TenantResolver(Protocol):
    def resolve(self, request: Request) -> str:
        """Return the tenant id or raise AuthenticationMissingError."""
        ...


class HeaderTenantResolver:
    """Trusts the header value as-is. Only as safe as the transport delivering it."""

    def __init__(self, header_name: str = "X-User-Id"):
        self.header_name = header_name

    def resolve(self, request: Request) -> str:
        tenant_id = request.headers.get(self.header_name)
        if not tenant_id:
            raise AuthenticationMissingError("Unauthorized: User ID is required")
        return tenant_id


class BearerTokenTenantResolver:
    """Verifies `Authorization: Bearer <jwt>` and takes the tenant from a claim."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", claim: str = "sub"):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.claim = claim

    def resolve(self, request: Request) -> str:
        auth = request.headers.get("Authorization") or ""
        scheme, _, token = auth.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise AuthenticationMissingError("Unauthorized: bearer token is required")

        try:
            payload = jwt.decode(token.strip(), self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise AuthenticationMissingError("Unauthorized: invalid or expired token")

        tenant_id: Optional[str] = payload.get(self.claim)
        if not tenant_id:
            raise AuthenticationMissingError(f"Unauthorized: token has no '{self.claim}' claim")
        return str(tenant_id)


def build_tenant_resolver(settings: Settings) -> TenantResolver:
    if settings.AUTH_MODE == "jwt":
        return BearerTokenTenantResolver(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            claim=settings.JWT_TENANT_CLAIM,
        )
    return HeaderTenantResolver(settings.TENANT_HEADER)


def get_tenant_resolver(settings: Settings = Depends(get_settings)) -> TenantResolver:
    return build_tenant_resolver(settings)


def get_tenant_id(
    request: Request,
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> str:
    """Extract the tenant id before any handler or data access runs."""
    tenant_id = resolver.resolve(request)
    request.state.tenant_id = tenant_id
    return tenant_id
