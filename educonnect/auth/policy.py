"""Composable authorization checks.

A policy is an ordered list of checks. Each check looks at the verified token
claims (plus the store and path parameters when it needs them) and returns a
``Decision``. The first denial wins; a policy with no denials allows the
request.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from educonnect.auth.dependencies import get_token_claims
from educonnect.database import get_db, store_errors
from educonnect.models.user import ROLE_ADMIN, User
from educonnect.store import Collection


@dataclass(frozen=True)
class Decision:
    allowed: bool
    status_code: int = status.HTTP_200_OK
    reason: str = ''


ALLOW = Decision(allowed=True)


@dataclass
class AuthContext:
    claims: dict
    db: Session | None = None
    path_params: dict[str, Any] = field(default_factory=dict)

    @property
    def email(self) -> str:
        return self.claims['sub']


Check = Callable[[AuthContext], Decision]


def admin_only(context: AuthContext) -> Decision:
    with store_errors(context.db):
        user = Collection(context.db, User).find_one(email=context.email)
    if user is None or user.role != ROLE_ADMIN:
        return Decision(allowed=False, status_code=status.HTTP_403_FORBIDDEN, reason='forbidden access')
    return ALLOW


def self_only(param: str = 'email') -> Check:
    def check(context: AuthContext) -> Decision:
        if context.path_params.get(param) != context.email:
            return Decision(allowed=False, status_code=status.HTTP_403_FORBIDDEN, reason='unauthorized access')
        return ALLOW

    check.__name__ = f'self_only_{param}'
    return check


def evaluate(checks: list[Check], context: AuthContext) -> Decision:
    for check in checks:
        decision = check(context)
        if not decision.allowed:
            return decision
    return ALLOW


def require(*checks: Check) -> Callable[..., dict]:
    """Build a FastAPI dependency that verifies the token, then runs ``checks``."""
    def dependency(
        request: Request,
        claims: dict = Depends(get_token_claims),
        db: Session = Depends(get_db),
    ) -> dict:
        context = AuthContext(claims=claims, db=db, path_params=dict(request.path_params))
        decision = evaluate(list(checks), context)
        if not decision.allowed:
            raise HTTPException(status_code=decision.status_code, detail=decision.reason)
        return claims

    return dependency
