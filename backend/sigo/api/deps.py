from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sigo.core.config import settings
from sigo.core.database import get_db


@dataclass(frozen=True)
class Actor:
    """Who performs a write – recorded in the audit trail."""
    user: str
    ip: str | None


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


async def get_actor(
    request: Request,
    x_user: Annotated[str | None, Header()] = None,
) -> Actor:
    # Authentication happens upstream (reverse proxy / SSO); the user name is passed through
    return Actor(user=x_user or settings.DEFAULT_USER, ip=_client_ip(request))


def pagination(page: int = 1, limit: int = settings.PAGE_SIZE_DEFAULT) -> tuple[int, int]:
    page = max(page, 1)
    limit = min(max(limit, 1), settings.PAGE_SIZE_MAX)
    return page, limit


DB = Annotated[AsyncSession, Depends(get_db)]
CurrentActor = Annotated[Actor, Depends(get_actor)]
Pagination = Annotated[tuple[int, int], Depends(pagination)]
