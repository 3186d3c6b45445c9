from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.config import settings
from dzhehuti.core.db import get_session
from dzhehuti.services.storage import ReferenceStore, SqlReferenceStore


async def get_reference_store(
    session: AsyncSession = Depends(get_session),
) -> ReferenceStore:
    """Request-scoped storage collaborator for the pricing and filter services."""

    return SqlReferenceStore(session)


def resolve_strict(requested: Optional[bool]) -> bool:
    """Per-request ``strict`` flag wins over the configured default."""

    return settings.STRICT_REFERENCE_LOOKUPS if requested is None else requested
