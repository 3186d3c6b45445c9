from fastapi import APIRouter, Depends, Request

from dzhehuti.core.config import settings
from dzhehuti.core.deps import get_reference_store, resolve_strict
from dzhehuti.core.rate_limit import limiter
from dzhehuti.schemas.user_filter import SearchUsersRequest, SearchUsersResponse
from dzhehuti.services.respondent_filter import RespondentFilter
from dzhehuti.services.storage import ReferenceStore

router = APIRouter(tags=["user filter"])


@router.post("/searchUsers", response_model=SearchUsersResponse)
@limiter.limit(settings.QUOTE_RATE_LIMIT)
async def search_users(
    request: Request,
    payload: SearchUsersRequest,
    store: ReferenceStore = Depends(get_reference_store),
) -> SearchUsersResponse:
    """Count respondents matching every supplied criterion."""
    respondent_filter = RespondentFilter(store, strict=resolve_strict(payload.strict))
    found = await respondent_filter.search(payload.to_criteria())
    return SearchUsersResponse(totalUsers=found.total, warnings=list(found.warnings))
