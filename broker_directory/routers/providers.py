from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import schemas
from ..cache import get_cache
from ..db import get_db
from ..errors import InvalidRequest
from ..filters import get_filter_options
from ..rate_limit import api_limit
from ..sanitize import sanitize_neighborhood, sanitize_search_term, sanitize_specialty
from ..search import search_providers

filters_router = APIRouter(prefix="/api", tags=["filters"])
search_router = APIRouter(prefix="/api", tags=["search"])


@filters_router.get("/filters", response_model=schemas.FilterOptions)
@api_limit
def list_filters(request: Request, db: Session = Depends(get_db), cache=Depends(get_cache)):
    return get_filter_options(db, cache)


async def read_search_request(request: Request) -> schemas.SearchRequest:
    # parsed by hand so the rate limit is checked before the body is touched
    body = await request.body()
    if not body.strip():
        return schemas.SearchRequest()
    try:
        return schemas.SearchRequest.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidRequest() from exc


@search_router.post(
    "/search",
    response_model=schemas.SearchResponse,
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": schemas.SearchRequest.model_json_schema()}}}
    },
)
@api_limit
async def search(request: Request, db: Session = Depends(get_db)):
    payload = await read_search_request(request)
    result = await run_in_threadpool(
        search_providers,
        db,
        sanitize_search_term(payload.search_term),
        sanitize_specialty(payload.specialty),
        sanitize_neighborhood(payload.region),
    )
    return schemas.SearchResponse(
        data=[schemas.ProviderOut.model_validate(p) for p in result.data],
        count=result.count,
    )
