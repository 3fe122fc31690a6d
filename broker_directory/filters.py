from sqlalchemy import select
from sqlalchemy.orm import Session

from .cache import cache_get_json, cache_set_json
from .config import FILTERS_CACHE_TTL_SECONDS
from .db import fetch_all
from .errors import FILTERS_ERROR
from .models import SPECIALTIES, Provider
from .schemas import FilterOptions

CACHE_KEY = "filters:options"


def collect_specialties(rows) -> list[str]:
    # first-seen order; codes outside the enumeration never leak out
    seen: dict[str, None] = {}
    for specialties in rows:
        for code in specialties or ():
            if code in SPECIALTIES:
                seen.setdefault(code, None)
    return list(seen)


def collect_neighborhoods(rows) -> list[str]:
    return sorted({n for n in rows if n})


def get_filter_options(db: Session, cache=None) -> FilterOptions:
    cached = cache_get_json(cache, CACHE_KEY)
    if cached:
        return FilterOptions(**cached)

    # full scan on purpose: the directory is small
    specialty_rows = fetch_all(
        db, select(Provider.specialties).where(Provider.specialties.is_not(None)), FILTERS_ERROR
    )
    neighborhood_rows = fetch_all(
        db, select(Provider.neighborhood).where(Provider.neighborhood.is_not(None)), FILTERS_ERROR
    )

    options = FilterOptions(
        specialties=collect_specialties(specialty_rows),
        neighborhoods=collect_neighborhoods(neighborhood_rows),
    )
    cache_set_json(cache, CACHE_KEY, options.model_dump(), FILTERS_CACHE_TTL_SECONDS)
    return options
