import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session

from .db import fetch_all
from .errors import DatastoreError, DatastoreTimeout, SEARCH_ERROR
from .models import Provider

logger = logging.getLogger(__name__)

MAX_RESULTS = 50

# Checked in this order; the first specialty with a non-empty result wins.
SPECIALTY_KEYWORDS = {
    "auto": ("auto", "carro", "veículo", "veiculo"),
    "vida": ("vida",),
    "residencial": ("residencial", "casa", "residencia"),
    "empresarial": ("empresarial", "empresa", "comercial"),
    "saude": ("saúde", "saude", "medico", "médico"),
    "viagem": ("viagem", "travel"),
}


@dataclass
class SearchResult:
    data: List[Provider] = field(default_factory=list)

    @property
    def count(self) -> int:
        # size of the returned page, not a total of matching rows
        return len(self.data)


def _ordered(stmt: Select) -> Select:
    return stmt.order_by(Provider.name.asc()).limit(MAX_RESULTS)


def build_search_query(term: str, specialty: Optional[str], neighborhood: Optional[str]) -> Select:
    stmt = select(Provider)
    if term:
        stmt = stmt.where(
            or_(
                Provider.name.icontains(term, autoescape=True),
                Provider.email.icontains(term, autoescape=True),
                Provider.address.icontains(term, autoescape=True),
                Provider.neighborhood.icontains(term, autoescape=True),
            )
        )
    if specialty:
        stmt = stmt.where(Provider.specialties.contains([specialty]))
    if neighborhood:
        stmt = stmt.where(Provider.neighborhood == neighborhood)
    return _ordered(stmt)


def build_specialty_query(specialty: str) -> Select:
    return _ordered(select(Provider).where(Provider.specialties.contains([specialty])))


def implied_specialties(term: str) -> List[str]:
    lowered = term.lower()
    return [
        spec
        for spec, keywords in SPECIALTY_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    ]


def _reclassify(db: Session, term: str) -> Optional[List[Provider]]:
    for spec in implied_specialties(term):
        try:
            rows = fetch_all(db, build_specialty_query(spec), SEARCH_ERROR)
        except DatastoreTimeout:
            # a timeout ends the whole search
            raise
        except DatastoreError:
            logger.warning("specialty fallback query for %r failed", spec, exc_info=True)
            continue
        if rows:
            logger.debug("term %r reclassified as specialty %r", term, spec)
            return rows
    return None


def search_providers(
    db: Session,
    term: str,
    specialty: Optional[str],
    neighborhood: Optional[str],
) -> SearchResult:
    """Run a directory search over already-sanitized inputs.

    When a term is given without an explicit specialty, a keyword match on
    the term (``"carro"`` -> ``auto``) replaces the text matches with the
    specialty's full listing, provided that listing is non-empty. This is a
    relevance heuristic: a valid text match can be dropped in favor of the
    broader category.
    """
    if not term and not specialty and not neighborhood:
        return SearchResult()

    rows = fetch_all(db, build_search_query(term, specialty, neighborhood), SEARCH_ERROR)

    if term and not specialty:
        replacement = _reclassify(db, term)
        if replacement is not None:
            rows = replacement

    return SearchResult(data=rows)
