"""Weighted text-match ranking behind the type-ahead suggestion endpoints."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only

from ..core.config import settings
from ..core.images import first_image, process_single_image
from ..core.observability import get_logger, metrics_collector
from ..models.destination import Destination
from ..models.holiday_type import HolidayType
from ..models.package import Package
from ..schemas.suggestion import Suggestion, SuggestionResponse, SuggestionType
from .slug_service import derive_base_slug

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class SearchField:
    """One searchable field and what a hit on it is worth."""

    name: str
    weight: int
    exact_bonus: int = 0


def _field_value(candidate: Any, name: str) -> Any:
    if isinstance(candidate, dict):
        return candidate.get(name)
    return getattr(candidate, name, None)


class RelevanceRanker:
    """
    Additive, case-insensitive substring scorer.

    Every field whose value contains the query adds its weight; a field that
    equals the query exactly also adds its exact-match bonus. Missing and
    non-string values score nothing.
    """

    def __init__(self, fields: Sequence[SearchField]):
        self.fields = tuple(fields)

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    def score(self, candidate: Any, query: str) -> int:
        needle = query.strip().lower()
        score = 0
        for field in self.fields:
            value = _field_value(candidate, field.name)
            if not isinstance(value, str):
                continue
            haystack = value.lower()
            if needle in haystack:
                score += field.weight
                if field.exact_bonus and haystack.strip() == needle:
                    score += field.exact_bonus
        return score

    def safe_score(self, candidate: Any, query: str) -> int:
        """Score one candidate; a failure scores 0 instead of aborting the batch."""
        try:
            return self.score(candidate, query)
        except Exception as e:
            logger.warning(
                "Failed to score candidate",
                candidate_id=str(_field_value(candidate, "id")),
                error=str(e),
            )
            return 0

    def rank(self, candidates: Iterable[Any], query: str, limit: Optional[int] = None) -> list[tuple[Any, int]]:
        """
        Score and order candidates.

        Sorting is stable, so equal scores keep their fetch order.

        Returns:
            ``(candidate, score)`` pairs, best first, at most ``limit`` long
        """
        scored = [(candidate, self.safe_score(candidate, query)) for candidate in candidates]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored if limit is None else scored[:limit]


# Weight profiles per entity type
PACKAGE_RANKER = RelevanceRanker([
    SearchField("title", 10, exact_bonus=5),
    SearchField("destination", 8),
    SearchField("description", 3),
])

HOLIDAY_TYPE_RANKER = RelevanceRanker([
    SearchField("title", 10, exact_bonus=5),
    SearchField("description", 3),
    SearchField("short_description", 2),
])

DESTINATION_RANKER = RelevanceRanker([
    SearchField("name", 10, exact_bonus=5),
    SearchField("location", 8),
    SearchField("country", 5),
    SearchField("state", 5),
    SearchField("short_description", 3),
])

LOCATION_AWARE_PACKAGE_RANKER = RelevanceRanker([
    SearchField("title", 20, exact_bonus=10),
    SearchField("destination", 15),
    SearchField("country", 12),
    SearchField("state", 10),
    SearchField("description", 5),
])


def normalize_query(q: Optional[str]) -> Optional[str]:
    """Trimmed query, or None when it is too short to search for."""
    if not q:
        return None
    query = q.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return None
    return query


class SuggestionService:
    """Service answering type-ahead queries for the catalog collections."""

    def __init__(self, db: AsyncSession, base_url: str = ""):
        self.db = db
        self.base_url = base_url

    async def _fetch_candidates(
        self,
        model: Any,
        ranker: RelevanceRanker,
        query: str,
        required: Sequence[str],
        projection: Sequence[str],
        limit: int,
    ) -> list[Any]:
        """Active records where any ranked field contains the query and required fields are set."""
        matches = or_(*(
            getattr(model, name).icontains(query, autoescape=True)
            for name in ranker.field_names
        ))
        present = [
            and_(getattr(model, name).is_not(None), getattr(model, name) != "")
            for name in required
        ]

        stmt = (
            select(model)
            .options(load_only(*(getattr(model, name) for name in projection)))
            .where(model.is_active.is_(True), matches, *present)
            .order_by(model.created_at.desc(), model.id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def _guarded(
        self,
        source: str,
        q: Optional[str],
        lookup: Callable[[str], Awaitable[list[Suggestion]]],
    ) -> SuggestionResponse:
        """Run a lookup, degrading to an empty response instead of raising."""
        query = normalize_query(q)
        if query is None:
            metrics_collector.record_suggest(source, "short_query")
            return SuggestionResponse(suggestions=[])

        log = logger.with_context(source=source, query=query)
        try:
            suggestions = await lookup(query)
        except Exception as e:
            log.error("Suggestion lookup failed", error=str(e), exc_info=True)
            metrics_collector.record_suggest(source, "error")
            return SuggestionResponse(
                suggestions=[],
                error=str(e) if settings.debug else "Search temporarily unavailable",
            )

        log.debug("Suggestions served", count=len(suggestions))
        metrics_collector.record_suggest(source, "ok", len(suggestions))
        return SuggestionResponse(suggestions=suggestions)

    # Projections

    def _package_suggestion(self, package: Package) -> Suggestion:
        return Suggestion(
            id=str(package.id),
            type=SuggestionType.PACKAGE,
            title=package.title or "Untitled Package",
            destination=package.destination or "Unknown Destination",
            price=package.price or 0,
            duration=package.duration or "N/A",
            category=package.category,
            slug=package.slug or "",
            image=first_image(package.images, self.base_url),
        )

    def _destination_suggestion(self, destination: Destination) -> Suggestion:
        return Suggestion(
            id=str(destination.id),
            type=SuggestionType.DESTINATION,
            title=destination.name,
            destination=destination.location,
            price=destination.price,
            duration=destination.duration,
            category=destination.category,
            slug=destination.slug or "",
            image=process_single_image(destination.image, self.base_url) or None,
        )

    def _holiday_type_suggestion(self, holiday_type: HolidayType) -> Suggestion:
        return Suggestion(
            id=str(holiday_type.id),
            type=SuggestionType.HOLIDAY_TYPE,
            title=holiday_type.title,
            destination=holiday_type.state or holiday_type.country,
            price=holiday_type.price,
            duration=holiday_type.duration,
            category=holiday_type.category,
            slug=holiday_type.slug or "",
            image=process_single_image(holiday_type.image, self.base_url) or None,
        )

    # Lookups

    async def _rank_packages(self, query: str) -> list[Suggestion]:
        candidates = await self._fetch_candidates(
            Package, PACKAGE_RANKER, query,
            required=["title", "destination"],
            projection=["title", "description", "destination", "price", "duration",
                        "category", "slug", "images", "created_at"],
            limit=settings.suggest_candidate_limit,
        )
        ranked = PACKAGE_RANKER.rank(candidates, query, settings.suggest_result_limit)
        return [self._package_suggestion(package) for package, _ in ranked]

    async def _rank_destinations(self, query: str) -> list[Suggestion]:
        candidates = await self._fetch_candidates(
            Destination, DESTINATION_RANKER, query,
            required=["name"],
            projection=["name", "short_description", "location", "country", "state", "price",
                        "duration", "category", "slug", "image", "created_at"],
            limit=settings.suggest_candidate_limit,
        )
        ranked = DESTINATION_RANKER.rank(candidates, query, settings.suggest_result_limit)
        return [self._destination_suggestion(destination) for destination, _ in ranked]

    async def _rank_holiday_types(self, query: str) -> list[Suggestion]:
        candidates = await self._fetch_candidates(
            HolidayType, HOLIDAY_TYPE_RANKER, query,
            required=["title"],
            projection=["title", "description", "short_description", "country", "state", "price",
                        "duration", "category", "slug", "image", "created_at"],
            limit=settings.suggest_candidate_limit,
        )
        ranked = HOLIDAY_TYPE_RANKER.rank(candidates, query, settings.suggest_result_limit)
        return [self._holiday_type_suggestion(holiday_type) for holiday_type, _ in ranked]

    async def _location_matches(self, query: str) -> list[Suggestion]:
        """States and countries of active packages and destinations containing the query."""
        limit = settings.location_suggestion_limit
        if limit <= 0:
            return []

        found: dict[str, tuple[str, str]] = {}
        for model in (Package, Destination):
            states = await self.db.execute(
                select(model.state, model.country)
                .where(model.is_active.is_(True), model.state.icontains(query, autoescape=True))
                .distinct()
            )
            for state, country in states:
                if state:
                    found.setdefault(state.lower(), (state, f"{state}, {country}" if country else state))

            countries = await self.db.execute(
                select(model.country)
                .where(model.is_active.is_(True), model.country.icontains(query, autoescape=True))
                .distinct()
            )
            for (country,) in countries:
                if country:
                    found.setdefault(country.lower(), (country, country))

        needle = query.lower()
        ordered = sorted(found.values(), key=lambda pair: (not pair[0].lower().startswith(needle), pair[0].lower()))

        return [
            Suggestion(
                type=SuggestionType.LOCATION,
                title=name,
                destination=label,
                slug=derive_base_slug(name),
            )
            for name, label in ordered[:limit]
        ]

    async def _rank_combined(self, query: str) -> list[Suggestion]:
        locations = await self._location_matches(query)
        remaining = settings.combined_result_limit - len(locations)
        if remaining <= 0:
            return locations[:settings.combined_result_limit]

        candidates = await self._fetch_candidates(
            Package, LOCATION_AWARE_PACKAGE_RANKER, query,
            required=["title"],
            projection=["title", "description", "destination", "country", "state", "price",
                        "duration", "category", "slug", "images", "created_at"],
            limit=settings.combined_candidate_limit,
        )
        ranked = LOCATION_AWARE_PACKAGE_RANKER.rank(candidates, query, remaining)
        return locations + [self._package_suggestion(package) for package, _ in ranked]

    # Public API

    async def suggest_packages(self, q: Optional[str]) -> SuggestionResponse:
        """Top package matches for a type-ahead query."""
        return await self._guarded("packages", q, self._rank_packages)

    async def suggest_destinations(self, q: Optional[str]) -> SuggestionResponse:
        """Top destination matches for a type-ahead query."""
        return await self._guarded("destinations", q, self._rank_destinations)

    async def suggest_holiday_types(self, q: Optional[str]) -> SuggestionResponse:
        """Top holiday type matches for a type-ahead query."""
        return await self._guarded("holiday_types", q, self._rank_holiday_types)

    async def suggest_combined(self, q: Optional[str]) -> SuggestionResponse:
        """Matching locations followed by location-aware package matches."""
        return await self._guarded("combined", q, self._rank_combined)
