"""Slug derivation and per-collection uniqueness enforcement.

Slugs are checked against the collection before a write, but the unique
constraint on each table's ``slug`` column is what actually guarantees
uniqueness: two concurrent writers can both see a slug as free, and the
second commit is then rejected by the database. Services translate that
``IntegrityError`` into the same :class:`SlugConflictError` the pre-check
raises.
"""

import logging
import re
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import SlugConflictError
from ..core.observability import metrics_collector

logger = logging.getLogger(__name__)

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def derive_base_slug(title: Optional[str]) -> str:
    """
    Normalize a human-readable title into a URL-safe slug.

    Args:
        title: Source text, e.g. ``"Kerala Backwaters!!"``

    Returns:
        A string matching ``[a-z0-9]+(-[a-z0-9]+)*``, or ``""`` when nothing
        survives normalization (e.g. a title made only of punctuation)
    """
    if not title:
        return ""

    slug = title.lower()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def fallback_slug(prefix: str, entity_id: UUID) -> str:
    """Slug used when a title normalizes to nothing, e.g. ``package-1a2b3c4d``."""
    return f"{derive_base_slug(prefix.replace('_', ' ')) or 'item'}-{entity_id.hex[:8]}"


class SlugAllocator:
    """Allocates slugs that are unique within one model's table."""

    def __init__(self, db: AsyncSession, model: Any, collection: str):
        """
        Args:
            db: Database session
            model: Mapped class with ``id`` and ``slug`` columns
            collection: Name used in logs, metrics and error messages
        """
        self.db = db
        self.model = model
        self.collection = collection

    async def slug_exists(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        """
        Check whether another record already uses a slug.

        Args:
            slug: Candidate slug
            exclude_id: Record to ignore (the one being updated)

        Returns:
            True if the slug is taken
        """
        stmt = select(self.model.id).where(self.model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.first() is not None

    async def ensure_unique_slug(self, base_slug: str, exclude_id: Optional[UUID] = None) -> str:
        """
        Return ``base_slug`` if free, otherwise the first free ``{base_slug}-{n}``.

        The counter starts at 1 and has no upper bound.
        """
        candidate = base_slug
        counter = 1

        while await self.slug_exists(candidate, exclude_id):
            candidate = f"{base_slug}-{counter}"
            counter += 1

        if candidate != base_slug:
            logger.debug(
                "Slug disambiguated",
                extra={
                    "collection": self.collection,
                    "base_slug": base_slug,
                    "slug": candidate,
                    "attempts": counter - 1,
                }
            )

        return candidate

    async def allocate(
        self,
        title: str,
        exclude_id: Optional[UUID] = None,
        fallback: Optional[str] = None,
    ) -> str:
        """
        Derive a slug from a title and make it unique within the collection.

        Args:
            title: Human-readable title
            exclude_id: Record to ignore when checking collisions (updates)
            fallback: Base slug to use when the title normalizes to nothing

        Returns:
            Unique slug

        Raises:
            ValueError: If the title is empty after normalization and no fallback was given
        """
        base_slug = derive_base_slug(title)
        outcome = "base"

        if not base_slug:
            base_slug = derive_base_slug(fallback)
            outcome = "fallback"
            if not base_slug:
                raise ValueError(f"Cannot derive a slug from title {title!r}")
            logger.warning(
                "Title produced an empty slug, using fallback",
                extra={"collection": self.collection, "title": title, "fallback": base_slug}
            )

        slug = await self.ensure_unique_slug(base_slug, exclude_id)
        if outcome == "base" and slug != base_slug:
            outcome = "suffixed"

        metrics_collector.record_slug_allocated(self.collection, outcome)
        return slug

    async def validate_explicit_slug(self, slug: str, exclude_id: Optional[UUID] = None) -> str:
        """
        Accept a caller-supplied slug as-is or reject it.

        Caller slugs are never silently disambiguated.

        Raises:
            SlugConflictError: If another record already uses the slug
        """
        if await self.slug_exists(slug, exclude_id):
            logger.warning(
                "Explicit slug rejected - already in use",
                extra={"collection": self.collection, "slug": slug}
            )
            raise self.conflict(slug)
        return slug

    def conflict(self, slug: str) -> SlugConflictError:
        """Build (and count) the conflict error for a taken slug."""
        metrics_collector.record_slug_conflict(self.collection)
        return SlugConflictError(slug=slug, resource_type=self.collection)

    async def slug_for_create(self, title: str, explicit_slug: Optional[str], entity_id: UUID) -> str:
        """Slug for a new record: validate the caller's, or allocate one from the title."""
        if explicit_slug:
            return await self.validate_explicit_slug(explicit_slug)
        return await self.allocate(title, fallback=fallback_slug(self.collection, entity_id))

    async def slug_for_update(
        self,
        entity: Any,
        new_title: Optional[str],
        explicit_slug: Optional[str],
        title_attr: str = "title",
    ) -> Optional[str]:
        """
        Slug to store on update, or None when the slug must stay as it is.

        An explicit slug is validated against every other record. Otherwise the
        slug is re-derived only when the title actually changes.
        """
        if explicit_slug:
            if explicit_slug == entity.slug:
                return None
            return await self.validate_explicit_slug(explicit_slug, exclude_id=entity.id)

        if new_title is not None and new_title != getattr(entity, title_attr):
            return await self.allocate(
                new_title,
                exclude_id=entity.id,
                fallback=fallback_slug(self.collection, entity.id),
            )

        return None
