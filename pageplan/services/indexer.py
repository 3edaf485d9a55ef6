"""Content index builder.

Turns the loosely shaped front-matter records produced by the content loader
into a sorted list of :class:`ContentItem` objects.  Drafts and non-post
records are dropped silently; incomplete, malformed or duplicated records are
excluded and reported as :class:`BuildWarning` entries so the build can carry
on with a consistent dataset.

The default listing order is ``published_at`` descending, ties broken by
``slug`` ascending.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from pageplan.errors import DUPLICATE_SLUG, INVALID_FIELD, MISSING_REQUIRED_FIELD
from pageplan.models.content import ContentItem, RawRecord
from pageplan.models.plan import BuildWarning
from pageplan.services.normalizer import slugify, strip_html

logger = logging.getLogger(__name__)

_POST_TYPE = "post"

RecordLike = Union[RawRecord, Mapping[str, Any]]


def build_index(records: Sequence[RecordLike]) -> Tuple[List[ContentItem], List[BuildWarning]]:
    """Build the sorted content index from *records*.

    Returns:
        A tuple of:
        - the surviving items, newest first
        - the warnings raised for records that were excluded
    """
    warnings: List[BuildWarning] = []
    candidates: List[Tuple[int, ContentItem]] = []

    for position, record in enumerate(records):
        raw = _coerce_record(record, position, warnings)
        if raw is None or raw.draft:
            continue
        if raw.type is not None and raw.type != _POST_TYPE:
            continue
        item = to_content_item(raw, position, warnings)
        if item is not None:
            candidates.append((position, item))

    items = sort_items(_drop_duplicates(candidates, warnings))
    items = _resolve_recommended(items)

    logger.info(
        "Content index built",
        extra={"records": len(records), "items": len(items), "warnings": len(warnings)},
    )
    return items, warnings


def sort_items(items: Sequence[ContentItem]) -> List[ContentItem]:
    """Sort newest first; identical timestamps fall back to slug order."""
    by_slug = sorted(items, key=lambda item: item.slug)
    return sorted(by_slug, key=lambda item: item.published_at, reverse=True)


def to_content_item(
    raw: RawRecord,
    position: int = 0,
    warnings: Optional[List[BuildWarning]] = None,
) -> Optional[ContentItem]:
    """Validate one record and convert it, or return *None* when it is unusable.

    A missing slug is derived from the title.  Problems are appended to
    *warnings* when a list is given.
    """
    if warnings is None:
        warnings = []

    slug = slugify(raw.slug or raw.title or "")
    if not slug:
        _warn(
            warnings,
            MISSING_REQUIRED_FIELD,
            f"Record #{position} has no slug and no title to derive one from; excluded.",
            [_identify(raw, position)],
        )
        return None

    if raw.published is None:
        _warn(
            warnings,
            MISSING_REQUIRED_FIELD,
            f"Record '{slug}' has no published date; excluded.",
            [_identify(raw, position, slug)],
        )
        return None

    try:
        published_at = parse_timestamp(raw.published)
    except ValueError as exc:
        _warn(
            warnings,
            INVALID_FIELD,
            f"Record '{slug}' has an unparsable published date ({exc}); excluded.",
            [_identify(raw, position, slug)],
        )
        return None

    modified_at: Optional[datetime] = None
    if raw.modified is not None:
        try:
            modified_at = parse_timestamp(raw.modified)
        except ValueError as exc:
            # modified_at is optional; keep the item without it.
            logger.warning("Ignoring unparsable modified date of '%s': %s", slug, exc)

    return ContentItem(
        slug=slug,
        title=(raw.title or "").strip(),
        description=strip_html(raw.description or ""),
        published_at=published_at,
        modified_at=modified_at,
        tags=tuple(dict.fromkeys(raw.tags)),
        draft=raw.draft,
        recommended=tuple(dict.fromkeys(slugify(s) for s in raw.recommended)),
    )


def parse_timestamp(value: Union[datetime, date, str]) -> datetime:
    """Parse a front-matter date into an aware datetime. Naive values are UTC.

    Raises:
        ValueError: *value* is not an ISO-8601 date or datetime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value).strip())

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _coerce_record(
    record: RecordLike, position: int, warnings: List[BuildWarning]
) -> Optional[RawRecord]:
    if isinstance(record, RawRecord):
        return record
    try:
        return RawRecord.model_validate(record)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        ident: Dict[str, Any] = {"position": position}
        if isinstance(record, Mapping):
            ident["slug"] = record.get("slug")
            ident["title"] = record.get("title")
        _warn(
            warnings,
            INVALID_FIELD,
            f"Record #{position} is malformed (fields: {fields}); excluded.",
            [ident],
        )
        return None


def _drop_duplicates(
    candidates: List[Tuple[int, ContentItem]], warnings: List[BuildWarning]
) -> List[ContentItem]:
    """Keep one item per slug: the latest published, then the smallest title,
    then the smallest serialised record, so input order never matters."""
    kept: Dict[str, Tuple[int, ContentItem]] = {}
    for position, item in candidates:
        current = kept.get(item.slug)
        if current is None:
            kept[item.slug] = (position, item)
            continue

        winner, loser = (
            (current, (position, item))
            if _precedence(current[1]) <= _precedence(item)
            else ((position, item), current)
        )
        kept[item.slug] = winner
        _warn(
            warnings,
            DUPLICATE_SLUG,
            f"Slug '{item.slug}' is declared by records #{winner[0]} and #{loser[0]}; "
            f"keeping #{winner[0]} (published {winner[1].published_at.isoformat()}).",
            [_identify_item(*winner), _identify_item(*loser)],
        )
    return [item for _, item in kept.values()]


def _precedence(item: ContentItem) -> Tuple[float, str, str]:
    return (-item.published_at.timestamp(), item.title, item.model_dump_json())


def _resolve_recommended(items: List[ContentItem]) -> List[ContentItem]:
    known = {item.slug for item in items}
    resolved: List[ContentItem] = []
    for item in items:
        dangling = [s for s in item.recommended if s not in known]
        if dangling:
            logger.warning("Post '%s' recommends unknown slugs: %s", item.slug, dangling)
            item = item.model_copy(
                update={"recommended": tuple(s for s in item.recommended if s in known)}
            )
        resolved.append(item)
    return resolved


def _identify(raw: RawRecord, position: int, slug: Optional[str] = None) -> Dict[str, Any]:
    return {
        "position": position,
        "slug": slug or raw.slug,
        "title": raw.title,
        "published": None if raw.published is None else str(raw.published),
    }


def _identify_item(position: int, item: ContentItem) -> Dict[str, Any]:
    return {
        "position": position,
        "slug": item.slug,
        "title": item.title,
        "published": item.published_at.isoformat(),
    }


def _warn(
    warnings: List[BuildWarning],
    kind: str,
    message: str,
    records: List[Dict[str, Any]],
) -> None:
    logger.warning(message)
    warnings.append(BuildWarning(kind=kind, message=message, records=records))
