"""Error and warning kinds raised or reported while planning pages."""

from typing import Literal

WarningKind = Literal[
    "missing_required_field", "duplicate_slug", "invalid_field", "unknown_slug"
]

MISSING_REQUIRED_FIELD: WarningKind = "missing_required_field"
DUPLICATE_SLUG: WarningKind = "duplicate_slug"
INVALID_FIELD: WarningKind = "invalid_field"
UNKNOWN_SLUG: WarningKind = "unknown_slug"


class InvalidArgument(ValueError):
    """A pagination call received a page size or page number it cannot serve."""


class RoutePlanError(RuntimeError):
    """The generated routes are inconsistent, e.g. two routes share one path."""
