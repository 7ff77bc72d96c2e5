"""Domain-hint classification for schema fields.

Maps ``(field name, format, pattern)`` to an ordered list of
:class:`DomainHint`.  The first hint is authoritative.

Resolution order:

1. ``format`` lookup (exact, case-sensitive).
2. Substring scan of the lower-cased field name, category by category in
   :data:`NAME_RULES` order; the first keyword hit wins.

This module is the only place keyword tables live.  The data synthesizer and
the matcher compiler both go through :func:`classify` and
:func:`implied_string_format` so an example value and the matcher emitted for
the same field always agree on what the field means.
"""
from __future__ import annotations

from collections.abc import Sequence

from src.shared.models.schema import DomainHint, DomainType

FORMAT_CONFIDENCE = 1.0
NAME_CONFIDENCE = 0.6

FORMAT_RULES: dict[str, tuple[DomainType, str]] = {
    "email": (DomainType.PERSONAL, "email"),
    "uri": (DomainType.TECHNICAL, "url"),
    "url": (DomainType.TECHNICAL, "url"),
    "date": (DomainType.TEMPORAL, "date"),
    "date-time": (DomainType.TEMPORAL, "date-time"),
    "uuid": (DomainType.TECHNICAL, "uuid"),
}

NAME_RULES: tuple[tuple[DomainType, tuple[str, ...]], ...] = (
    (DomainType.FINANCIAL, ("currency", "amount", "price", "account", "company")),
    (DomainType.TEMPORAL, ("timezone", "day", "month")),
    (DomainType.PERSONAL, ("email", "phone", "name", "title", "age")),
    (DomainType.GEOGRAPHIC, ("country", "city", "lat", "lng", "coordinate", "address")),
    (
        DomainType.TECHNICAL,
        ("uuid", "id", "url", "token", "key", "hash", "version", "status", "protocol"),
    ),
    (
        DomainType.BUSINESS,
        ("department", "role", "position", "industry", "company", "organization"),
    ),
)

# specific_type -> string format the field is expected to carry
_HINT_FORMATS: dict[str, str] = {
    "email": "email",
    "phone": "phone",
    "url": "url",
    "uuid": "uuid",
    "id": "uuid",
    "date": "date",
    "date-time": "date-time",
}


def classify(
    field_name: str | None,
    format: str | None = None,
    pattern: str | None = None,
) -> list[DomainHint]:
    """Return the domain hints for a field, most authoritative first.

    *pattern* is accepted for signature symmetry with the schema keywords;
    patterns never produce hints.
    """
    if format and format in FORMAT_RULES:
        domain, specific = FORMAT_RULES[format]
        return [DomainHint(type=domain, specific_type=specific, confidence=FORMAT_CONFIDENCE)]

    lowered = (field_name or "").lower()
    if not lowered:
        return []

    for domain, keywords in NAME_RULES:
        for keyword in keywords:
            if keyword in lowered:
                return [
                    DomainHint(type=domain, specific_type=keyword, confidence=NAME_CONFIDENCE)
                ]
    return []


def implied_string_format(
    field_name: str | None,
    hints: Sequence[DomainHint],
) -> str | None:
    """Return the string format a field's name/hints imply, if any.

    The primary hint decides when it names a formatted value (email, phone,
    url, uuid/id, date, date-time).  Without any hint a couple of name-only
    rules apply: ``website`` means a URL and ``date`` means a date, or a
    date-time when the name also mentions ``time``.
    """
    if hints:
        specific = hints[0].specific_type
        return _HINT_FORMATS.get(specific or "")

    lowered = (field_name or "").lower()
    if "website" in lowered:
        return "url"
    if "date" in lowered:
        return "date-time" if "time" in lowered else "date"
    return None
