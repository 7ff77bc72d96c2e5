"""Example-data synthesis for resolved schemas.

Produces one example value per call for a :class:`ResolvedSchema` under a
:class:`VariationMode`:

``valid``
    Realistic, constraint-respecting data.  Enum values win, then the domain
    generator for the field's primary hint (scalar types only), then plain
    type-driven generation.  A domain value that does not fit the declared
    type or bounds is discarded in favour of type-driven generation.
``invalid``
    Violates the first applicable constraint (see :meth:`DataSynthesizer._invalid`).
    Composite types get a shallow wrong-type value.
``edge``
    The smallest structurally valid instance.
``boundary``
    A random pick among the on-boundary values, falling back to ``edge``.

All randomness comes from the injected :class:`random.Random`; pass a seeded
instance (and ``SynthesisOptions.now``) for reproducible fixtures.
"""
from __future__ import annotations

import base64
import logging
import random
import re
import string
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from src.shared.constants import MAX_SCHEMA_DEPTH
from src.shared.errors import ValidationError
from src.shared.models.schema import (
    DomainHint,
    DomainType,
    ResolvedSchema,
    SchemaConstraints,
    VariationMode,
)
from src.synthesis_engine.services import datasets
from src.synthesis_engine.services.domain_hints import implied_string_format
from src.synthesis_engine.services.schema_resolver import (
    get_boundary_values,
    lower_bound,
    resolve,
    resolve_items,
    resolve_property,
    upper_bound,
)

logger = logging.getLogger(__name__)

_UUID_TEMPLATE = "xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx"
_ALPHANUMERIC = string.ascii_lowercase + string.digits
_SECONDS_PER_YEAR = 365 * 24 * 60 * 60
_OPTIONAL_INCLUSION_PROBABILITY = 0.7

_TRIVIAL_VALUES: dict[str, Any] = {
    "string": "",
    "number": 0,
    "integer": 0,
    "boolean": False,
}


@dataclass(frozen=True)
class SynthesisOptions:
    """Knobs for a synthesis run."""
    include_optional: bool = False
    generate_realistic: bool = True
    max_depth: int = MAX_SCHEMA_DEPTH
    # Reference clock for temporal values; ``None`` means "now".
    now: datetime | None = None


def coerce_mode(mode: VariationMode | str) -> VariationMode:
    """Parse *mode*, raising :class:`ValidationError` for unknown names."""
    try:
        return VariationMode(mode)
    except ValueError as exc:
        raise ValidationError(detail=f"Unsupported variation mode: {mode!r}") from exc


class DataSynthesizer:
    """Generates example values from resolved schemas."""

    def __init__(
        self,
        rng: random.Random | None = None,
        options: SynthesisOptions | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._options = options or SynthesisOptions()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def synthesize(
        self,
        resolved: ResolvedSchema,
        mode: VariationMode | str = VariationMode.VALID,
    ) -> Any:
        """Return one example value for *resolved* under *mode*."""
        variation = coerce_mode(mode)
        if resolved.context.depth > self._options.max_depth:
            logger.debug(
                "Depth limit %d exceeded at %s; emitting trivial value",
                self._options.max_depth,
                ".".join(resolved.context.field_path),
            )
            return _trivial_value(resolved.type)
        if resolved.context.recursive:
            logger.debug(
                "Schema cycle at %s; emitting trivial value",
                ".".join(resolved.context.field_path),
            )
            return _trivial_value(resolved.type)

        if variation is VariationMode.INVALID:
            return self._invalid(resolved.constraints)
        if variation is VariationMode.BOUNDARY:
            return self._boundary(resolved)
        if variation is VariationMode.EDGE:
            return self._edge(resolved)
        return self._valid(resolved)

    # ------------------------------------------------------------------
    # valid
    # ------------------------------------------------------------------

    def _valid(self, resolved: ResolvedSchema) -> Any:
        constraints = resolved.constraints
        if constraints.enum:
            return self._rng.choice(constraints.enum)

        hint = resolved.context.primary_hint
        if (
            self._options.generate_realistic
            and hint is not None
            and constraints.type not in ("object", "array")
        ):
            value = self._domain_value(resolved, hint)
            if _conforms(value, constraints):
                return value
            logger.debug(
                "Domain value for %s does not fit its constraints; using type-driven value",
                resolved.field_name,
            )

        return self._by_type(resolved)

    def _by_type(self, resolved: ResolvedSchema) -> Any:
        kind = resolved.type
        if kind == "string":
            return self._string(resolved)
        if kind in ("number", "integer"):
            return self._number(resolved.constraints)
        if kind == "boolean":
            return self._rng.random() < 0.5
        if kind == "array":
            return self._array(resolved)
        if kind == "object":
            return self._object(resolved, include_optional=self._options.include_optional)
        if kind is not None:
            logger.warning("Unsupported schema type %r at %s", kind, resolved.field_name)
        return resolved.constraints.example

    def _string(self, resolved: ResolvedSchema) -> str:
        constraints = resolved.constraints
        if constraints.enum:
            return self._rng.choice(constraints.enum)
        if isinstance(constraints.example, str):
            return constraints.example

        fmt = constraints.format
        if fmt is None and constraints.pattern is None:
            fmt = implied_string_format(resolved.field_name, resolved.context.domain_hints)
        if fmt:
            value = self._formatted(fmt)
            if _conforms(value, constraints):
                return value
            logger.debug(
                "Formatted %s value for %s does not fit its constraints; using filler",
                fmt,
                resolved.field_name,
            )

        if constraints.max_length is not None:
            max_length = constraints.max_length
        else:
            max_length = max(50, constraints.min_length or 0)
        if constraints.min_length is not None:
            min_length = constraints.min_length
        else:
            min_length = min(1, max_length)
        return self._filler(min_length, max_length)

    def _filler(self, min_length: int, max_length: int) -> str:
        words: list[str] = []
        while len(" ".join(words)) < min_length:
            words.append(self._rng.choice(datasets.LOREM_WORDS))
        return " ".join(words)[:max_length]

    def _number(self, constraints: SchemaConstraints) -> int | float:
        if constraints.enum:
            return self._rng.choice(constraints.enum)
        example = constraints.example
        if isinstance(example, (int, float)) and not isinstance(example, bool):
            return example

        low = lower_bound(constraints)
        high = upper_bound(constraints)
        if low is None:
            low = 0 if high is None or high >= 0 else high - 1000
        if high is None:
            high = max(low, 0) + 1000
        if low > high:
            return low

        value: float = self._rng.uniform(low, high)
        step = constraints.multiple_of
        if step:
            value = round(value / step) * step
            if value < low:
                value += step
            if value > high:
                value -= step
        elif constraints.type != "integer":
            value = min(max(round(value, 2), low), high)

        if constraints.type == "integer":
            rounded = int(round(value))
            if rounded < low:
                rounded += 1
            if rounded > high:
                rounded -= 1
            return rounded
        return value

    def _array(self, resolved: ResolvedSchema) -> list[Any]:
        constraints = resolved.constraints
        min_items = constraints.min_items or 0
        max_items = constraints.max_items if constraints.max_items is not None else max(3, min_items)
        count = self._rng.randint(min_items, max(min_items, max_items))
        return self._array_of(resolved, count, VariationMode.VALID)

    def _array_of(self, resolved: ResolvedSchema, count: int, mode: VariationMode) -> list[Any]:
        if resolved.constraints.items is None:
            return [f"item_{index + 1}" for index in range(count)]
        item_schema = resolve_items(resolved)
        return [self.synthesize(item_schema, mode) for _ in range(count)]

    def _object(self, resolved: ResolvedSchema, *, include_optional: bool) -> dict[str, Any]:
        constraints = resolved.constraints
        result: dict[str, Any] = {}
        for name in constraints.properties or {}:
            is_required = name in constraints.required
            if not is_required:
                if not include_optional:
                    continue
                if self._rng.random() >= _OPTIONAL_INCLUSION_PROBABILITY:
                    continue
            child = resolve_property(resolved, name)
            result[name] = self.synthesize(child, VariationMode.VALID)
        return result

    # ------------------------------------------------------------------
    # Domain generators
    # ------------------------------------------------------------------

    def _domain_value(self, resolved: ResolvedSchema, hint: DomainHint) -> Any:
        name = resolved.field_name.lower()
        constraints = resolved.constraints
        specific = hint.specific_type
        if hint.type is DomainType.FINANCIAL:
            return self._financial(name, specific, constraints)
        if hint.type is DomainType.TEMPORAL:
            return self._temporal(name, specific, constraints)
        if hint.type is DomainType.PERSONAL:
            return self._personal(name, specific, constraints)
        if hint.type is DomainType.GEOGRAPHIC:
            return self._geographic(name, constraints)
        if hint.type is DomainType.TECHNICAL:
            return self._technical(name, specific, constraints)
        return self._business(name)

    def _financial(self, name: str, specific: str | None, constraints: SchemaConstraints) -> Any:
        if specific == "currency" or "currency" in name:
            return self._rng.choice(datasets.CURRENCIES)
        if "amount" in name or "price" in name:
            amount: float = self._rng.choice(datasets.AMOUNTS)
            if constraints.minimum is not None and amount < constraints.minimum:
                amount = constraints.minimum
            if constraints.maximum is not None and amount > constraints.maximum:
                amount = constraints.maximum
            return int(round(amount)) if constraints.type == "integer" else amount
        if "account" in name:
            return self._rng.choice(datasets.ACCOUNT_NUMBERS)
        if "company" in name or "corporation" in name:
            return self._rng.choice(datasets.COMPANIES)
        if constraints.type in ("number", "integer"):
            amount = self._rng.choice(datasets.AMOUNTS)
            return int(round(amount)) if constraints.type == "integer" else amount
        return "FINANCIAL_" + self._token(8).upper()

    def _temporal(self, name: str, specific: str | None, constraints: SchemaConstraints) -> Any:
        if constraints.format == "date-time" or specific == "date-time":
            return self._formatted("date-time")
        if constraints.format == "date" or specific == "date":
            return self._formatted("date")
        if constraints.format == "time" or specific == "time":
            return self._formatted("time")
        if "timezone" in name:
            return self._rng.choice(datasets.TIMEZONES)
        if "day" in name:
            return self._rng.choice(datasets.DAY_NAMES)
        if "month" in name:
            return self._rng.choice(datasets.MONTH_NAMES)
        return _iso_datetime(self._now())

    def _personal(self, name: str, specific: str | None, constraints: SchemaConstraints) -> Any:
        if constraints.format == "email" or specific == "email":
            first = self._rng.choice(datasets.FIRST_NAMES).lower()
            last = self._rng.choice(datasets.LAST_NAMES).lower()
            return f"{first}.{last}@{self._rng.choice(datasets.DOMAINS)}"
        if specific == "phone":
            return self._phone()
        if "first" in name and "name" in name:
            return self._rng.choice(datasets.FIRST_NAMES)
        if "last" in name and "name" in name:
            return self._rng.choice(datasets.LAST_NAMES)
        if "title" in name:
            return self._rng.choice(datasets.TITLES)
        if "name" in name:
            return self._full_name()
        if "age" in name:
            return self._rng.randint(18, 82)
        return self._full_name()

    def _geographic(self, name: str, constraints: SchemaConstraints) -> Any:
        numeric = constraints.type in ("number", "integer")
        if "country" in name:
            if "code" in name:
                return self._rng.choice(datasets.COUNTRY_CODES)
            return self._rng.choice(datasets.COUNTRIES)
        if "city" in name:
            return self._rng.choice(datasets.CITIES)
        if "lat" in name:
            value = round(self._rng.uniform(-90, 90), 6)
            return value if numeric else f"{value:.6f}"
        if "lng" in name or "longitude" in name:
            value = round(self._rng.uniform(-180, 180), 6)
            return value if numeric else f"{value:.6f}"
        if "coordinate" in name:
            lat, lng, _ = self._rng.choice(datasets.COORDINATES)
            return {"lat": lat, "lng": lng}
        if "address" in name:
            number = self._rng.randint(1, 9999)
            return f"{number} {self._rng.choice(datasets.STREET_NAMES)}"
        return self._rng.choice(datasets.CITIES)

    def _technical(self, name: str, specific: str | None, constraints: SchemaConstraints) -> Any:
        if constraints.format == "uuid" or specific in ("uuid", "id"):
            return self._uuid()
        if constraints.format in ("uri", "uri-reference", "url") or specific == "url":
            protocol = "https" if self._rng.random() > 0.2 else "http"
            return f"{protocol}://www.{self._rng.choice(datasets.DOMAINS)}/api/v1/resource"
        if "token" in name or "key" in name:
            return "sk_" + self._token(32)
        if "hash" in name:
            return "".join(self._rng.choice("0123456789abcdef") for _ in range(64))
        if "version" in name:
            major = self._rng.randint(1, 10)
            minor = self._rng.randint(0, 19)
            patch = self._rng.randint(0, 49)
            return f"{major}.{minor}.{patch}"
        if "status" in name and constraints.type in ("number", "integer"):
            return self._rng.choice(datasets.STATUS_CODES)
        if "protocol" in name:
            return self._rng.choice(datasets.PROTOCOLS)
        return self._token(16)

    def _business(self, name: str) -> str:
        if "department" in name:
            return self._rng.choice(datasets.DEPARTMENTS)
        if "role" in name or "position" in name:
            return self._rng.choice(datasets.ROLES)
        if "industry" in name:
            return self._rng.choice(datasets.INDUSTRIES)
        if "company" in name or "organization" in name:
            return self._rng.choice(datasets.COMPANIES)
        return self._rng.choice(datasets.DEPARTMENTS)

    # ------------------------------------------------------------------
    # invalid / edge / boundary
    # ------------------------------------------------------------------

    def _invalid(self, constraints: SchemaConstraints) -> Any:
        """Violate the first applicable constraint for the node's type."""
        kind = constraints.type
        if kind == "string":
            if constraints.min_length and constraints.min_length > 0:
                return ""
            if constraints.max_length is not None:
                return "A" * (constraints.max_length + 10)
            if constraints.format == "email":
                return "invalid-email-format"
            if constraints.format == "uuid":
                return "not-a-uuid"
            if constraints.pattern:
                return "INVALID_PATTERN_MATCH"
            return 123
        if kind in ("number", "integer"):
            if constraints.minimum is not None:
                return constraints.minimum - 1
            if constraints.maximum is not None:
                return constraints.maximum + 1
            return "not_a_number"
        if kind == "boolean":
            return "not_a_boolean"
        if kind == "array":
            if constraints.min_items and constraints.min_items > 0:
                return []
            return "not_an_array"
        if kind == "object":
            return "not_an_object"
        return None

    def _edge(self, resolved: ResolvedSchema) -> Any:
        constraints = resolved.constraints
        kind = constraints.type
        if kind == "string":
            return "A" * (constraints.min_length or 0)
        if kind in ("number", "integer"):
            for bound in (lower_bound(constraints), upper_bound(constraints)):
                if bound is not None:
                    return bound
            return 0
        if kind == "boolean":
            return False
        if kind == "array":
            return self._array_of(resolved, constraints.min_items or 0, VariationMode.VALID)
        if kind == "object":
            return self._object(resolved, include_optional=False)
        return None

    def _boundary(self, resolved: ResolvedSchema) -> Any:
        constraints = resolved.constraints
        candidates = get_boundary_values(constraints)
        if constraints.type == "array":
            candidates = [
                self._array_of(resolved, len(value), VariationMode.VALID)
                if isinstance(value, list) else value
                for value in candidates
            ]
        if candidates:
            return self._rng.choice(candidates)
        return self._edge(resolved)

    # ------------------------------------------------------------------
    # Primitive helpers
    # ------------------------------------------------------------------

    def _formatted(self, fmt: str) -> str:
        rng = self._rng
        if fmt == "date":
            return (self._now() - timedelta(days=rng.randrange(365))).date().isoformat()
        if fmt == "date-time":
            return _iso_datetime(self._now() - timedelta(seconds=rng.uniform(0, _SECONDS_PER_YEAR)))
        if fmt == "time":
            return f"{rng.randrange(24):02d}:{rng.randrange(60):02d}:{rng.randrange(60):02d}"
        if fmt == "email":
            first = rng.choice(datasets.FIRST_NAMES).lower()
            return f"{first}@{rng.choice(datasets.DOMAINS)}"
        if fmt == "uuid":
            return self._uuid()
        if fmt in ("uri", "uri-reference", "url"):
            return f"https://api.{rng.choice(datasets.DOMAINS)}/v1/resource"
        if fmt == "hostname":
            return rng.choice(datasets.DOMAINS)
        if fmt == "ipv4":
            return ".".join(str(rng.randrange(256)) for _ in range(4))
        if fmt == "ipv6":
            return ":".join(f"{rng.randrange(65536):04x}" for _ in range(8))
        if fmt == "password":
            return "SecurePass123!"
        if fmt == "byte":
            return base64.b64encode(b"Hello World").decode("ascii")
        if fmt == "phone":
            return self._phone()
        return "formatted_string_" + self._token(8)

    def _uuid(self) -> str:
        """Random RFC 4122 version-4 UUID drawn from the injected generator."""
        chars: list[str] = []
        for char in _UUID_TEMPLATE:
            if char == "x":
                chars.append(f"{self._rng.randrange(16):x}")
            elif char == "y":
                chars.append(f"{(self._rng.randrange(16) & 0x3) | 0x8:x}")
            else:
                chars.append(char)
        return "".join(chars)

    def _phone(self) -> str:
        template = self._rng.choice(datasets.PHONE_FORMATS)
        return "".join(str(self._rng.randrange(10)) if c == "#" else c for c in template)

    def _full_name(self) -> str:
        return f"{self._rng.choice(datasets.FIRST_NAMES)} {self._rng.choice(datasets.LAST_NAMES)}"

    def _token(self, length: int) -> str:
        return "".join(self._rng.choice(_ALPHANUMERIC) for _ in range(length))

    def _now(self) -> datetime:
        return self._options.now or datetime.now(timezone.utc)


# ------------------------------------------------------------------
# Module-level helpers
# ------------------------------------------------------------------


def synthesize(
    resolved: ResolvedSchema,
    mode: VariationMode | str = VariationMode.VALID,
    *,
    rng: random.Random | None = None,
    options: SynthesisOptions | None = None,
) -> Any:
    """Functional shortcut for :meth:`DataSynthesizer.synthesize`."""
    return DataSynthesizer(rng, options).synthesize(resolved, mode)


def synthesize_from_schema(
    schema: Any,
    field_name: str = "field",
    mode: VariationMode | str = VariationMode.VALID,
    *,
    rng: random.Random | None = None,
    options: SynthesisOptions | None = None,
) -> Any:
    """Resolve a raw schema node as a root field and synthesize from it."""
    return synthesize(resolve(schema, field_name, is_required=True), mode, rng=rng, options=options)


def generate_variations(
    schema: Any,
    field_name: str = "field",
    *,
    rng: random.Random | None = None,
    options: SynthesisOptions | None = None,
) -> dict[str, Any]:
    """Return one example per variation mode for *schema*.

    The ``valid`` example includes optional properties.
    """
    rng = rng or random.Random()
    options = options or SynthesisOptions()
    resolved = resolve(schema, field_name, is_required=True)
    with_optional = SynthesisOptions(
        include_optional=True,
        generate_realistic=options.generate_realistic,
        max_depth=options.max_depth,
        now=options.now,
    )
    return {
        VariationMode.VALID.value: DataSynthesizer(rng, with_optional).synthesize(resolved),
        VariationMode.INVALID.value: DataSynthesizer(rng, options).synthesize(
            resolved, VariationMode.INVALID
        ),
        VariationMode.EDGE.value: DataSynthesizer(rng, options).synthesize(
            resolved, VariationMode.EDGE
        ),
        VariationMode.BOUNDARY.value: DataSynthesizer(rng, options).synthesize(
            resolved, VariationMode.BOUNDARY
        ),
    }


def _trivial_value(kind: str | None) -> Any:
    if kind == "array":
        return []
    if kind == "object":
        return {}
    return _TRIVIAL_VALUES.get(kind or "")


def _iso_datetime(moment: datetime) -> str:
    """``2024-05-01T12:30:45.123Z`` (UTC, millisecond precision)."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _conforms(value: Any, constraints: SchemaConstraints) -> bool:
    """Whether a domain-generated *value* satisfies the declared constraints."""
    kind = constraints.type
    if kind is None:
        return True
    if kind == "string":
        if not isinstance(value, str):
            return False
        if constraints.min_length is not None and len(value) < constraints.min_length:
            return False
        if constraints.max_length is not None and len(value) > constraints.max_length:
            return False
        if constraints.pattern:
            try:
                return re.search(constraints.pattern, value) is not None
            except re.error:
                return False
        return True
    if kind in ("number", "integer"):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if kind == "integer" and not isinstance(value, int):
            return False
        low = lower_bound(constraints)
        high = upper_bound(constraints)
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
        return True
    if kind == "boolean":
        return isinstance(value, bool)
    return True
