"""
Header mapping service.

Decides which target field each spreadsheet column represents. Every
header runs through an ordered cascade of strategies; the first one that
returns a field wins:

1. type_override     "type" always means device_type
2. exact_field       header equals a field key
3. header_pattern    curated header regexes, then sample value shape
4. synonym           synonym table + similarity + context bonus
5. fuzzy             similarity against the field keys themselves
6. french_pattern    French stems and abbreviations
7. content_fallback  unused critical field whose content rule fits

All tables live in config/asset_fields.py.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
import structlog

from config import settings
from config.asset_fields import (
    ASSET_FIELDS,
    FIELD_SYNONYMS,
    HEADER_PATTERNS,
    HEADER_SHAPE_BONUS,
    CONTENT_SHAPE_BONUS,
    FRENCH_HEADER_STEMS,
    FRENCH_STEM_MIN_CONTAINS_LENGTH,
    EXCLUDED_HEADERS,
    NON_MEANINGFUL_HEADER_PATTERNS,
    CRITICAL_FIELDS,
    CONTENT_FALLBACK_RULES,
    LAST_RESORT_CONFIDENCE,
    EXACT_CONFIDENCE,
    HEADER_PATTERN_CONFIDENCE,
    SERIAL_CONTENT_CONFIDENCE,
    MODEL_CONTENT_CONFIDENCE,
    BRAND_CONTENT_CONFIDENCE,
    SYNONYM_EXACT_CONFIDENCE,
    SYNONYM_CONTAINS_CONFIDENCE,
    FRENCH_STEM_CONFIDENCE,
    NUMBER_FIELD_MARKERS,
    NUMBER_HEADER_TOKENS,
    DATE_FIELD_MARKERS,
    DATE_HEADER_MARKERS,
)
from models.asset_import import AssetKind, ColumnMapping, DataType
from parsers.value_classifiers import KNOWN_BRANDS, is_brand, is_model, is_serial_number
from utils.similarity import similarity
from utils.text_utils import header_tokens, normalize_header

logger = structlog.get_logger(__name__)

# Compiled once; tables are static
_HEADER_PATTERNS = {
    target: tuple(re.compile(pattern) for pattern in patterns)
    for target, patterns in HEADER_PATTERNS.items()
}
_HEADER_SHAPE_BONUS = {
    target: (re.compile(pattern), bonus)
    for target, (pattern, bonus) in HEADER_SHAPE_BONUS.items()
}
_CONTENT_SHAPE_BONUS = {
    target: (re.compile(pattern, re.IGNORECASE), bonus)
    for target, (pattern, bonus) in CONTENT_SHAPE_BONUS.items()
}
_NON_MEANINGFUL = tuple(re.compile(pattern) for pattern in NON_MEANINGFUL_HEADER_PATTERNS)
_CONTENT_FALLBACK = {
    kind: {
        target: (re.compile(pattern, re.IGNORECASE if case_insensitive else 0), confidence)
        for target, (pattern, case_insensitive, confidence) in rules.items()
    }
    for kind, rules in CONTENT_FALLBACK_RULES.items()
}
_NORMALIZED_SYNONYMS = {
    target: tuple(dict.fromkeys(normalize_header(alias) for alias in aliases))
    for target, aliases in FIELD_SYNONYMS.items()
}
_SERIAL_PREFIX = re.compile(r"^(sn-|serial|s/n)", re.IGNORECASE)
_BRAND_NAMES = frozenset(brand.lower() for brand in KNOWN_BRANDS)

Match = Optional[tuple[str, float]]


@dataclass
class HeaderContext:
    """Everything a strategy may look at for one header."""
    original_name: str
    normalized: str
    sample: Any
    kind: AssetKind
    fields: tuple[str, ...]
    used_fields: set[str] = field(default_factory=set)

    @property
    def sample_text(self) -> Optional[str]:
        """Sample as trimmed text; integers are spelled out, other values are None."""
        return sample_as_text(self.sample)


def sample_as_text(sample: Any) -> Optional[str]:
    if isinstance(sample, bool):
        return None
    if isinstance(sample, str):
        text = sample.strip()
        return text or None
    if isinstance(sample, int):
        return str(sample)
    if isinstance(sample, float) and sample.is_integer():
        return str(int(sample))
    return None


# ===================
# HELPERS
# ===================

def is_excluded_header(normalized: str) -> bool:
    """Counter, quantity and note columns are never mapped."""
    return normalized in EXCLUDED_HEADERS


def is_meaningful_column(normalized: str, sample: Any) -> bool:
    """
    Whether an unmatched column is still worth reporting.

    False for placeholder/index/total headers and for empty samples.
    """
    if any(pattern.match(normalized) for pattern in _NON_MEANINGFUL):
        return False
    if sample is None:
        return False
    return str(sample).strip() != ""


def determine_data_type(mapped_field: str, normalized_header: str) -> DataType:
    """
    Value type from the matched field name and the header.

    - number: ram/disk/memory/storage/_gb fields, or a gb/mb/go/mo header token
    - date: date/created/updated fields, or a date word in the header
    - text otherwise
    """
    tokens = set(header_tokens(normalized_header))
    if any(marker in mapped_field for marker in NUMBER_FIELD_MARKERS) or tokens & NUMBER_HEADER_TOKENS:
        return DataType.NUMBER
    if any(marker in mapped_field for marker in DATE_FIELD_MARKERS):
        return DataType.DATE
    if any(marker in normalized_header for marker in DATE_HEADER_MARKERS):
        return DataType.DATE
    return DataType.TEXT


def context_boost(normalized: str, target: str, sample: Any, base: float) -> float:
    """
    Raise a synonym score when the header or the sample has the field's shape.

    Header shape adds its bonus, sample shape adds its own; result capped at 1.0.
    """
    confidence = base

    header_bonus = _HEADER_SHAPE_BONUS.get(target)
    if header_bonus and header_bonus[0].match(normalized):
        confidence += header_bonus[1]

    content_bonus = _CONTENT_SHAPE_BONUS.get(target)
    if content_bonus and isinstance(sample, str) and content_bonus[0].match(sample.strip()):
        confidence += content_bonus[1]

    return min(confidence, 1.0)


def _looks_like_serial(text: str) -> bool:
    if _SERIAL_PREFIX.match(text):
        return True
    has_letter = any(char.isalpha() for char in text)
    has_digit = any(char.isdigit() for char in text)
    return has_letter and has_digit and is_serial_number(text)


def _looks_like_brand(text: str) -> bool:
    words = text.lower().split()
    return bool(words) and words[0] in _BRAND_NAMES and is_brand(text)


# ===================
# SERVICE
# ===================

class HeaderMapper:
    """
    Maps source headers to target fields.

    Thresholds default to the configured values and can be overridden
    per instance.
    """

    def __init__(
        self,
        synonym_threshold: Optional[float] = None,
        fuzzy_threshold: Optional[float] = None
    ):
        self.synonym_threshold = (
            settings.synonym_match_threshold if synonym_threshold is None else synonym_threshold
        )
        self.fuzzy_threshold = (
            settings.fuzzy_match_threshold if fuzzy_threshold is None else fuzzy_threshold
        )
        self.strategies: list[tuple[str, Callable[[HeaderContext], Match]]] = [
            ("type_override", self.match_type_override),
            ("exact_field", self.match_exact_field),
            ("header_pattern", self.match_header_pattern),
            ("synonym", self.match_synonym),
            ("fuzzy", self.match_fuzzy),
            ("french_pattern", self.match_french_pattern),
            ("content_fallback", self.match_content_fallback),
        ]

    # ===================
    # STRATEGIES
    # ===================

    def match_type_override(self, ctx: HeaderContext) -> Match:
        if ctx.normalized == "type" and "device_type" in ctx.fields:
            return "device_type", EXACT_CONFIDENCE
        return None

    def match_exact_field(self, ctx: HeaderContext) -> Match:
        if ctx.normalized in ctx.fields:
            return ctx.normalized, EXACT_CONFIDENCE
        return None

    def match_header_pattern(self, ctx: HeaderContext) -> Match:
        """Curated header regexes (0.9), then the sample's content signature."""
        for target, patterns in _HEADER_PATTERNS.items():
            if target not in ctx.fields:
                continue
            if any(pattern.match(ctx.normalized) for pattern in patterns):
                return target, HEADER_PATTERN_CONFIDENCE

        if not isinstance(ctx.sample, str):
            return None
        text = ctx.sample.strip()
        if not text:
            return None

        if "serial_number" in ctx.fields and _looks_like_serial(text):
            return "serial_number", SERIAL_CONTENT_CONFIDENCE
        if "model" in ctx.fields and is_model(text):
            return "model", MODEL_CONTENT_CONFIDENCE
        if "brand" in ctx.fields and _looks_like_brand(text):
            return "brand", BRAND_CONTENT_CONFIDENCE
        return None

    def match_synonym(self, ctx: HeaderContext) -> Match:
        """
        Best (field, score) over every alias of the schema's fields.

        Exact alias scores 0.98, containment at least 0.85, otherwise the
        plain similarity; the context bonus is applied on top. Only a score
        above the synonym threshold is kept.
        """
        best: Match = None
        best_score = 0.0

        for target, aliases in _NORMALIZED_SYNONYMS.items():
            if target not in ctx.fields:
                continue
            for alias in aliases:
                if not alias:
                    continue
                score = similarity(ctx.normalized, alias)
                if ctx.normalized == alias:
                    score = SYNONYM_EXACT_CONFIDENCE
                elif ctx.normalized in alias or alias in ctx.normalized:
                    score = max(score, SYNONYM_CONTAINS_CONFIDENCE)

                score = context_boost(ctx.normalized, target, ctx.sample, score)

                if score > best_score and score > self.synonym_threshold:
                    best, best_score = (target, score), score

        return best

    def match_fuzzy(self, ctx: HeaderContext) -> Match:
        best: Match = None
        best_score = 0.0
        for target in ctx.fields:
            score = similarity(ctx.normalized, target)
            if score > best_score and score > self.fuzzy_threshold:
                best, best_score = (target, score), score
        return best

    def match_french_pattern(self, ctx: HeaderContext) -> Match:
        """
        French stems: whole-header match first, then containment, in table order.

        Falls back to abbreviation rules on the header's tokens.
        """
        header = ctx.normalized

        for stem, target in FRENCH_HEADER_STEMS:
            if header == stem and target in ctx.fields:
                return target, FRENCH_STEM_CONFIDENCE

        for stem, target in FRENCH_HEADER_STEMS:
            if len(stem) < FRENCH_STEM_MIN_CONTAINS_LENGTH:
                continue
            if stem in header and target in ctx.fields:
                return target, FRENCH_STEM_CONFIDENCE

        target = self._match_abbreviation(header)
        if target and target in ctx.fields:
            return target, FRENCH_STEM_CONFIDENCE
        return None

    @staticmethod
    def _match_abbreviation(header: str) -> Optional[str]:
        tokens = header_tokens(header)
        if not tokens:
            return None

        if header in ("n", "no"):
            return "serial_number"
        if any(token in ("n", "no") for token in tokens) and any("serie" in token for token in tokens):
            return "serial_number"
        if any(token.startswith(("mod", "ref")) for token in tokens):
            return "model"
        if any(token.startswith(("marq", "fab")) for token in tokens):
            return "brand"
        if header == "typ":
            return "device_type"
        return None

    def match_content_fallback(self, ctx: HeaderContext) -> Match:
        """
        Give a meaningful leftover column to an unused critical field.

        The first unused critical field whose content rule matches the
        sample wins; otherwise the first unused critical field is taken
        at low confidence.
        """
        if not is_meaningful_column(ctx.normalized, ctx.sample):
            return None

        kind = ctx.kind.value
        unused = [
            target for target in CRITICAL_FIELDS[kind]
            if target in ctx.fields and target not in ctx.used_fields
        ]
        if not unused:
            return None

        text = ctx.sample_text
        if text is not None:
            rules = _CONTENT_FALLBACK[kind]
            for target in unused:
                rule = rules.get(target)
                if rule and rule[0].match(text):
                    return target, rule[1]

        return unused[0], LAST_RESORT_CONFIDENCE

    # ===================
    # MAPPING
    # ===================

    def map_header(self, ctx: HeaderContext) -> Optional[ColumnMapping]:
        """
        Run the cascade for one header.

        Returns:
            ColumnMapping, an unmapped echo for a meaningful column with
            no match, or None when the column should be dropped
        """
        for name, strategy in self.strategies:
            match = strategy(ctx)
            if match is None:
                continue
            target, confidence = match
            logger.debug(
                "column_mapped",
                column=ctx.original_name,
                field=target,
                confidence=round(confidence, 3),
                strategy=name
            )
            return ColumnMapping(
                original_name=ctx.original_name,
                mapped_field=target,
                confidence=confidence,
                data_type=determine_data_type(target, ctx.normalized),
                matched_by=name,
            )

        if is_meaningful_column(ctx.normalized, ctx.sample):
            logger.debug("column_unmapped", column=ctx.original_name)
            return ColumnMapping(
                original_name=ctx.original_name,
                mapped_field=ctx.original_name,
                confidence=0.0,
                data_type=DataType.TEXT,
            )

        logger.debug("column_skipped", column=ctx.original_name)
        return None

    def map_columns(
        self,
        rows: list[dict[str, Any]],
        kind: AssetKind,
        headers: Optional[list[str]] = None
    ) -> list[ColumnMapping]:
        """
        Map every header of an import.

        Args:
            rows: Raw rows; the first one provides the sample values
            kind: Target schema
            headers: Header order (defaults to the keys of the first row)

        Returns:
            One ColumnMapping per kept header, in header order
        """
        kind = AssetKind(kind)
        first_row = rows[0] if rows else {}
        headers = list(first_row.keys()) if headers is None else headers
        fields = ASSET_FIELDS[kind.value]

        mappings: list[ColumnMapping] = []
        used_fields: set[str] = set()

        for original_name in headers:
            name = str(original_name)
            normalized = normalize_header(name)
            if not normalized:
                continue
            if is_excluded_header(normalized):
                logger.debug("column_excluded", column=name, normalized=normalized)
                continue

            ctx = HeaderContext(
                original_name=name,
                normalized=normalized,
                sample=first_row.get(original_name),
                kind=kind,
                fields=fields,
                used_fields=used_fields,
            )
            mapping = self.map_header(ctx)
            if mapping is None:
                continue
            if mapping.matched_by is not None:
                used_fields.add(mapping.mapped_field)
            mappings.append(mapping)

        logger.info(
            "columns_mapped",
            asset_kind=kind.value,
            headers=len(headers),
            mapped=sum(1 for m in mappings if m.matched_by is not None),
            unmapped=sum(1 for m in mappings if m.matched_by is None)
        )

        return mappings


# Singleton instance
_header_mapper: Optional[HeaderMapper] = None


def get_header_mapper() -> HeaderMapper:
    """Get or create HeaderMapper instance."""
    global _header_mapper
    if _header_mapper is None:
        _header_mapper = HeaderMapper()
    return _header_mapper
