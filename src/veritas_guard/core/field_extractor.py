"""
Schema-driven extraction of labeled fields from free-text model replies.

The remote model is asked to answer in a 'LABEL: value' format, but its output is
untrusted text: labels may be missing, reordered, wrapped in markdown or carry
values outside the requested range. Extraction therefore never raises. Every
field that cannot be found or coerced resolves to the default declared in its
FieldSpec.

A schema is an ordered tuple of FieldSpec. The same schema drives the format
block of the prompt (see prompt_builder) and the parsing of the reply, so a new
request kind only needs a new schema.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .localization import t
from .schemas import Language, RiskLevel, Velocity, Verdict

logger = logging.getLogger(__name__)


class _RawText:
    """Sentinel default: resolve to the entire raw reply, verbatim."""

    def __repr__(self) -> str:
        return "RAW_TEXT"


RAW_TEXT = _RawText()


class FieldType(str, Enum):
    INTEGER = "integer"
    ENUM = "enum"
    TEXT = "text"
    LIST = "list"
    FLAG = "flag"


class Capture(str, Enum):
    """How far a field's value region extends after its label."""

    LINE = "line"  # rest of the line, stopping early at another label
    BLOCK = "block"  # up to the next known label or end of text
    REST = "rest"  # up to end of text; declare last in the schema


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    type: FieldType
    default: Any
    capture: Capture = Capture.LINE
    choices: Tuple[str, ...] = ()
    hint: str = ""


FieldSchema = Tuple[FieldSpec, ...]

_TRUE_TOKENS = {"yes", "true", "да"}
_FALSE_TOKENS = {"no", "false", "нет"}

_LEADING_EMPHASIS = re.compile(r"^[*_]+\s*")
_INTEGER = re.compile(r"-?\d+")
_WORD = re.compile(r"[^\W\d]+")
_NO_VALUE = object()


def _label_pattern(label: str) -> str:
    # Allows '**LABEL:**' and 'LABEL :' but not 'OTHER_LABEL:' for 'LABEL:'.
    return r"(?<![A-Za-z0-9_])" + re.escape(label) + r"[ \t*]*:"


def _compile(label: str) -> "re.Pattern[str]":
    return re.compile(_label_pattern(label), re.IGNORECASE)


def _any_label(schema: FieldSchema) -> "re.Pattern[str]":
    alternatives = "|".join(_label_pattern(spec.label) for spec in schema)
    return re.compile(f"(?:{alternatives})", re.IGNORECASE)


def _find_region(
    text: str, spec: FieldSpec, boundary: "re.Pattern[str]"
) -> Optional[str]:
    """Returns the raw value region for spec, or None if its label is absent."""
    # First occurrence wins, even inside prose such as "my analysis: ...".
    match = _compile(spec.label).search(text)
    if not match:
        return None
    start = match.end()

    if spec.capture == Capture.REST:
        return text[start:]

    next_label = boundary.search(text, start)
    end = next_label.start() if next_label else len(text)

    if spec.capture == Capture.BLOCK:
        return text[start:end]

    # LINE: the value may begin on the following line when the label stands alone.
    while start < end and text[start].isspace():
        start += 1
    newline = text.find("\n", start, end)
    if newline != -1:
        end = newline
    return text[start:end]


def _clean_scalar(value: str) -> str:
    value = _LEADING_EMPHASIS.sub("", value.strip())
    return value.strip().strip("[]\"'`*_").strip()


def _coerce(spec: FieldSpec, region: str) -> Any:
    if spec.type == FieldType.TEXT:
        value = _LEADING_EMPHASIS.sub("", region.strip()).strip()
        return value if value else _NO_VALUE

    value = _clean_scalar(region)

    if spec.type == FieldType.INTEGER:
        match = _INTEGER.search(value)
        if not match:
            return _NO_VALUE
        digits = match.group(0)
        if len(digits.lstrip("-").lstrip("0")) > 3:
            return 0 if digits.startswith("-") else 100
        return max(0, min(100, int(digits)))

    if spec.type == FieldType.ENUM:
        token = _WORD.match(value)
        if not token:
            return _NO_VALUE
        word = token.group(0).casefold()
        for choice in spec.choices:
            if choice.casefold() == word:
                return choice
        return _NO_VALUE

    if spec.type == FieldType.FLAG:
        token = _WORD.match(value)
        word = token.group(0).casefold() if token else ""
        if word in _TRUE_TOKENS:
            return True
        if word in _FALSE_TOKENS:
            return False
        return _NO_VALUE

    if spec.type == FieldType.LIST:
        items = [item.strip().strip("*\"'").strip() for item in value.split(",")]
        items = [item for item in items if item]
        return items if items else _NO_VALUE

    return _NO_VALUE


def _resolve_default(spec: FieldSpec, text: str) -> Any:
    if spec.default is RAW_TEXT:
        return text
    if isinstance(spec.default, (list, tuple)):
        return list(spec.default)
    return spec.default


def extract_fields(text: Optional[str], schema: Sequence[FieldSpec]) -> Dict[str, Any]:
    """
    Extracts typed values for every field in schema from a raw model reply.

    Args:
        text (Optional[str]): The raw reply text. None is treated as empty.
        schema (Sequence[FieldSpec]): The ordered field descriptors.

    Returns:
        Dict[str, Any]: A mapping of field name to its typed value or default.
    """
    text = text or ""
    schema = tuple(schema)
    boundary = _any_label(schema)
    values: Dict[str, Any] = {}

    for spec in schema:
        region = _find_region(text, spec, boundary)
        value = _NO_VALUE if region is None else _coerce(spec, region)
        if value is _NO_VALUE:
            logger.debug(
                "Field %s (%s) missing or unparseable; using default.",
                spec.name,
                spec.label,
            )
            value = _resolve_default(spec, text)
        values[spec.name] = value
    return values


def labels(schema: Sequence[FieldSpec]) -> List[str]:
    return [spec.label for spec in schema]


# --- Field Schemas ---


def fact_check_schema(language: Union[str, Language] = Language.EN) -> FieldSchema:
    """Fields of a fact-check reply. IMPACT's default is localized."""
    return (
        FieldSpec(
            "verdict",
            "VERDICT",
            FieldType.ENUM,
            Verdict.PARTIAL.value,
            choices=tuple(v.value for v in Verdict),
            hint="[FAKE, PARTIAL, or TRUE]",
        ),
        FieldSpec("score", "SCORE", FieldType.INTEGER, 50, hint="[0-100 integer]"),
        FieldSpec(
            "risk_level",
            "RISK_LEVEL",
            FieldType.ENUM,
            RiskLevel.MEDIUM.value,
            choices=tuple(r.value for r in RiskLevel),
            hint="[LOW, MEDIUM, HIGH, or CRITICAL]",
        ),
        FieldSpec(
            "risk_impact",
            "IMPACT",
            FieldType.TEXT,
            t(language, "impact_unavailable"),
            capture=Capture.BLOCK,
            hint="[A short paragraph explaining the potential harm/risk]",
        ),
        FieldSpec(
            "explanation",
            "EXPLANATION",
            FieldType.TEXT,
            RAW_TEXT,
            capture=Capture.REST,
            hint="[Detailed explanation of why it is fake/true citing discrepancies]",
        ),
    )


DEEPFAKE_SCHEMA: FieldSchema = (
    FieldSpec("is_deepfake", "IS_DEEPFAKE", FieldType.FLAG, False, hint="[YES or NO]"),
    FieldSpec("confidence", "CONFIDENCE", FieldType.INTEGER, 0, hint="[0-100]"),
    FieldSpec(
        "indicators",
        "INDICATORS",
        FieldType.LIST,
        (),
        hint="[List of specific visual artifacts found, comma separated]",
    ),
    FieldSpec(
        "technical_analysis",
        "ANALYSIS",
        FieldType.TEXT,
        RAW_TEXT,
        capture=Capture.REST,
        hint="[Detailed technical analysis]",
    ),
)

VIRALITY_SCHEMA: FieldSchema = (
    FieldSpec("virality_score", "SCORE", FieldType.INTEGER, 0, hint="[0-100]"),
    FieldSpec(
        "estimated_reach", "REACH", FieldType.TEXT, "Unknown", hint="[e.g. 10k-50k people]"
    ),
    FieldSpec(
        "velocity",
        "VELOCITY",
        FieldType.ENUM,
        Velocity.MODERATE.value,
        choices=tuple(v.value for v in Velocity),
        hint="[Slow, Moderate, Viral, Explosive]",
    ),
    FieldSpec(
        "reasoning",
        "REASONING",
        FieldType.TEXT,
        RAW_TEXT,
        capture=Capture.REST,
        hint="[Brief reason]",
    ),
)
