"""Pulls an analysis candidate out of a raw completion reply.

Two strategies, tried in order by the normalizer:

* ``extract_json_candidate``: the reply embeds a JSON object (possibly wrapped
  in prose or code fences).
* ``parse_free_text``: the reply is prose laid out under the section headers
  the prompt asks for. Every section is optional and parsed independently.

Both return plain dicts in the camelCase payload shape; ``validate_and_fix``
turns them into an AnalysisResult.
"""

import json
import random
import re
from collections.abc import Iterator
from typing import Any

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

_SECTION_HEADER = re.compile(
    r"^[ \t#*>_]*(?:\d+[.)][ \t]*)?[*_]*"
    r"(?:(?P<conditions>possible[ \t]+conditions)"
    r"|(?P<medications>(?:recommended[ \t]+)?medications)"
    r"|(?P<recommendations>(?:general[ \t]+)?recommendations)"
    r"|(?P<red_flags>red[ \t]+flags))\b[*_ \t]*:?[*_ \t]*",
    re.IGNORECASE | re.MULTILINE,
)
_BLANK_LINE = re.compile(r"\n[ \t]*\n")
_BULLET_MARKER = r"[ \t]*(?:[-*•]|\d+[.)])?[ \t]*"
_BULLET = "^" + _BULLET_MARKER

# conditions may also run inline after a comma or semicolon, recommendations after a semicolon
_CONDITION = re.compile(
    r"(?:^|(?<=[,;]))"
    + _BULLET_MARKER
    + r"(?P<name>\w[^\n:%]*?)[ \t]*[:(-][ \t]*"
    r"(?P<probability>\d+(?:\.\d+)?)?[ \t]*%",
    re.MULTILINE,
)
_SEVERITY = re.compile(
    r"\b(low|medium|high)[ \t]+severity\b|\bseverity[ \t]*[:-][ \t]*(low|medium|high)\b",
    re.IGNORECASE,
)

_RECOMMENDATION = re.compile(
    r"(?:^|(?<=;))"
    + _BULLET_MARKER
    + r"(?P<title>\w[^\n:;]*?)[ \t]*(?::|[ \t]-[ \t])[ \t]*(?P<description>[^\n;]*[^\s;])",
    re.MULTILINE,
)
_RECOMMENDATION_TYPE = re.compile(r"\b(medication|lifestyle|medical)\b", re.IGNORECASE)
_URGENCY = re.compile(
    r"\b(low|medium|high)[ \t]+urgency\b|\burgency[ \t]*[:-][ \t]*(low|medium|high)\b",
    re.IGNORECASE,
)
_POSITIONAL_TYPES = ("medication", "lifestyle")

_MEDICATION_LABELS = r"type|dosage|frequency|duration|price|side[ \t]+effects"
_MEDICATION = re.compile(
    _BULLET
    + rf"(?!(?:{_MEDICATION_LABELS})\b)(?P<name>\w[^\n:]*?)[ \t]*"
    r"(?::|[ \t]-[ \t]"
    rf"|[ \t]*\n(?=[ \t]*(?:[-*•][ \t]*)?(?:{_MEDICATION_LABELS})[ \t]*[:-]))",
    re.IGNORECASE | re.MULTILINE,
)
_MEDICATION_FIELDS = {
    field: re.compile(
        rf"\b{label}[ \t]*[:-][ \t]*(?P<value>[^\n]*?)[ \t]*"
        rf"(?=[,;|]?[ \t]*\b(?:{_MEDICATION_LABELS})[ \t]*[:-]|\n|$)",
        re.IGNORECASE,
    )
    for field, label in (
        ("type", "type"),
        ("dosage", "dosage"),
        ("frequency", "frequency"),
        ("duration", "duration"),
        ("price", "price"),
        ("sideEffects", r"side[ \t]+effects"),
    )
}
_MEDICATION_DEFAULTS = {
    "type": "OTC Medication",
    "dosage": "As directed",
    "frequency": "As needed",
    "duration": "As needed",
    "price": "$5-15",
}
_SIDE_EFFECT_SPLIT = re.compile(r"[,;]")

_RED_FLAG = re.compile(r"^[ \t]*[-*•][ \t]+(?P<flag>[^\n]*\S)", re.MULTILINE)

_LEADING_PUNCTUATION = re.compile(r"^[\s:;,.)\-]+")

TEXT_CONFIDENCE = 70


def extract_json_candidate(text: str) -> dict[str, Any] | None:
    """Return the JSON object spanning the first '{' to the last '}', if it parses."""
    match = _JSON_OBJECT.search(text)
    if match is None:
        return None
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_free_text(text: str, rng: random.Random | None = None) -> dict[str, Any]:
    """Heuristically extract an analysis candidate from sectioned prose."""
    rng = rng if rng is not None else random.Random()
    sections = _split_sections(text)
    return {
        "confidence": TEXT_CONFIDENCE,
        "possibleConditions": _parse_conditions(sections.get("conditions", ""), rng),
        "recommendations": _parse_recommendations(sections.get("recommendations", "")),
        "medications": _parse_medications(sections.get("medications", "")),
        "redFlags": _parse_red_flags(sections.get("red_flags", "")),
    }


def _split_sections(text: str) -> dict[str, str]:
    headers = list(_SECTION_HEADER.finditer(text))
    sections: dict[str, str] = {}
    for index, header in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(text)
        if header.lastgroup is not None:
            sections.setdefault(header.lastgroup, text[header.end():end])
    return sections


def _entries(section: str, pattern: re.Pattern[str]) -> Iterator[tuple[re.Match[str], str]]:
    """Yield each entry match with the text that follows it up to the next entry or blank line."""
    matches = list(pattern.finditer(section))
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(section)
        body = _BLANK_LINE.split(section[match.end():end], maxsplit=1)[0]
        yield match, body


def _squash(text: str) -> str:
    return _LEADING_PUNCTUATION.sub("", " ".join(text.split())).strip()


def _level(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    if match is None:
        return "medium"
    return (match.group(1) or match.group(2)).lower()


def _parse_conditions(section: str, rng: random.Random) -> list[dict[str, Any]]:
    conditions = []
    for match, body in _entries(section, _CONDITION):
        raw_probability = match.group("probability")
        probability = (
            int(float(raw_probability))
            if raw_probability is not None
            else rng.randrange(30, 100)
        )
        conditions.append({
            "name": match.group("name").strip(),
            "probability": probability,
            "description": _squash(body) or "Common condition based on the symptoms provided",
            "severity": _level(_SEVERITY, match.group(0) + body),
        })
    return conditions


def _parse_recommendations(section: str) -> list[dict[str, Any]]:
    recommendations = []
    untyped = 0
    for match, body in _entries(section, _RECOMMENDATION):
        entry = match.group(0) + body
        type_match = _RECOMMENDATION_TYPE.search(entry)
        if type_match is not None:
            rec_type = type_match.group(1).lower()
        else:
            rec_type = (
                _POSITIONAL_TYPES[untyped] if untyped < len(_POSITIONAL_TYPES) else "medical"
            )
            untyped += 1
        recommendations.append({
            "type": rec_type,
            "title": match.group("title").strip(),
            "description": match.group("description").strip() or "Follow medical advice",
            "urgency": _level(_URGENCY, entry),
        })
    return recommendations


def _parse_medications(section: str) -> list[dict[str, Any]]:
    medications = []
    for match, body in _entries(section, _MEDICATION):
        entry = match.group(0) + body
        medication: dict[str, Any] = {"name": match.group("name").strip()}
        for field, default in _MEDICATION_DEFAULTS.items():
            medication[field] = _medication_field(field, entry) or default
        side_effects = _medication_field("sideEffects", entry)
        medication["sideEffects"] = [
            effect.strip() for effect in _SIDE_EFFECT_SPLIT.split(side_effects) if effect.strip()
        ] or ["Consult a doctor for side effects"]
        medications.append(medication)
    return medications


def _medication_field(field: str, entry: str) -> str:
    match = _MEDICATION_FIELDS[field].search(entry)
    return match.group("value").strip() if match is not None else ""


def _parse_red_flags(section: str) -> list[str]:
    return [match.group("flag").strip() for match in _RED_FLAG.finditer(section)]
