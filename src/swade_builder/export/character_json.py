"""Character save files in the creator's JSON format.

Shape (version 2.0):

    {
      "name": "...", "concept": "...", "ancestry": "Human",
      "attributes": {"agility": 6, "smarts": 4, ...},
      "skills": {"Fighting": 6, ...},
      "customSkills": {"Piloting (Mechs)": {"attribute": "agility", "addedDate": "..."}},
      "hindrances": [{"name": "Loyal", "type": "minor", "points": 1}, ...],
      "edges": ["Alertness", ...],
      "equipment": "", "background": "", "specialAbilities": "", "notes": "",
      "createdDate": "...", "lastModified": "...", "version": "2.0"
    }

Several characters can be saved together as a bundle:
{"metadata": {"exported", "version", "count"}, "characters": [...]}.

Loading checks structure and raises ValueError for anything the engine
can't represent. It does not check rules; use validate_character for that.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from swade_builder.models.character import (
    CHARACTER_FORMAT_VERSION,
    Character,
    HindranceSelection,
    utc_timestamp,
)
from swade_builder.models.constants import (
    ATTRIBUTE_NAMES,
    ATTRIBUTES,
    DIE_RANKS,
    HINDRANCE_SEVERITIES,
    SKILL_RANKS,
    UNTRAINED,
)
from swade_builder.models.game_rules import hindrance_points_for

REQUIRED_FIELDS = ("name", "concept", "ancestry", "attributes", "skills", "hindrances", "edges")


def character_to_dict(character: Character) -> dict[str, Any]:
    """Serialise a Character to the save-file shape."""
    return {
        "name": character.name,
        "concept": character.concept,
        "ancestry": character.ancestry,
        "attributes": {attr: character.attribute(attr) for attr in ATTRIBUTE_NAMES},
        "skills": character.trained_skills(),
        "customSkills": {
            name: {
                "attribute": attribute,
                "addedDate": character.custom_skill_dates.get(name, character.created),
            }
            for name, attribute in character.custom_skills.items()
        },
        "hindrances": [
            {"name": h.name, "type": h.severity, "points": h.points}
            for h in character.hindrances.values()
        ],
        "edges": list(character.edges),
        "equipment": character.equipment,
        "background": character.background,
        "specialAbilities": character.special_abilities,
        "notes": character.notes,
        "createdDate": character.created,
        "lastModified": character.last_modified,
        "version": character.version,
    }


# --- Loading ---------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_rank(value: Any, allowed: tuple[int, ...], what: str) -> int:
    if not _is_number(value) or value != int(value) or int(value) not in allowed:
        raise ValueError(f"{what} must be one of {allowed}, got {value!r}")
    return int(value)


def validate_character_structure(data: Any) -> None:
    """Raise ValueError unless *data* has the save-file structure."""
    if not isinstance(data, Mapping):
        raise ValueError("Character data must be a JSON object")
    for key in REQUIRED_FIELDS:
        if key not in data:
            raise ValueError(f"Missing required field: {key}")
    attributes = data["attributes"]
    if not isinstance(attributes, Mapping):
        raise ValueError("Invalid attributes structure")
    for attr in ATTRIBUTE_NAMES:
        if not _is_number(attributes.get(attr)):
            raise ValueError(f"Attribute {attr!r} must be a number")
    if not isinstance(data["skills"], Mapping):
        raise ValueError("Skills must be an object")
    if not isinstance(data["hindrances"], list):
        raise ValueError("Hindrances must be an array")
    if not isinstance(data["edges"], list):
        raise ValueError("Edges must be an array")


def _load_custom_skills(raw: Any) -> tuple[dict[str, str], dict[str, str]]:
    if not isinstance(raw, Mapping):
        raise ValueError("customSkills must be an object")
    skills: dict[str, str] = {}
    dates: dict[str, str] = {}
    for name, entry in raw.items():
        # Older saves stored the attribute key directly.
        attribute = entry.get("attribute") if isinstance(entry, Mapping) else entry
        if attribute not in ATTRIBUTES:
            raise ValueError(f"Custom skill {name!r} links unknown attribute {attribute!r}")
        skills[name] = attribute
        if isinstance(entry, Mapping) and entry.get("addedDate"):
            dates[name] = str(entry["addedDate"])
    return skills, dates


def _load_hindrances(raw: list[Any]) -> dict[str, HindranceSelection]:
    hindrances: dict[str, HindranceSelection] = {}
    for entry in raw:
        if not isinstance(entry, Mapping) or "name" not in entry:
            raise ValueError(f"Hindrance entries need a name, got {entry!r}")
        severity = str(entry.get("type", "")).lower()
        if severity not in HINDRANCE_SEVERITIES:
            raise ValueError(
                f"Hindrance {entry['name']!r} has type {entry.get('type')!r}, "
                "expected 'minor' or 'major'"
            )
        name = str(entry["name"])
        hindrances[name] = HindranceSelection(
            name=name,
            severity=severity,
            points=hindrance_points_for(severity, entry.get("points")),
        )
    return hindrances


def character_from_dict(data: Mapping[str, Any]) -> Character:
    """Rebuild a Character from the save-file shape."""
    validate_character_structure(data)

    attributes = {
        attr: _as_rank(data["attributes"][attr], DIE_RANKS, f"Attribute {attr!r}")
        for attr in ATTRIBUTE_NAMES
    }
    skills: dict[str, int] = {}
    for name, value in data["skills"].items():
        rank = _as_rank(value, SKILL_RANKS, f"Skill {name!r}")
        if rank != UNTRAINED:
            skills[name] = rank

    custom_skills, custom_dates = _load_custom_skills(data.get("customSkills") or {})

    edges: list[str] = []
    for name in data["edges"]:
        if not isinstance(name, str):
            raise ValueError(f"Edge entries must be names, got {name!r}")
        if name not in edges:
            edges.append(name)

    now = utc_timestamp()
    return Character(
        name=str(data["name"]),
        concept=str(data["concept"]),
        ancestry=str(data["ancestry"]),
        attributes=attributes,
        skills=skills,
        custom_skills=custom_skills,
        custom_skill_dates=custom_dates,
        hindrances=_load_hindrances(data["hindrances"]),
        edges=edges,
        equipment=str(data.get("equipment", "")),
        background=str(data.get("background", "")),
        special_abilities=str(data.get("specialAbilities", "")),
        notes=str(data.get("notes", "")),
        created=str(data.get("createdDate") or now),
        last_modified=str(data.get("lastModified") or now),
        version=str(data.get("version", CHARACTER_FORMAT_VERSION)),
    )


def dumps(character: Character, indent: int | None = 2) -> str:
    return json.dumps(character_to_dict(character), indent=indent)


def loads(text: str) -> Character:
    """Parse a save file. Malformed JSON also raises ValueError."""
    return character_from_dict(json.loads(text))


# --- Bundles ---------------------------------------------------------------


def bundle_to_dict(characters: Iterable[Character]) -> dict[str, Any]:
    entries = [character_to_dict(c) for c in characters]
    return {
        "metadata": {
            "exported": utc_timestamp(),
            "version": CHARACTER_FORMAT_VERSION,
            "count": len(entries),
        },
        "characters": entries,
    }


def characters_from_bundle(data: Mapping[str, Any]) -> list[Character]:
    entries = data.get("characters") if isinstance(data, Mapping) else None
    if not isinstance(entries, list):
        raise ValueError("Bundle must contain a 'characters' array")
    return [character_from_dict(entry) for entry in entries]
