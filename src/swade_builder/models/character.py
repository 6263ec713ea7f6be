"""Character data model.

Represents a player's creation choices: attribute dice, skill dice, custom
skills, hindrances, edges, and ancestry, plus the free-text sheet fields
the host keeps alongside them. This is the input to every pool, validator,
and derived-stat calculation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from swade_builder.models.constants import ATTRIBUTE_NAMES, MIN_DIE, UNTRAINED

CHARACTER_FORMAT_VERSION = "2.0"


def utc_timestamp() -> str:
    """ISO-8601 timestamp used for created/modified metadata."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _default_attributes() -> dict[str, int]:
    return {name: MIN_DIE for name in ATTRIBUTE_NAMES}


@dataclass(slots=True)
class HindranceSelection:
    """A hindrance as stored on the character.

    The severity and point value are copied in at selection time so pools
    still work if the catalog later drops the hindrance.
    """

    name: str
    severity: str        # "minor" | "major"
    points: int


@dataclass
class Character:
    """A Savage Worlds character at creation (Novice rank)."""

    # Identity
    name: str = ""
    concept: str = ""
    ancestry: str = "Human"

    # Attribute key -> die rank (4-12, even)
    attributes: dict[str, int] = field(default_factory=_default_attributes)

    # Skill name -> die rank; absent means untrained
    skills: dict[str, int] = field(default_factory=dict)

    # Custom skill name -> linked attribute key
    custom_skills: dict[str, str] = field(default_factory=dict)
    custom_skill_dates: dict[str, str] = field(default_factory=dict)

    # Hindrance name -> selection, in the order they were taken
    hindrances: dict[str, HindranceSelection] = field(default_factory=dict)

    # Edge names, in the order they were taken
    edges: list[str] = field(default_factory=list)

    # Sheet text the engine never interprets
    equipment: str = ""
    background: str = ""
    special_abilities: str = ""
    notes: str = ""

    created: str = field(default_factory=utc_timestamp)
    last_modified: str = field(default_factory=utc_timestamp)
    version: str = CHARACTER_FORMAT_VERSION

    def attribute(self, name: str) -> int:
        return self.attributes.get(name, MIN_DIE)

    def skill_rank(self, name: str) -> int:
        return self.skills.get(name, UNTRAINED)

    def trained_skills(self) -> dict[str, int]:
        """Skills above untrained, in insertion order."""
        return {name: rank for name, rank in self.skills.items() if rank > UNTRAINED}

    def has_edge(self, name: str) -> bool:
        return name in self.edges

    def has_hindrance(self, name: str) -> bool:
        return name in self.hindrances

    def selection_names(self) -> list[str]:
        """Hindrance names followed by edge names."""
        return [*self.hindrances, *self.edges]

    def touch(self) -> None:
        self.last_modified = utc_timestamp()
