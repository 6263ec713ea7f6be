"""Savage Worlds attribute names, die ranks, and rank tiers.

Die ranks are stored as the die size (4 = d4 ... 12 = d12). Skills use 0 for
untrained. Everything here is ruleset-fixed; budgets and caps that a
setting may change live in GameRules.
"""

from enum import IntEnum


# Attribute keys, in the order character sheets list them.
ATTRIBUTE_NAMES: tuple[str, ...] = ("agility", "smarts", "spirit", "strength", "vigor")
ATTRIBUTES = frozenset(ATTRIBUTE_NAMES)

# Friendly display names
ATTRIBUTE_LABELS: dict[str, str] = {
    "agility": "Agility",
    "smarts": "Smarts",
    "spirit": "Spirit",
    "strength": "Strength",
    "vigor": "Vigor",
}

ATTRIBUTE_DESCRIPTIONS: dict[str, str] = {
    "agility": "Dexterity, quickness, and general coordination",
    "smarts": "Reasoning ability, education, and common sense",
    "spirit": "Inner wisdom, willpower, and mental toughness",
    "strength": "Physical power and fitness",
    "vigor": "Endurance, resistance to disease, poison, and physical toughness",
}

DIE_RANKS: tuple[int, ...] = (4, 6, 8, 10, 12)
MIN_DIE = 4
MAX_DIE = 12

UNTRAINED = 0
SKILL_RANKS: tuple[int, ...] = (UNTRAINED, *DIE_RANKS)

# Linked attribute for skills the catalog doesn't know about.
DEFAULT_LINKED_ATTRIBUTE = "smarts"

# The skill that feeds Parry.
FIGHTING_SKILL = "Fighting"

MINOR = "minor"
MAJOR = "major"
HINDRANCE_SEVERITIES = frozenset({MINOR, MAJOR})
MAJOR_HINDRANCE_POINTS = 2


class Rank(IntEnum):
    """Advancement ranks. Character creation happens at Novice."""
    NOVICE = 0
    SEASONED = 1
    VETERAN = 2
    HEROIC = 3
    LEGENDARY = 4


RANK_NAMES: dict[str, Rank] = {rank.name.lower(): rank for rank in Rank}


def die_label(rank: int) -> str:
    """Return "d8" for 8, "Untrained" for 0."""
    if rank <= UNTRAINED:
        return "Untrained"
    return f"d{rank}"
