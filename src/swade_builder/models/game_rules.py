"""Ruleset configuration: point budgets, caps, and derived-stat constants.

Defaults match the Savage Worlds Adventure Edition core rules. Every
from_dict() accepts the camelCase shape of the creator's config.json and
falls back to the vanilla value for any key it doesn't find, so the engine
works with a partial (or absent) config.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from swade_builder.models.constants import DIE_RANKS, MAJOR, MINOR, UNTRAINED, Rank


@dataclass(frozen=True, slots=True)
class GameRules:
    """Global budgets and caps for character creation."""

    attribute_points: int = 5
    skill_points: int = 12
    hindrance_points_max: int = 4
    hindrance_points_minor_max: int = 2
    die_types: tuple[int, ...] = DIE_RANKS
    creation_rank: Rank = Rank.NOVICE

    @property
    def skill_ranks(self) -> tuple[int, ...]:
        return (UNTRAINED, *self.die_types)

    @property
    def min_die(self) -> int:
        return self.die_types[0]

    @property
    def max_die(self) -> int:
        return self.die_types[-1]

    @classmethod
    def defaults(cls) -> GameRules:
        """Return vanilla SWADE creation rules."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameRules:
        vanilla = cls()
        die_types = data.get("dieTypes")
        return cls(
            attribute_points=int(data.get("attributePoints", vanilla.attribute_points)),
            skill_points=int(data.get("skillPoints", vanilla.skill_points)),
            hindrance_points_max=int(
                data.get("hindrancePointsMax", vanilla.hindrance_points_max)
            ),
            hindrance_points_minor_max=int(
                data.get("hindrancePointsMinorMax", vanilla.hindrance_points_minor_max)
            ),
            die_types=_die_types(die_types) if die_types else vanilla.die_types,
        )


def _die_types(values: Any) -> tuple[int, ...]:
    """Validate a configured die ladder: positive even sides, strictly rising."""
    ladder = tuple(int(v) for v in values)
    if any(d <= 0 or d % 2 for d in ladder) or list(ladder) != sorted(set(ladder)):
        raise ValueError(f"dieTypes must be rising positive even die sizes, got {list(values)}")
    return ladder


# Named edges, hindrances, and ancestry traits that shift a derived stat.
# A name may appear as any of the three; the calculator looks each selection
# up here.
_VANILLA_MODIFIERS: dict[str, dict[str, int]] = {
    "Fleet-Footed": {"pace": 2},
    "Slow": {"pace": -1},
    "Slow (Minor)": {"pace": -1},
    "Slow (Major)": {"pace": -2},
    "Block": {"parry": 1},
    "Improved Block": {"parry": 2},
    "Brawny": {"toughness": 1},
    "Small": {"toughness": -1},
}

# "Armor +2" style ancestry traits add to Toughness.
ARMOR_TRAIT_RE = re.compile(r"^armou?r\s*\+\s*(\d+)$", re.IGNORECASE)

_FORMULA_BASE_RE = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True, slots=True)
class DerivedStatsConfig:
    """Bases, floors, and named modifiers for Pace, Parry, and Toughness."""

    pace_base: int = 6
    pace_minimum: int = 1
    parry_base: int = 2          # Parry = parry_base + Fighting / 2
    parry_minimum: int = 2
    toughness_base: int = 2      # Toughness = toughness_base + Vigor / 2
    toughness_minimum: int = 1
    modifiers: dict[str, dict[str, int]] = field(
        default_factory=lambda: {k: dict(v) for k, v in _VANILLA_MODIFIERS.items()}
    )

    def modifier(self, name: str, stat: str) -> int:
        """Return the modifier *name* applies to *stat*, or 0."""
        return self.modifiers.get(name, {}).get(stat, 0)

    def has_modifier(self, name: str) -> bool:
        return name in self.modifiers

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DerivedStatsConfig:
        vanilla = cls()
        pace = data.get("pace", {})
        parry = data.get("parry", {})
        toughness = data.get("toughness", {})

        parry_base = parry.get("base")
        if parry_base is None and "formula" in parry:
            # Only the leading constant of "2 + (Fighting / 2)" is configurable.
            match = _FORMULA_BASE_RE.match(str(parry["formula"]))
            parry_base = int(match.group(1)) if match else vanilla.parry_base

        modifiers = {k: dict(v) for k, v in vanilla.modifiers.items()}
        for name, deltas in data.get("modifiers", {}).items():
            modifiers[name] = {stat: int(delta) for stat, delta in deltas.items()}

        return cls(
            pace_base=int(pace.get("base", vanilla.pace_base)),
            pace_minimum=int(pace.get("minimum", vanilla.pace_minimum)),
            parry_base=int(parry_base if parry_base is not None else vanilla.parry_base),
            parry_minimum=int(parry.get("minimum", vanilla.parry_minimum)),
            toughness_base=int(toughness.get("base", vanilla.toughness_base)),
            toughness_minimum=int(toughness.get("minimum", vanilla.toughness_minimum)),
            modifiers=modifiers,
        )


# config.json key -> selection name that triggers the override.
_FUNDS_OVERRIDE_KEYS: dict[str, str] = {
    "poverty": "Poverty",
    "rich": "Rich",
    "filthyRich": "Filthy Rich",
}


@dataclass(frozen=True, slots=True)
class StartingFundsConfig:
    """Base starting money and the selections that replace it."""

    base: int = 500
    overrides: dict[str, int] = field(
        default_factory=lambda: {"Poverty": 250, "Rich": 1500, "Filthy Rich": 2500}
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StartingFundsConfig:
        vanilla = cls()
        overrides = dict(vanilla.overrides)
        for key, name in _FUNDS_OVERRIDE_KEYS.items():
            if key in data:
                overrides[name] = int(data[key])
        for name, amount in data.get("overrides", {}).items():
            overrides[name] = int(amount)
        return cls(base=int(data.get("base", vanilla.base)), overrides=overrides)


def hindrance_points_for(severity: str, points: int | None = None) -> int:
    """Point value of a hindrance. Major is always 2; minor defaults to 1."""
    if severity == MAJOR:
        return 2
    if severity == MINOR:
        return 1 if points is None else int(points)
    raise ValueError(f"Hindrance severity must be 'minor' or 'major', got {severity!r}")
