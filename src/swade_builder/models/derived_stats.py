"""Derived stat calculator driven by DerivedStatsConfig.

Pace, Parry, and Toughness follow the Savage Worlds formulas:

  Pace      = base (6) + modifiers, floor 1
  Parry     = base (2) + Fighting / 2, floor 2, then modifiers
  Toughness = base (2) + Vigor / 2 + modifiers, floor 1

Modifiers come from the configured modifier table, looked up by name for
every selected hindrance, selected edge, and ancestry trait. Ancestry
"Armor +N" traits add N Toughness.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from swade_builder.models.catalog import Catalog
from swade_builder.models.character import Character
from swade_builder.models.constants import FIGHTING_SKILL, MAJOR, MINOR
from swade_builder.models.game_rules import ARMOR_TRAIT_RE, DerivedStatsConfig

logger = logging.getLogger(__name__)

PACE = "pace"
PARRY = "parry"
TOUGHNESS = "toughness"

# Pace penalty for a "Slow ..." hindrance missing from the modifier table.
_SLOW_FALLBACK = {MINOR: -1, MAJOR: -2}


@dataclass(frozen=True, slots=True)
class CharacterStats:
    """Snapshot of a character's derived stats."""

    pace: int
    parry: int
    toughness: int


class DerivedStats:
    """Computes Pace, Parry, and Toughness from a DerivedStatsConfig."""

    def __init__(self, config: DerivedStatsConfig) -> None:
        self._config = config

    def pace(self, modifier: int = 0) -> int:
        cfg = self._config
        return max(cfg.pace_minimum, cfg.pace_base + modifier)

    def parry(self, fighting: int, modifier: int = 0) -> int:
        """Parry = parry_base + Fighting // 2, floored, then modified."""
        cfg = self._config
        return max(cfg.parry_minimum, cfg.parry_base + fighting // 2) + modifier

    def toughness(self, vigor: int, modifier: int = 0) -> int:
        cfg = self._config
        return max(cfg.toughness_minimum, cfg.toughness_base + vigor // 2 + modifier)


def _trait_modifiers(traits: Iterable[str], config: DerivedStatsConfig) -> dict[str, int]:
    totals = {PACE: 0, PARRY: 0, TOUGHNESS: 0}
    for trait in traits:
        for stat in totals:
            totals[stat] += config.modifier(trait, stat)
        armor = ARMOR_TRAIT_RE.match(trait.strip())
        if armor:
            totals[TOUGHNESS] += int(armor.group(1))
    return totals


def selection_modifiers(character: Character, catalog: Catalog) -> dict[str, int]:
    """Sum the stat modifiers of every hindrance, edge, and ancestry trait."""
    config = catalog.derived
    totals = _trait_modifiers(catalog.ancestry_for(character.ancestry).traits, config)

    for name, selection in character.hindrances.items():
        if config.has_modifier(name):
            for stat in totals:
                totals[stat] += config.modifier(name, stat)
        elif name.startswith("Slow"):
            logger.debug("No modifier entry for %r; using the Slow fallback", name)
            totals[PACE] += _SLOW_FALLBACK.get(selection.severity, -1)

    for name in character.edges:
        for stat in totals:
            totals[stat] += config.modifier(name, stat)

    return totals


def compute_stats(character: Character, catalog: Catalog) -> CharacterStats:
    """Compute Pace, Parry, and Toughness for a character."""
    calc = DerivedStats(catalog.derived)
    mods = selection_modifiers(character, catalog)
    return CharacterStats(
        pace=calc.pace(mods[PACE]),
        parry=calc.parry(character.skill_rank(FIGHTING_SKILL), mods[PARRY]),
        toughness=calc.toughness(character.attribute("vigor"), mods[TOUGHNESS]),
    )


def starting_funds(character: Character, catalog: Catalog) -> int:
    """Starting money: the base, replaced by the highest selected override.

    Poverty, Rich, and Filthy Rich replace the base rather than adding to it.
    """
    funds = catalog.funds
    amounts = [
        funds.overrides[name]
        for name in character.selection_names()
        if name in funds.overrides
    ]
    return max(amounts) if amounts else funds.base
