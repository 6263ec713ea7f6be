"""Point pools: attribute points, skill points, hindrance points, edge slots.

Pools interact. Hindrance points buy an edge slot and then bonus skill
points; the ancestry grants more of both; skill costs depend on attribute
dice. Every figure here is recomputed from the character on each call.

Two flavours of "what's left" are exposed for each pool:
  - remaining: clamped at 0, for display
  - balance:   signed, negative when over budget, for validation
"""

from dataclasses import dataclass

from swade_builder.engine.costs import attribute_step_cost, next_rank, skill_step_cost
from swade_builder.models.catalog import Catalog
from swade_builder.models.character import Character
from swade_builder.models.constants import MAJOR, MINOR, UNTRAINED

# Hindrance points -> bonuses. The first 2 points buy an edge, the next 2
# buy skill points; anything past that buys nothing.
_EDGE_TIER_POINTS = 2
_EDGE_TIER_EDGES = 1
_SKILL_TIER_POINTS = 2
_SKILL_TIER_SKILL_POINTS = 2


@dataclass(frozen=True, slots=True)
class HindrancePoints:
    minor: int
    major: int
    total: int


@dataclass(frozen=True, slots=True)
class HindranceBonuses:
    skill_points: int
    edges: int


@dataclass(frozen=True, slots=True)
class EdgeSlots:
    base: int               # from ancestry
    from_hindrances: int
    total: int
    used: int
    remaining: int          # clamped at 0
    balance: int            # signed


@dataclass(frozen=True, slots=True)
class PoolSummary:
    base: int
    bonus: int
    total: int
    used: int
    remaining: int          # clamped at 0
    balance: int            # signed

    @property
    def over_budget(self) -> bool:
        return self.balance < 0


# --- Attributes --------------------------------------------------------------


def attribute_points_used(character: Character, catalog: Catalog) -> int:
    die_types = catalog.rules.die_types
    return sum(
        attribute_step_cost(die_types[0], value, die_types)
        for value in character.attributes.values()
    )


def attribute_points_balance(character: Character, catalog: Catalog) -> int:
    return catalog.rules.attribute_points - attribute_points_used(character, catalog)


def attribute_points_remaining(character: Character, catalog: Catalog) -> int:
    return max(0, attribute_points_balance(character, catalog))


def attribute_pool(character: Character, catalog: Catalog) -> PoolSummary:
    base = catalog.rules.attribute_points
    used = attribute_points_used(character, catalog)
    return PoolSummary(
        base=base,
        bonus=0,
        total=base,
        used=used,
        remaining=max(0, base - used),
        balance=base - used,
    )


def can_afford_attribute_increase(character: Character, catalog: Catalog, attribute: str) -> bool:
    die_types = catalog.rules.die_types
    current = character.attribute(attribute)
    target = next_rank(current, die_types=die_types)
    if target is None:
        return False
    cost = attribute_step_cost(current, target, die_types)
    return attribute_points_balance(character, catalog) >= cost


# --- Hindrances --------------------------------------------------------------


def hindrance_points(character: Character) -> HindrancePoints:
    minor = sum(h.points for h in character.hindrances.values() if h.severity == MINOR)
    major = sum(h.points for h in character.hindrances.values() if h.severity == MAJOR)
    return HindrancePoints(minor=minor, major=major, total=minor + major)


def hindrance_bonuses(character: Character) -> HindranceBonuses:
    """Convert hindrance points into an edge slot and bonus skill points."""
    points = hindrance_points(character).total
    edges = 0
    skill_points = 0
    if points >= _EDGE_TIER_POINTS:
        edges += _EDGE_TIER_EDGES
        points -= _EDGE_TIER_POINTS
    if points >= _SKILL_TIER_POINTS:
        skill_points += _SKILL_TIER_SKILL_POINTS
    return HindranceBonuses(skill_points=skill_points, edges=edges)


# --- Skills ------------------------------------------------------------------


def skill_points_used(character: Character, catalog: Catalog) -> int:
    """Total cost of every trained skill, priced against its linked attribute."""
    total = 0
    for name, rank in character.skills.items():
        if rank <= UNTRAINED:
            continue
        linked = catalog.linked_attribute(name, character.custom_skills)
        total += skill_step_cost(
            UNTRAINED, rank, character.attribute(linked), catalog.rules.die_types
        )
    return total


def bonus_skill_points(character: Character, catalog: Catalog) -> int:
    ancestry = catalog.ancestry_for(character.ancestry)
    return hindrance_bonuses(character).skill_points + ancestry.skill_points


def skill_points_balance(character: Character, catalog: Catalog) -> int:
    total = catalog.rules.skill_points + bonus_skill_points(character, catalog)
    return total - skill_points_used(character, catalog)


def skill_points_remaining(character: Character, catalog: Catalog) -> int:
    return max(0, skill_points_balance(character, catalog))


def skill_pool(character: Character, catalog: Catalog) -> PoolSummary:
    base = catalog.rules.skill_points
    bonus = bonus_skill_points(character, catalog)
    used = skill_points_used(character, catalog)
    total = base + bonus
    return PoolSummary(
        base=base,
        bonus=bonus,
        total=total,
        used=used,
        remaining=max(0, total - used),
        balance=total - used,
    )


def skill_increase_cost(character: Character, catalog: Catalog, skill: str) -> int | None:
    """Cost of the next step for *skill*, or None at the top die."""
    die_types = catalog.rules.die_types
    current = character.skill_rank(skill)
    target = next_rank(current, skill=True, die_types=die_types)
    if target is None:
        return None
    linked = catalog.linked_attribute(skill, character.custom_skills)
    return skill_step_cost(current, target, character.attribute(linked), die_types)


def can_afford_skill_increase(character: Character, catalog: Catalog, skill: str) -> bool:
    cost = skill_increase_cost(character, catalog, skill)
    if cost is None:
        return False
    return skill_points_balance(character, catalog) >= cost


# --- Edges -------------------------------------------------------------------


def available_edges(character: Character, catalog: Catalog) -> EdgeSlots:
    base = catalog.ancestry_for(character.ancestry).edges
    from_hindrances = hindrance_bonuses(character).edges
    total = base + from_hindrances
    used = len(character.edges)
    return EdgeSlots(
        base=base,
        from_hindrances=from_hindrances,
        total=total,
        used=used,
        remaining=max(0, total - used),
        balance=total - used,
    )
