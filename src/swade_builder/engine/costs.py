"""Point costs for raising attributes and skills.

Attributes cost 1 point per die step. Skills cost 1 point per step while
the skill is below its linked attribute and 2 points per step from there
on. Every function here is pure; invalid ranks raise ValueError.

The die ladder defaults to d4-d12. Callers holding a catalog pass
``catalog.rules.die_types`` so a ruleset with a shorter ladder is priced
and bounded by it.
"""

from swade_builder.models.constants import DIE_RANKS, UNTRAINED

_ATTRIBUTE_COST_PER_STEP = 1
_SKILL_COST_CHEAP = 1
_SKILL_COST_EXPENSIVE = 2


def skill_ranks(die_types: tuple[int, ...] = DIE_RANKS) -> tuple[int, ...]:
    """The skill ladder: untrained followed by the die ladder."""
    return (UNTRAINED, *die_types)


def _check_attribute_rank(rank: int, die_types: tuple[int, ...]) -> None:
    if rank not in die_types:
        raise ValueError(f"Attribute rank must be one of {die_types}, got {rank!r}")


def _check_skill_rank(rank: int, ranks: tuple[int, ...]) -> None:
    if rank not in ranks:
        raise ValueError(f"Skill rank must be one of {ranks}, got {rank!r}")


# --- Rank sequences ----------------------------------------------------------


def _ladder(rank: int, skill: bool, die_types: tuple[int, ...]) -> tuple[int, ...]:
    if skill:
        ranks = skill_ranks(die_types)
        _check_skill_rank(rank, ranks)
        return ranks
    _check_attribute_rank(rank, die_types)
    return die_types


def next_rank(
    rank: int, *, skill: bool = False, die_types: tuple[int, ...] = DIE_RANKS
) -> int | None:
    """Return the rank one step above *rank*, or None at the top die."""
    ranks = _ladder(rank, skill, die_types)
    index = ranks.index(rank)
    return ranks[index + 1] if index + 1 < len(ranks) else None


def previous_rank(
    rank: int, *, skill: bool = False, die_types: tuple[int, ...] = DIE_RANKS
) -> int | None:
    """Return the rank one step below *rank*, or None at the floor.

    The floor is the lowest die for attributes and untrained for skills.
    """
    ranks = _ladder(rank, skill, die_types)
    index = ranks.index(rank)
    return ranks[index - 1] if index > 0 else None


# --- Attributes --------------------------------------------------------------


def attribute_step_cost(
    from_rank: int, to_rank: int, die_types: tuple[int, ...] = DIE_RANKS
) -> int:
    """Points to raise an attribute from *from_rank* to *to_rank*.

    Returns 0 when *to_rank* is not above *from_rank*.
    """
    _check_attribute_rank(from_rank, die_types)
    _check_attribute_rank(to_rank, die_types)
    if to_rank <= from_rank:
        return 0
    steps = die_types.index(to_rank) - die_types.index(from_rank)
    return steps * _ATTRIBUTE_COST_PER_STEP


def attribute_refund(
    from_rank: int, to_rank: int, die_types: tuple[int, ...] = DIE_RANKS
) -> int:
    """Points returned by lowering an attribute from *from_rank* to *to_rank*."""
    return attribute_step_cost(to_rank, from_rank, die_types)


# --- Skills ------------------------------------------------------------------


def skill_step_cost(
    from_rank: int,
    to_rank: int,
    linked_attribute_value: int,
    die_types: tuple[int, ...] = DIE_RANKS,
) -> int:
    """Points to raise a skill from *from_rank* to *to_rank*.

    Each step is priced by the rank it starts from: 1 point if that rank is
    below *linked_attribute_value*, otherwise 2.
    """
    ranks = skill_ranks(die_types)
    _check_skill_rank(from_rank, ranks)
    _check_skill_rank(to_rank, ranks)
    if to_rank < from_rank:
        raise ValueError(
            f"skill_step_cost prices increases only ({from_rank} -> {to_rank}); "
            "use skill_refund for decreases"
        )
    cost = 0
    for rank in ranks[ranks.index(from_rank):ranks.index(to_rank)]:
        cost += _SKILL_COST_CHEAP if rank < linked_attribute_value else _SKILL_COST_EXPENSIVE
    return cost


def skill_refund(
    from_rank: int,
    to_rank: int,
    linked_attribute_value: int,
    die_types: tuple[int, ...] = DIE_RANKS,
) -> int:
    """Points returned by lowering a skill from *from_rank* to *to_rank*."""
    if to_rank > from_rank:
        raise ValueError(
            f"skill_refund prices decreases only ({from_rank} -> {to_rank})"
        )
    return skill_step_cost(to_rank, from_rank, linked_attribute_value, die_types)


def is_skill_expensive(rank: int, linked_attribute_value: int) -> bool:
    """True if the next step up from *rank* costs 2 points."""
    return rank >= linked_attribute_value
