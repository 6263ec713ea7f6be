"""Typed edge requirements.

Edge requirement text is parsed once, when the catalog loads, into these
records. Requirements are grouped in CNF like the rest of the engine:
RequirementSet = AND(clause, ...), RequirementClause = OR(requirement, ...).
"""

from dataclasses import dataclass, field

from swade_builder.models.constants import Rank


@dataclass(frozen=True, slots=True)
class RankRequirement:
    """Requires an advancement rank (e.g. Seasoned)."""
    rank: Rank

    @property
    def name(self) -> str:
        return self.rank.name.capitalize()


@dataclass(frozen=True, slots=True)
class AttributeRequirement:
    """Requires an attribute at a die rank or better.

    Examples: Smarts d8+, Vigor d6+
    """
    attribute: str       # attribute key (e.g. "smarts")
    die: int             # minimum die rank


@dataclass(frozen=True, slots=True)
class SkillRequirement:
    """Requires a skill at a die rank or better. Untrained counts as 0."""
    skill: str           # canonical skill name (e.g. "Fighting")
    die: int


@dataclass(frozen=True, slots=True)
class EdgeRequirement:
    """Requires a specific edge to already be selected."""
    edge: str


@dataclass(frozen=True, slots=True)
class EdgeFamilyRequirement:
    """Requires any edge whose name starts with *prefix*.

    Example: "Arcane Background" is met by "Arcane Background (Magic)".
    """
    prefix: str


@dataclass(frozen=True, slots=True)
class RawRequirement:
    """A requirement fragment we don't interpret.

    Kept so UIs can still show it; it never blocks a selection.
    """
    text: str


# Union of all evaluatable requirement types.
Requirement = (
    RankRequirement
    | AttributeRequirement
    | SkillRequirement
    | EdgeRequirement
    | EdgeFamilyRequirement
)


@dataclass(frozen=True, slots=True)
class RequirementClause:
    """OR-group: at least one requirement must be met."""

    requirements: tuple[Requirement, ...]


@dataclass(frozen=True, slots=True)
class RequirementSet:
    """CNF: every clause must be satisfied."""

    clauses: tuple[RequirementClause, ...] = ()
    raw: tuple[RawRequirement, ...] = field(default_factory=tuple)

    def all_requirements(self) -> list[Requirement]:
        return [req for clause in self.clauses for req in clause.requirements]
