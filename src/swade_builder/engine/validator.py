"""Selection gates and whole-character validation.

Two kinds of question are answered here:

  - "may this hindrance/edge be added right now?" -> SelectionCheck
  - "what is wrong with this character?"          -> ValidationReport

Edge requirements are evaluated from the RequirementSet parsed at catalog
load, in CNF: every clause must hold, and a clause holds if any of its
alternatives does. Requirements are checked at the moment of selection
only. A later change that breaks them surfaces as a validation warning;
nothing is ever removed automatically.

Rule violations are returned, never raised. Unknown hindrance or edge names
passed to the gates raise ValueError, since the host should only offer
catalog entries.
"""

from dataclasses import dataclass, field

from swade_builder.engine.pools import (
    attribute_points_balance,
    available_edges,
    hindrance_points,
    skill_points_balance,
)
from swade_builder.models.catalog import Catalog, EdgeDef
from swade_builder.models.character import Character
from swade_builder.models.constants import (
    ATTRIBUTE_LABELS,
    ATTRIBUTE_NAMES,
    MINOR,
)
from swade_builder.models.game_rules import GameRules
from swade_builder.models.requirements import (
    AttributeRequirement,
    EdgeFamilyRequirement,
    EdgeRequirement,
    RankRequirement,
    Requirement,
    RequirementClause,
    SkillRequirement,
)

# Unspent skill points up to this many are not worth a warning.
_SKILL_POINT_SLACK = 2


@dataclass(frozen=True, slots=True)
class SelectionCheck:
    """Outcome of a selection gate.

    code is one of: ok, already_selected, hindrance_cap, minor_cap,
    no_slots, rank, attribute, skill, edge, edge_family, conflict.
    The builder adds max_rank, min_rank, attribute_points and
    skill_points for rejected increments and decrements.
    """

    valid: bool
    reason: str = ""
    code: str = "ok"

    def __bool__(self) -> bool:
        return self.valid


OK = SelectionCheck(True)


@dataclass(slots=True)
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Requirement evaluation
# ---------------------------------------------------------------------------


def _requirement_code(req: Requirement) -> str:
    if isinstance(req, RankRequirement):
        return "rank"
    if isinstance(req, AttributeRequirement):
        return "attribute"
    if isinstance(req, SkillRequirement):
        return "skill"
    if isinstance(req, EdgeRequirement):
        return "edge"
    return "edge_family"


def _evaluate_requirement(req: Requirement, character: Character, catalog: Catalog) -> bool:
    """Dispatch evaluation by requirement type."""
    if isinstance(req, RankRequirement):
        return req.rank <= catalog.rules.creation_rank
    if isinstance(req, AttributeRequirement):
        return character.attribute(req.attribute) >= req.die
    if isinstance(req, SkillRequirement):
        return character.skill_rank(req.skill) >= req.die
    if isinstance(req, EdgeRequirement):
        return character.has_edge(req.edge)
    if isinstance(req, EdgeFamilyRequirement):
        return any(edge.startswith(req.prefix) for edge in character.edges)
    return False  # pragma: no cover


def _evaluate_clause(clause: RequirementClause, character: Character, catalog: Catalog) -> bool:
    """OR: at least one requirement in the clause must pass."""
    return any(_evaluate_requirement(req, character, catalog) for req in clause.requirements)


def _describe_requirement(req: Requirement, catalog: Catalog) -> str:
    """Return a short human-readable reason for a single unmet requirement."""
    if isinstance(req, RankRequirement):
        creation = catalog.rules.creation_rank.name.capitalize()
        return f"Requires {req.name} rank (character creation is {creation})"
    if isinstance(req, AttributeRequirement):
        return f"Requires {ATTRIBUTE_LABELS[req.attribute]} d{req.die}+"
    if isinstance(req, SkillRequirement):
        return f"Requires {req.skill} d{req.die}+"
    if isinstance(req, EdgeRequirement):
        return f"Requires {req.edge} Edge"
    if isinstance(req, EdgeFamilyRequirement):
        return f"Requires an {req.prefix} Edge"
    return str(req)  # pragma: no cover


def _describe_clause(clause: RequirementClause, catalog: Catalog) -> str:
    """Describe a clause as a human-readable string."""
    if len(clause.requirements) == 1:
        return _describe_requirement(clause.requirements[0], catalog)
    parts = [_describe_requirement(r, catalog).removeprefix("Requires ") for r in clause.requirements]
    return "Requires one of: " + " or ".join(parts)


def _failed_clause_check(clause: RequirementClause, catalog: Catalog) -> SelectionCheck:
    # An OR-clause that mixes kinds reports the kind of its first alternative.
    return SelectionCheck(
        False, _describe_clause(clause, catalog), _requirement_code(clause.requirements[0])
    )


def _get_edge(catalog: Catalog, name: str) -> EdgeDef:
    edge = catalog.get_edge(name)
    if edge is None:
        raise ValueError(f"Unknown edge: {name!r}")
    return edge


def conflicting_selections(character: Character, catalog: Catalog, name: str) -> list[str]:
    """Selected hindrances and edges that *name* may not coexist with."""
    blocked = catalog.exclusions.conflicts_of(name)
    return [other for other in character.selection_names() if other != name and other in blocked]


def _conflict_check(character: Character, catalog: Catalog, name: str) -> SelectionCheck:
    conflicts = conflicting_selections(character, catalog, name)
    if conflicts:
        return SelectionCheck(False, f"Conflicts with {', '.join(conflicts)}", "conflict")
    return OK


# ---------------------------------------------------------------------------
# Selection gates
# ---------------------------------------------------------------------------


def check_hindrance(character: Character, catalog: Catalog, name: str) -> SelectionCheck:
    """Gate for adding hindrance *name*: duplicate, total cap, minor cap, conflicts."""
    hindrance = catalog.get_hindrance(name)
    if hindrance is None:
        raise ValueError(f"Unknown hindrance: {name!r}")
    if character.has_hindrance(name):
        return SelectionCheck(False, f"{name} is already selected", "already_selected")

    rules = catalog.rules
    points = hindrance_points(character)
    if points.total + hindrance.points > rules.hindrance_points_max:
        return SelectionCheck(
            False,
            f"Would exceed maximum hindrance points ({rules.hindrance_points_max})",
            "hindrance_cap",
        )
    if hindrance.severity == MINOR and points.minor + hindrance.points > rules.hindrance_points_minor_max:
        return SelectionCheck(
            False,
            f"Would exceed maximum minor hindrance points ({rules.hindrance_points_minor_max})",
            "minor_cap",
        )
    return _conflict_check(character, catalog, name)


def can_select_hindrance(character: Character, catalog: Catalog, name: str) -> bool:
    return check_hindrance(character, catalog, name).valid


def can_select_edge(character: Character, catalog: Catalog, edge_name: str) -> SelectionCheck:
    """Gate for adding edge *edge_name*.

    Order: free slot (skipped if already selected), then requirements
    clause by clause, then conflicts. Stops at the first failure.
    """
    edge = _get_edge(catalog, edge_name)

    if not character.has_edge(edge_name):
        slots = available_edges(character, catalog)
        if slots.balance <= 0:
            return SelectionCheck(
                False,
                f"No edge slots available ({slots.used}/{slots.total} used)",
                "no_slots",
            )

    for clause in edge.requirements.clauses:
        if not _evaluate_clause(clause, character, catalog):
            return _failed_clause_check(clause, catalog)

    return _conflict_check(character, catalog, edge_name)


def unmet_edge_requirements(character: Character, catalog: Catalog, edge_name: str) -> list[str]:
    """Return human-readable descriptions of every unmet requirement clause."""
    edge = _get_edge(catalog, edge_name)
    return [
        _describe_clause(clause, catalog)
        for clause in edge.requirements.clauses
        if not _evaluate_clause(clause, character, catalog)
    ]


# ---------------------------------------------------------------------------
# Whole-character validation
# ---------------------------------------------------------------------------


def _rank_errors(character: Character, rules: GameRules) -> list[str]:
    errors: list[str] = []
    for attr in ATTRIBUTE_NAMES:
        value = character.attributes.get(attr)
        if value not in rules.die_types:
            errors.append(f"{ATTRIBUTE_LABELS[attr]} has invalid value: {value!r}")
    for name, value in character.skills.items():
        if value not in rules.skill_ranks:
            errors.append(f"{name} has invalid value: {value!r}")
    return errors


def validate_character(character: Character, catalog: Catalog) -> ValidationReport:
    """Collect every rule violation (errors) and advisory notice (warnings)."""
    report = ValidationReport(errors=_rank_errors(character, catalog.rules))
    if report.errors:
        # Pool arithmetic is undefined on malformed ranks.
        return report

    rules = catalog.rules

    # Attributes
    attr_balance = attribute_points_balance(character, catalog)
    if attr_balance < 0:
        report.errors.append(f"Over attribute point limit by {-attr_balance} points")
    elif attr_balance > 0:
        report.warnings.append(f"{attr_balance} unspent attribute points")

    # Skills
    skill_balance = skill_points_balance(character, catalog)
    if skill_balance < 0:
        report.errors.append(f"Over skill point limit by {-skill_balance} points")
    elif skill_balance > _SKILL_POINT_SLACK:
        report.warnings.append(f"{skill_balance} unspent skill points")

    for name in character.trained_skills():
        if catalog.get_skill(name) is None and name not in character.custom_skills:
            report.warnings.append(f"Unknown skill: {name}")

    untrained_core = [name for name in catalog.core_skills if character.skill_rank(name) == 0]
    if untrained_core:
        report.warnings.append(f"Untrained core skills: {', '.join(untrained_core)}")

    if catalog.ancestries and catalog.get_ancestry(character.ancestry) is None:
        report.warnings.append(f"Unknown ancestry: {character.ancestry}")

    # Hindrances
    points = hindrance_points(character)
    if points.total > rules.hindrance_points_max:
        report.errors.append(
            f"Too many hindrance points: {points.total}/{rules.hindrance_points_max}"
        )
    if points.minor > rules.hindrance_points_minor_max:
        report.errors.append(
            f"Too many minor hindrance points: {points.minor}/{rules.hindrance_points_minor_max}"
        )
    for name in character.hindrances:
        if catalog.get_hindrance(name) is None:
            report.warnings.append(f"Unknown hindrance: {name}")

    # Edges
    slots = available_edges(character, catalog)
    if slots.balance < 0:
        report.errors.append(f"Too many edges selected: {slots.used}/{slots.total}")
    for name in character.edges:
        edge = catalog.get_edge(name)
        if edge is None:
            report.warnings.append(f"Unknown edge: {name}")
            continue
        for reason in unmet_edge_requirements(character, catalog, name):
            report.warnings.append(f"{name}: {reason}")

    # Conflicts, each pair reported once
    reported: set[frozenset[str]] = set()
    for name in character.selection_names():
        conflicts = [
            other for other in conflicting_selections(character, catalog, name)
            if frozenset((name, other)) not in reported
        ]
        if conflicts:
            reported.update(frozenset((name, other)) for other in conflicts)
            report.errors.append(f"{name} conflicts with: {', '.join(conflicts)}")

    return report
