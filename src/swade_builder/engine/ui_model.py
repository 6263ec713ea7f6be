"""UI-facing adapter over CharacterBuilder for the creator's screens.

This module contains no GUI code. It provides stable, testable row shapes
(attributes, skills, hindrances, edges) that any toolkit can render, plus
a flat list of current selections and validation diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from swade_builder.engine import pools
from swade_builder.engine.builder import CharacterBuilder
from swade_builder.engine.costs import (
    attribute_refund,
    attribute_step_cost,
    is_skill_expensive,
    next_rank,
    previous_rank,
    skill_refund,
)
from swade_builder.engine.validator import can_select_edge, check_hindrance, validate_character
from swade_builder.models.catalog import Catalog
from swade_builder.models.character import Character
from swade_builder.models.constants import (
    ATTRIBUTE_DESCRIPTIONS,
    ATTRIBUTE_LABELS,
    ATTRIBUTE_NAMES,
    die_label,
)

EntityKind = Literal["skill", "custom_skill", "hindrance", "edge"]


@dataclass(frozen=True, slots=True)
class AttributeRow:
    attribute: str
    label: str
    description: str
    rank: int
    die: str
    next_cost: int | None       # None at d12
    refund: int                 # 0 at d4
    can_increase: bool


@dataclass(frozen=True, slots=True)
class SkillRow:
    """One skill line: rank, linked attribute, and what the next step costs."""

    name: str
    attribute: str
    rank: int
    die: str
    next_cost: int | None       # None at d12
    refund: int                 # 0 when untrained
    expensive: bool             # next step costs 2
    is_core: bool
    is_custom: bool
    can_increase: bool
    description: str = ""


@dataclass(frozen=True, slots=True)
class HindranceOption:
    name: str
    severity: str
    points: int
    description: str
    selected: bool
    available: bool
    reason: str = ""


@dataclass(frozen=True, slots=True)
class EdgeOption:
    name: str
    category: str
    category_label: str
    requirements: str
    description: str
    selected: bool
    available: bool
    reason: str = ""
    code: str = "ok"


@dataclass(frozen=True, slots=True)
class SelectedEntity:
    """A current selection, with enough info to remove it."""

    kind: EntityKind
    name: str
    label: str


@dataclass(frozen=True, slots=True)
class UiDiagnostic:
    severity: Literal["warning", "error"]
    code: str
    message: str


def available_edges_for_character(character: Character, catalog: Catalog) -> list[str]:
    """Names of unselected edges the character could take right now."""
    return [
        name
        for name in sorted(catalog.edges)
        if not character.has_edge(name) and can_select_edge(character, catalog, name).valid
    ]


class CharacterUiModel:
    """Read/write adapter for UI operations over a CharacterBuilder."""

    __slots__ = ("_builder",)

    def __init__(self, builder: CharacterBuilder) -> None:
        self._builder = builder

    @property
    def builder(self) -> CharacterBuilder:
        return self._builder

    # --- Rows --------------------------------------------------------------

    def attribute_rows(self) -> list[AttributeRow]:
        character = self._builder.character
        catalog = self._builder.catalog
        rows: list[AttributeRow] = []
        die_types = catalog.rules.die_types
        for attr in ATTRIBUTE_NAMES:
            rank = character.attribute(attr)
            up = next_rank(rank, die_types=die_types)
            down = previous_rank(rank, die_types=die_types)
            rows.append(AttributeRow(
                attribute=attr,
                label=ATTRIBUTE_LABELS[attr],
                description=ATTRIBUTE_DESCRIPTIONS[attr],
                rank=rank,
                die=die_label(rank),
                next_cost=attribute_step_cost(rank, up, die_types) if up is not None else None,
                refund=attribute_refund(rank, down, die_types) if down is not None else 0,
                can_increase=pools.can_afford_attribute_increase(character, catalog, attr),
            ))
        return rows

    def skill_rows(self, query: str = "") -> list[SkillRow]:
        """Catalog skills then custom skills, optionally filtered by name."""
        character = self._builder.character
        catalog = self._builder.catalog
        names = sorted(catalog.skills) + sorted(character.custom_skills)
        q = query.strip().lower()

        rows: list[SkillRow] = []
        for name in names:
            if q and q not in name.lower():
                continue
            skill = catalog.get_skill(name)
            linked = catalog.linked_attribute(name, character.custom_skills)
            linked_value = character.attribute(linked)
            rank = character.skill_rank(name)
            down = previous_rank(rank, skill=True, die_types=catalog.rules.die_types)
            rows.append(SkillRow(
                name=name,
                attribute=linked,
                rank=rank,
                die=die_label(rank),
                next_cost=pools.skill_increase_cost(character, catalog, name),
                refund=(
                    skill_refund(rank, down, linked_value, catalog.rules.die_types)
                    if down is not None else 0
                ),
                expensive=is_skill_expensive(rank, linked_value),
                is_core=skill.is_core if skill else False,
                is_custom=name in character.custom_skills,
                can_increase=pools.can_afford_skill_increase(character, catalog, name),
                description=skill.description if skill else "",
            ))
        return rows

    def hindrance_options(self, severity: str | None = None) -> list[HindranceOption]:
        character = self._builder.character
        catalog = self._builder.catalog
        options: list[HindranceOption] = []
        for hindrance in sorted(catalog.hindrances.values(), key=lambda h: h.name):
            if severity is not None and hindrance.severity != severity:
                continue
            selected = character.has_hindrance(hindrance.name)
            check = check_hindrance(character, catalog, hindrance.name)
            options.append(HindranceOption(
                name=hindrance.name,
                severity=hindrance.severity,
                points=hindrance.points,
                description=hindrance.description,
                selected=selected,
                available=selected or check.valid,
                reason="" if selected else check.reason,
            ))
        return options

    def edge_options(self, category: str | None = None) -> list[EdgeOption]:
        character = self._builder.character
        catalog = self._builder.catalog
        options: list[EdgeOption] = []
        for edge in sorted(catalog.edges.values(), key=lambda e: (e.category, e.name)):
            if category is not None and edge.category != category:
                continue
            check = can_select_edge(character, catalog, edge.name)
            options.append(EdgeOption(
                name=edge.name,
                category=edge.category,
                category_label=catalog.category_label(edge.category),
                requirements=edge.requirements_text,
                description=edge.description,
                selected=character.has_edge(edge.name),
                available=check.valid,
                reason=check.reason,
                code=check.code,
            ))
        return options

    # --- Selections --------------------------------------------------------

    def selected_entities(self) -> list[SelectedEntity]:
        """Return all trained skills, custom skills, hindrances, and edges."""
        character = self._builder.character
        result: list[SelectedEntity] = []

        for name, rank in sorted(character.trained_skills().items()):
            result.append(SelectedEntity(
                kind="skill", name=name, label=f"{name} {die_label(rank)}"
            ))

        for name, attr in sorted(character.custom_skills.items()):
            result.append(SelectedEntity(
                kind="custom_skill",
                name=name,
                label=f"Custom skill: {name} ({ATTRIBUTE_LABELS.get(attr, attr)})",
            ))

        for selection in character.hindrances.values():
            result.append(SelectedEntity(
                kind="hindrance",
                name=selection.name,
                label=f"{selection.name} ({selection.severity.capitalize()})",
            ))

        for name in character.edges:
            result.append(SelectedEntity(kind="edge", name=name, label=name))

        return result

    def remove_selected_entity(self, entity: SelectedEntity) -> bool:
        """Remove a selection in-place. Returns False if nothing was removed."""
        character = self._builder.character
        if entity.kind == "skill":
            if character.skill_rank(entity.name) == 0:
                return False
            self._builder.set_skill(entity.name, 0)
            return True
        if entity.kind == "custom_skill":
            if entity.name not in character.custom_skills:
                return False
            self._builder.remove_custom_skill(entity.name)
            return True
        if entity.kind == "hindrance":
            return self._builder.remove_hindrance(entity.name)
        if entity.kind == "edge":
            return self._builder.remove_edge(entity.name)
        return False

    def diagnostics(self) -> list[UiDiagnostic]:
        """Validation errors then warnings, as UI messages."""
        report = validate_character(self._builder.character, self._builder.catalog)
        diagnostics = [
            UiDiagnostic(severity="error", code="validation_error", message=msg)
            for msg in report.errors
        ]
        diagnostics.extend(
            UiDiagnostic(severity="warning", code="validation_warning", message=msg)
            for msg in report.warnings
        )
        return diagnostics
