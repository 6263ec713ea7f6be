"""Read-only reference data: skills, hindrances, edges, ancestries, rules.

The host loads the catalog once (from its JSON assets or Catalog.defaults())
and passes it by reference into every engine call. Nothing in the engine
mutates it.

Catalog.from_dict() accepts the creator's asset bundle shape:

    {
        "skills": {"skills": {...}, "coreSkills": [...]},
        "hindrances": {"hindrances": {...}},
        "edges": {"edges": {...}, "edgeCategories": {...}},
        "config": {"gameRules": {...}, "ancestries": {...},
                   "derivedStats": {...}, "startingFunds": {...}},
        "exclusions": {"Luck": ["Bad Luck"], ...},      # optional
    }

Edge requirement strings are parsed here, once, into RequirementSets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from swade_builder.models.constants import (
    ATTRIBUTES,
    DEFAULT_LINKED_ATTRIBUTE,
    HINDRANCE_SEVERITIES,
)
from swade_builder.models.game_rules import (
    DerivedStatsConfig,
    GameRules,
    StartingFundsConfig,
    hindrance_points_for,
)
from swade_builder.models.requirements import RequirementSet
from swade_builder.parser.requirement_parser import RequirementParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SkillDef:
    name: str
    attribute: str
    description: str = ""
    is_core: bool = False


@dataclass(frozen=True, slots=True)
class HindranceDef:
    name: str
    severity: str        # "minor" | "major"
    points: int          # 1 or 2; major is always 2
    description: str = ""


@dataclass(frozen=True, slots=True)
class EdgeDef:
    name: str
    category: str                     # "background", "combat", ...
    requirements_text: str = ""
    description: str = ""
    requirements: RequirementSet = field(default_factory=RequirementSet)


@dataclass(frozen=True, slots=True)
class AncestryDef:
    name: str
    traits: tuple[str, ...] = ()
    skill_points: int = 0     # bonus skill points
    edges: int = 0            # bonus edge slots
    description: str = ""


class ExclusionTable:
    """Symmetric mutual-exclusion relation between selection names.

    Source tables may list a pair in one direction only; lookups always
    see both directions.
    """

    __slots__ = ("_pairs",)

    def __init__(self, table: Mapping[str, Iterable[str]] | None = None) -> None:
        self._pairs: dict[str, set[str]] = {}
        for name, others in (table or {}).items():
            for other in others:
                if other == name:
                    continue
                self._pairs.setdefault(name, set()).add(other)
                self._pairs.setdefault(other, set()).add(name)

    def conflicts_of(self, name: str) -> frozenset[str]:
        return frozenset(self._pairs.get(name, ()))

    def conflicts(self, a: str, b: str) -> bool:
        return b in self._pairs.get(a, ())

    def as_dict(self) -> dict[str, list[str]]:
        return {name: sorted(others) for name, others in sorted(self._pairs.items())}


# Incompatible pairs across hindrances and edges.
DEFAULT_EXCLUSIONS: dict[str, list[str]] = {
    "Luck": ["Bad Luck"],
    "Bad Luck": ["Luck", "Great Luck"],
    "Great Luck": ["Bad Luck"],
    "Rich": ["Poverty"],
    "Filthy Rich": ["Poverty"],
    "Poverty": ["Rich", "Filthy Rich"],
    "Young": ["Elderly"],
    "Elderly": ["Young"],
    "Slow (Minor)": ["Slow (Major)", "Fleet-Footed"],
    "Slow (Major)": ["Slow (Minor)", "Fleet-Footed"],
    "Quick": ["Hesitant"],
    "Hesitant": ["Quick"],
    "Pacifist (Minor)": ["Bloodthirsty", "Assassin"],
    "Pacifist (Major)": ["Bloodthirsty", "Assassin", "Pacifist (Minor)"],
    "Bloodthirsty": ["Pacifist (Minor)", "Pacifist (Major)"],
}


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Unwrap {"skills": {"skills": {...}}} as well as {"skills": {...}}."""
    block = data.get(key) or {}
    inner = block.get(key) if isinstance(block, Mapping) else None
    return inner if isinstance(inner, Mapping) else block


@dataclass(frozen=True, slots=True)
class Catalog:
    """Everything the engine needs to know about the ruleset."""

    skills: dict[str, SkillDef] = field(default_factory=dict)
    hindrances: dict[str, HindranceDef] = field(default_factory=dict)
    edges: dict[str, EdgeDef] = field(default_factory=dict)
    ancestries: dict[str, AncestryDef] = field(default_factory=dict)
    edge_categories: dict[str, str] = field(default_factory=dict)
    rules: GameRules = field(default_factory=GameRules)
    derived: DerivedStatsConfig = field(default_factory=DerivedStatsConfig)
    funds: StartingFundsConfig = field(default_factory=StartingFundsConfig)
    exclusions: ExclusionTable = field(default_factory=lambda: ExclusionTable(DEFAULT_EXCLUSIONS))
    default_ancestry: str = "Human"

    # --- Construction --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Catalog:
        """Build a catalog from the creator's asset bundle.

        Raises ValueError for descriptors the engine can't work with (unknown
        linked attribute, bad hindrance severity).
        """
        config = data.get("config") or {}

        core = set(data.get("skills", {}).get("coreSkills", []))
        skills: dict[str, SkillDef] = {}
        for name, desc in _section(data, "skills").items():
            attribute = str(desc.get("attribute", "")).lower()
            if attribute not in ATTRIBUTES:
                raise ValueError(f"Skill {name!r} links unknown attribute {attribute!r}")
            skills[name] = SkillDef(
                name=name,
                attribute=attribute,
                description=desc.get("description", ""),
                is_core=name in core,
            )

        hindrances: dict[str, HindranceDef] = {}
        for name, desc in _section(data, "hindrances").items():
            severity = str(desc.get("type", "")).lower()
            if severity not in HINDRANCE_SEVERITIES:
                raise ValueError(
                    f"Hindrance {name!r} has severity {severity!r}, "
                    "expected 'minor' or 'major'"
                )
            hindrances[name] = HindranceDef(
                name=name,
                severity=severity,
                points=hindrance_points_for(severity, desc.get("points")),
                description=desc.get("description", ""),
            )

        raw_edges = _section(data, "edges")
        parser = RequirementParser(skills.keys(), raw_edges.keys())
        edges: dict[str, EdgeDef] = {}
        for name, desc in raw_edges.items():
            text = desc.get("requirements", "") or ""
            edges[name] = EdgeDef(
                name=name,
                category=desc.get("type", ""),
                requirements_text=text,
                description=desc.get("description", ""),
                requirements=parser.parse(text),
            )

        ancestries: dict[str, AncestryDef] = {}
        for name, desc in (config.get("ancestries") or {}).items():
            bonuses = desc.get("bonuses") or {}
            ancestries[name] = AncestryDef(
                name=name,
                traits=tuple(desc.get("traits", ())),
                skill_points=int(bonuses.get("skillPoints", 0)),
                edges=int(bonuses.get("edges", 0)),
                description=desc.get("description", ""),
            )

        exclusions = data.get("exclusions")
        default_ancestry = config.get("defaultAncestry", "Human")
        if ancestries and default_ancestry not in ancestries:
            default_ancestry = next(iter(ancestries))

        return cls(
            skills=skills,
            hindrances=hindrances,
            edges=edges,
            ancestries=ancestries,
            edge_categories=dict(data.get("edges", {}).get("edgeCategories", {})),
            rules=GameRules.from_dict(config.get("gameRules") or {}),
            derived=DerivedStatsConfig.from_dict(config.get("derivedStats") or {}),
            funds=StartingFundsConfig.from_dict(config.get("startingFunds") or {}),
            exclusions=ExclusionTable(
                DEFAULT_EXCLUSIONS if exclusions is None else exclusions
            ),
            default_ancestry=default_ancestry,
        )

    @classmethod
    def defaults(cls) -> Catalog:
        """Return the bundled core-rules catalog; usable without asset files."""
        from swade_builder.models.core_catalog import CORE_CATALOG

        return cls.from_dict(CORE_CATALOG)

    # --- Lookups -------------------------------------------------------------

    @property
    def core_skills(self) -> list[str]:
        return [name for name, skill in self.skills.items() if skill.is_core]

    def get_skill(self, name: str) -> SkillDef | None:
        return self.skills.get(name)

    def get_hindrance(self, name: str) -> HindranceDef | None:
        return self.hindrances.get(name)

    def get_edge(self, name: str) -> EdgeDef | None:
        return self.edges.get(name)

    def get_ancestry(self, name: str) -> AncestryDef | None:
        return self.ancestries.get(name)

    def ancestry_for(self, name: str) -> AncestryDef:
        """Return the named ancestry, or a bare one with no traits or grants."""
        ancestry = self.ancestries.get(name)
        if ancestry is None:
            logger.debug("Unknown ancestry %r; using no traits or bonuses", name)
            return AncestryDef(name=name)
        return ancestry

    def linked_attribute(self, skill_name: str, custom_skills: Mapping[str, str]) -> str:
        """Return the attribute governing *skill_name*.

        Custom skills shadow nothing (the builder refuses that), so they are
        checked first. Unknown skills default to Smarts.
        """
        if skill_name in custom_skills:
            return custom_skills[skill_name]
        skill = self.skills.get(skill_name)
        return skill.attribute if skill else DEFAULT_LINKED_ATTRIBUTE

    def hindrances_by_severity(self, severity: str) -> list[HindranceDef]:
        return sorted(
            (h for h in self.hindrances.values() if h.severity == severity),
            key=lambda h: h.name,
        )

    def edges_by_category(self, category: str) -> list[EdgeDef]:
        return sorted(
            (e for e in self.edges.values() if e.category == category),
            key=lambda e: e.name,
        )

    def category_label(self, category: str) -> str:
        return self.edge_categories.get(category, category)
