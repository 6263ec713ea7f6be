"""Character builder: the mutation layer over a Character.

Each builder owns one Character and borrows one Catalog. Every operation is
atomic: it is fully checked before anything changes, and a successful
change pushes the previous snapshot onto a bounded undo history.

Two failure modes, as everywhere in the engine:

  - Rule violations (not enough points, unmet requirements, conflicts) are
    returned as a SelectionCheck and leave the character untouched.
  - Out-of-contract input (unknown names, malformed ranks) raises
    ValueError before any change.

set_attribute() and set_skill() only check that the rank is well formed,
so a host restoring a sheet can represent over-budget states. Validation
reports those.
"""

from __future__ import annotations

import copy
import logging
from collections import deque

from swade_builder.engine import pools
from swade_builder.engine.costs import attribute_step_cost, next_rank, previous_rank
from swade_builder.engine.pools import EdgeSlots, HindranceBonuses, HindrancePoints, PoolSummary
from swade_builder.engine.validator import (
    OK,
    SelectionCheck,
    ValidationReport,
    can_select_edge,
    check_hindrance,
    validate_character,
)
from swade_builder.models.catalog import Catalog
from swade_builder.models.character import Character, HindranceSelection, utc_timestamp
from swade_builder.models.constants import ATTRIBUTE_LABELS, ATTRIBUTES, UNTRAINED
from swade_builder.models.derived_stats import CharacterStats, compute_stats, starting_funds

logger = logging.getLogger(__name__)

MAX_UNDO_HISTORY = 50

# Sheet fields set_details() may change.
_DETAIL_FIELDS = frozenset(
    {"name", "concept", "equipment", "background", "special_abilities", "notes"}
)


class CharacterBuilder:
    """Applies creation choices to a Character under the catalog's rules.

    The catalog is never modified. character returns a deep copy, so
    callers can't bypass the checks by mutating it.
    """

    __slots__ = ("_catalog", "_character", "_history")

    def __init__(self, catalog: Catalog, character: Character | None = None) -> None:
        self._catalog = catalog
        self._character = (
            copy.deepcopy(character) if character is not None else self._blank_character()
        )
        self._history: deque[Character] = deque(maxlen=MAX_UNDO_HISTORY)
        if catalog.ancestries and catalog.get_ancestry(self._character.ancestry) is None:
            logger.warning(
                "Unknown ancestry %r; using no traits or bonuses", self._character.ancestry
            )

    # --- Factories ---------------------------------------------------------

    @classmethod
    def new_character(cls, catalog: Catalog) -> CharacterBuilder:
        """Create a builder holding a fresh Novice character."""
        return cls(catalog)

    def _blank_character(self) -> Character:
        character = Character(ancestry=self._catalog.default_ancestry)
        floor = self._catalog.rules.min_die
        character.attributes = {name: floor for name in character.attributes}
        return character

    # --- State -------------------------------------------------------------

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def character(self) -> Character:
        """Return a deep copy of the current character."""
        return copy.deepcopy(self._character)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def history_size(self) -> int:
        return len(self._history)

    def _save_snapshot(self) -> None:
        self._history.append(copy.deepcopy(self._character))

    def _applied(self, action: str, *args: object) -> None:
        self._character.touch()
        logger.debug("%s %s applied", action, args)

    def _rejected(self, action: str, check: SelectionCheck, *args: object) -> SelectionCheck:
        logger.debug("%s %s rejected (%s): %s", action, args, check.code, check.reason)
        return check

    def undo(self) -> bool:
        """Restore the snapshot taken before the last change. False if none."""
        if not self._history:
            return False
        self._character = self._history.pop()
        logger.debug("undo applied, %d snapshots left", len(self._history))
        return True

    def reset(self) -> None:
        """Replace the character with a fresh one. Undoable."""
        self._save_snapshot()
        self._character = self._blank_character()
        logger.debug("reset applied")

    # --- Input checks ------------------------------------------------------

    @staticmethod
    def _check_attribute_name(attribute: str) -> None:
        if attribute not in ATTRIBUTES:
            raise ValueError(f"Unknown attribute: {attribute!r}")

    def _check_skill_name(self, skill: str) -> None:
        if self._catalog.get_skill(skill) is None and skill not in self._character.custom_skills:
            raise ValueError(f"Unknown skill: {skill!r}")

    # --- Attributes --------------------------------------------------------

    def increment_attribute(self, attribute: str) -> SelectionCheck:
        """Raise an attribute one die step if points allow."""
        self._check_attribute_name(attribute)
        rules = self._catalog.rules
        label = ATTRIBUTE_LABELS[attribute]
        current = self._character.attribute(attribute)
        target = next_rank(current, die_types=rules.die_types)
        if target is None:
            return self._rejected(
                "increment_attribute",
                SelectionCheck(False, f"{label} is already at d{rules.max_die}", "max_rank"),
                attribute,
            )
        cost = attribute_step_cost(current, target, rules.die_types)
        balance = pools.attribute_points_balance(self._character, self._catalog)
        if balance < cost:
            return self._rejected(
                "increment_attribute",
                SelectionCheck(
                    False,
                    f"Not enough attribute points (need {cost}, have {max(0, balance)})",
                    "attribute_points",
                ),
                attribute,
            )
        self._save_snapshot()
        self._character.attributes[attribute] = target
        self._applied("increment_attribute", attribute, target)
        return OK

    def decrement_attribute(self, attribute: str) -> SelectionCheck:
        """Lower an attribute one die step, refunding its point."""
        self._check_attribute_name(attribute)
        rules = self._catalog.rules
        current = self._character.attribute(attribute)
        target = previous_rank(current, die_types=rules.die_types)
        if target is None:
            return self._rejected(
                "decrement_attribute",
                SelectionCheck(
                    False,
                    f"{ATTRIBUTE_LABELS[attribute]} is already at d{rules.min_die}",
                    "min_rank",
                ),
                attribute,
            )
        self._save_snapshot()
        self._character.attributes[attribute] = target
        self._applied("decrement_attribute", attribute, target)
        return OK

    def set_attribute(self, attribute: str, rank: int) -> None:
        """Set an attribute directly. Only the rank itself is checked."""
        self._check_attribute_name(attribute)
        die_types = self._catalog.rules.die_types
        if rank not in die_types:
            raise ValueError(f"Attribute rank must be one of {die_types}, got {rank!r}")
        self._save_snapshot()
        self._character.attributes[attribute] = rank
        self._applied("set_attribute", attribute, rank)

    # --- Skills ------------------------------------------------------------

    def increment_skill(self, skill: str) -> SelectionCheck:
        """Raise a skill one step (untrained goes to d4) if points allow."""
        self._check_skill_name(skill)
        current = self._character.skill_rank(skill)
        cost = pools.skill_increase_cost(self._character, self._catalog, skill)
        if cost is None:
            return self._rejected(
                "increment_skill",
                SelectionCheck(
                    False, f"{skill} is already at d{self._catalog.rules.max_die}", "max_rank"
                ),
                skill,
            )
        balance = pools.skill_points_balance(self._character, self._catalog)
        if balance < cost:
            return self._rejected(
                "increment_skill",
                SelectionCheck(
                    False,
                    f"Not enough skill points (need {cost}, have {max(0, balance)})",
                    "skill_points",
                ),
                skill,
            )
        target = next_rank(current, skill=True, die_types=self._catalog.rules.die_types)
        self._save_snapshot()
        self._character.skills[skill] = target
        self._applied("increment_skill", skill, target)
        return OK

    def decrement_skill(self, skill: str) -> SelectionCheck:
        """Lower a skill one step; d4 goes back to untrained."""
        self._check_skill_name(skill)
        current = self._character.skill_rank(skill)
        if current <= UNTRAINED:
            return self._rejected(
                "decrement_skill",
                SelectionCheck(False, f"{skill} is untrained", "min_rank"),
                skill,
            )
        target = previous_rank(current, skill=True, die_types=self._catalog.rules.die_types)
        self._save_snapshot()
        self._store_skill(skill, target)
        self._applied("decrement_skill", skill, target)
        return OK

    def set_skill(self, skill: str, rank: int) -> None:
        """Set a skill directly. Only the rank itself is checked."""
        self._check_skill_name(skill)
        ranks = self._catalog.rules.skill_ranks
        if rank not in ranks:
            raise ValueError(f"Skill rank must be one of {ranks}, got {rank!r}")
        self._save_snapshot()
        self._store_skill(skill, rank)
        self._applied("set_skill", skill, rank)

    def _store_skill(self, skill: str, rank: int) -> None:
        if rank == UNTRAINED:
            self._character.skills.pop(skill, None)
        else:
            self._character.skills[skill] = rank

    def add_custom_skill(self, name: str, attribute: str) -> None:
        """Register a setting-specific skill linked to *attribute*."""
        name = name.strip()
        if not name:
            raise ValueError("Custom skill name must not be empty")
        self._check_attribute_name(attribute)
        if self._catalog.get_skill(name) is not None:
            raise ValueError(f"{name!r} is a core skill and can't be redefined")
        if name in self._character.custom_skills:
            raise ValueError(f"Custom skill {name!r} already exists")
        self._save_snapshot()
        self._character.custom_skills[name] = attribute
        self._character.custom_skill_dates[name] = utc_timestamp()
        self._applied("add_custom_skill", name, attribute)

    def remove_custom_skill(self, name: str) -> None:
        """Unregister a custom skill and drop any rank it had."""
        if name not in self._character.custom_skills:
            raise ValueError(f"Unknown custom skill: {name!r}")
        self._save_snapshot()
        del self._character.custom_skills[name]
        self._character.custom_skill_dates.pop(name, None)
        self._character.skills.pop(name, None)
        self._applied("remove_custom_skill", name)

    # --- Hindrances --------------------------------------------------------

    def add_hindrance(self, name: str) -> SelectionCheck:
        """Take a hindrance if caps and conflicts allow.

        Taking a hindrance that is already selected changes nothing and
        returns the already_selected check.
        """
        check = check_hindrance(self._character, self._catalog, name)
        if not check.valid:
            return self._rejected("add_hindrance", check, name)
        hindrance = self._catalog.hindrances[name]
        self._save_snapshot()
        self._character.hindrances[name] = HindranceSelection(
            name=name, severity=hindrance.severity, points=hindrance.points
        )
        self._applied("add_hindrance", name)
        return OK

    def remove_hindrance(self, name: str) -> bool:
        """Drop a hindrance. Edges it paid for are kept; validation flags them."""
        if name not in self._character.hindrances:
            return False
        self._save_snapshot()
        del self._character.hindrances[name]
        self._applied("remove_hindrance", name)
        return True

    def toggle_hindrance(self, name: str) -> SelectionCheck:
        if self.remove_hindrance(name):
            return OK
        return self.add_hindrance(name)

    # --- Edges -------------------------------------------------------------

    def add_edge(self, name: str) -> SelectionCheck:
        """Take an edge if a slot is free and its requirements hold now."""
        if self._character.has_edge(name):
            check = SelectionCheck(False, f"{name} is already selected", "already_selected")
        else:
            check = can_select_edge(self._character, self._catalog, name)
        if not check.valid:
            return self._rejected("add_edge", check, name)
        self._save_snapshot()
        self._character.edges.append(name)
        self._applied("add_edge", name)
        return OK

    def remove_edge(self, name: str) -> bool:
        """Drop an edge. Edges that required it are kept; validation flags them."""
        if name not in self._character.edges:
            return False
        self._save_snapshot()
        self._character.edges.remove(name)
        self._applied("remove_edge", name)
        return True

    def toggle_edge(self, name: str) -> SelectionCheck:
        if self.remove_edge(name):
            return OK
        return self.add_edge(name)

    # --- Ancestry and sheet text -------------------------------------------

    def set_ancestry(self, name: str) -> None:
        if self._catalog.get_ancestry(name) is None:
            raise ValueError(f"Unknown ancestry: {name!r}")
        self._save_snapshot()
        self._character.ancestry = name
        self._applied("set_ancestry", name)

    def set_details(self, **fields: str) -> None:
        """Update free-text sheet fields (name, concept, notes, ...)."""
        unknown = set(fields) - _DETAIL_FIELDS
        if unknown:
            raise ValueError(f"Unknown character fields: {sorted(unknown)}")
        for key, value in fields.items():
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
        self._save_snapshot()
        for key, value in fields.items():
            setattr(self._character, key, value)
        self._applied("set_details", *sorted(fields))

    # --- Queries -----------------------------------------------------------

    def attribute_pool(self) -> PoolSummary:
        return pools.attribute_pool(self._character, self._catalog)

    def skill_pool(self) -> PoolSummary:
        return pools.skill_pool(self._character, self._catalog)

    def edge_slots(self) -> EdgeSlots:
        return pools.available_edges(self._character, self._catalog)

    def hindrance_points(self) -> HindrancePoints:
        return pools.hindrance_points(self._character)

    def hindrance_bonuses(self) -> HindranceBonuses:
        return pools.hindrance_bonuses(self._character)

    def check_hindrance(self, name: str) -> SelectionCheck:
        return check_hindrance(self._character, self._catalog, name)

    def check_edge(self, name: str) -> SelectionCheck:
        return can_select_edge(self._character, self._catalog, name)

    def stats(self) -> CharacterStats:
        return compute_stats(self._character, self._catalog)

    def starting_funds(self) -> int:
        return starting_funds(self._character, self._catalog)

    def validate(self) -> ValidationReport:
        return validate_character(self._character, self._catalog)
