"""Tests for catalog loading, game-rule config, and exclusion tables."""

import logging

import pytest

from swade_builder.models.catalog import (
    DEFAULT_EXCLUSIONS,
    AncestryDef,
    Catalog,
    ExclusionTable,
)
from swade_builder.models.constants import Rank
from swade_builder.models.game_rules import (
    DerivedStatsConfig,
    GameRules,
    StartingFundsConfig,
    hindrance_points_for,
)
from swade_builder.models.requirements import (
    AttributeRequirement,
    EdgeFamilyRequirement,
    EdgeRequirement,
    RankRequirement,
)


def _bundle(**overrides) -> dict:
    """Minimal asset bundle; keyword args replace top-level sections."""
    data = {
        "skills": {
            "skills": {
                "Fighting": {"attribute": "agility", "description": "Melee"},
                "Notice": {"attribute": "smarts", "description": "Perception"},
            },
            "coreSkills": ["Notice"],
        },
        "hindrances": {
            "hindrances": {
                "Loyal": {"type": "minor", "description": ""},
                "Heroic": {"type": "major", "points": 2, "description": ""},
            }
        },
        "edges": {
            "edges": {
                "Luck": {"type": "background", "requirements": "Novice"},
                "Great Luck": {"type": "background", "requirements": "Novice, Luck"},
            },
            "edgeCategories": {"background": "Background Edges"},
        },
        "config": {
            "gameRules": {"attributePoints": 6},
            "ancestries": {
                "Android": {"traits": ["Armor +2"], "bonuses": {"skillPoints": 2}},
                "Human": {"traits": [], "bonuses": {"edges": 1}},
            },
        },
    }
    data.update(overrides)
    return data


@pytest.fixture(scope="module")
def core() -> Catalog:
    return Catalog.defaults()


class TestFromDict:
    def test_skills(self):
        catalog = Catalog.from_dict(_bundle())
        assert catalog.get_skill("Fighting").attribute == "agility"
        assert catalog.core_skills == ["Notice"]

    def test_hindrance_points(self):
        catalog = Catalog.from_dict(_bundle())
        assert catalog.get_hindrance("Loyal").points == 1
        assert catalog.get_hindrance("Heroic").points == 2

    def test_edge_requirements_parsed_once(self):
        catalog = Catalog.from_dict(_bundle())
        great_luck = catalog.get_edge("Great Luck")
        assert great_luck.requirements_text == "Novice, Luck"
        assert great_luck.requirements.all_requirements() == [
            RankRequirement(Rank.NOVICE),
            EdgeRequirement("Luck"),
        ]

    def test_rules_merge_with_defaults(self):
        rules = Catalog.from_dict(_bundle()).rules
        assert rules.attribute_points == 6
        assert rules.skill_points == 12

    def test_ancestry_bonuses(self):
        catalog = Catalog.from_dict(_bundle())
        android = catalog.get_ancestry("Android")
        assert android == AncestryDef(name="Android", traits=("Armor +2",), skill_points=2)

    def test_default_ancestry(self):
        assert Catalog.from_dict(_bundle()).default_ancestry == "Human"

    def test_default_ancestry_falls_back_to_first(self):
        data = _bundle()
        del data["config"]["ancestries"]["Human"]
        assert Catalog.from_dict(data).default_ancestry == "Android"

    def test_flat_sections_accepted(self):
        data = _bundle(skills={"Fighting": {"attribute": "agility"}})
        assert Catalog.from_dict(data).get_skill("Fighting") is not None

    def test_bad_skill_attribute_raises(self):
        data = _bundle(skills={"skills": {"Juggling": {"attribute": "luck"}}})
        with pytest.raises(ValueError, match="unknown attribute"):
            Catalog.from_dict(data)

    def test_bad_hindrance_severity_raises(self):
        data = _bundle(hindrances={"hindrances": {"Odd": {"type": "medium"}}})
        with pytest.raises(ValueError, match="severity"):
            Catalog.from_dict(data)

    def test_custom_exclusions_replace_defaults(self):
        catalog = Catalog.from_dict(_bundle(exclusions={"Loyal": ["Heroic"]}))
        assert catalog.exclusions.conflicts("Heroic", "Loyal")
        assert not catalog.exclusions.conflicts("Luck", "Bad Luck")

    def test_empty_bundle(self):
        catalog = Catalog.from_dict({})
        assert catalog.skills == {}
        assert catalog.rules == GameRules.defaults()


class TestCoreCatalog:
    def test_core_skills(self, core):
        assert core.core_skills == [
            "Athletics", "Common Knowledge", "Notice", "Persuasion", "Stealth",
        ]

    def test_every_edge_requirement_is_interpreted(self, core):
        for edge in core.edges.values():
            assert edge.requirements.raw == (), edge.name

    def test_family_requirement(self, core):
        reqs = core.get_edge("Power Points").requirements.all_requirements()
        assert EdgeFamilyRequirement("Arcane Background") in reqs

    def test_attribute_requirement(self, core):
        reqs = core.get_edge("Jack-of-all-Trades").requirements.all_requirements()
        assert AttributeRequirement("smarts", 10) in reqs

    def test_linked_attribute(self, core):
        assert core.linked_attribute("Faith", {}) == "spirit"
        assert core.linked_attribute("Mech Piloting", {"Mech Piloting": "agility"}) == "agility"
        assert core.linked_attribute("Unheard Of", {}) == "smarts"

    def test_category_helpers(self, core):
        combat = core.edges_by_category("combat")
        assert combat and all(e.category == "combat" for e in combat)
        assert core.category_label("combat") == "Combat Edges"
        assert core.category_label("homebrew") == "homebrew"

    def test_hindrances_by_severity(self, core):
        majors = core.hindrances_by_severity("major")
        assert all(h.points == 2 for h in majors)

    def test_unknown_ancestry_is_bare_and_quiet(self, core, caplog):
        with caplog.at_level(logging.DEBUG, logger="swade_builder.models.catalog"):
            ancestry = core.ancestry_for("Martian")
            core.ancestry_for("Martian")
        assert ancestry == AncestryDef(name="Martian")
        assert "Martian" in caplog.text
        assert all(r.levelno < logging.WARNING for r in caplog.records)


class TestExclusionTable:
    def test_symmetric_from_one_direction(self):
        table = ExclusionTable({"Luck": ["Bad Luck"]})
        assert table.conflicts("Luck", "Bad Luck")
        assert table.conflicts("Bad Luck", "Luck")

    def test_self_is_never_a_conflict(self):
        table = ExclusionTable({"Luck": ["Luck"]})
        assert not table.conflicts("Luck", "Luck")

    def test_default_table_is_symmetric(self):
        table = ExclusionTable(DEFAULT_EXCLUSIONS)
        for name, others in table.as_dict().items():
            for other in others:
                assert name in table.conflicts_of(other)

    def test_unknown_name(self):
        assert ExclusionTable().conflicts_of("Anything") == frozenset()


class TestGameRuleConfig:
    def test_derived_defaults(self):
        cfg = DerivedStatsConfig()
        assert (cfg.pace_base, cfg.parry_base, cfg.toughness_base) == (6, 2, 2)
        assert cfg.modifier("Fleet-Footed", "pace") == 2
        assert cfg.modifier("Fleet-Footed", "parry") == 0

    def test_parry_formula_constant(self):
        cfg = DerivedStatsConfig.from_dict({"parry": {"formula": "3 + (Fighting / 2)"}})
        assert cfg.parry_base == 3

    def test_extra_modifiers_merge(self):
        cfg = DerivedStatsConfig.from_dict({"modifiers": {"Giant": {"toughness": 2}}})
        assert cfg.modifier("Giant", "toughness") == 2
        assert cfg.modifier("Brawny", "toughness") == 1

    def test_funds_from_config_keys(self):
        funds = StartingFundsConfig.from_dict({"base": 1000, "filthyRich": 5000})
        assert funds.base == 1000
        assert funds.overrides["Filthy Rich"] == 5000
        assert funds.overrides["Poverty"] == 250

    def test_hindrance_points_for(self):
        assert hindrance_points_for("major", 1) == 2
        assert hindrance_points_for("minor") == 1
        with pytest.raises(ValueError, match="severity"):
            hindrance_points_for("huge")

    def test_die_ladder_from_config(self):
        rules = GameRules.from_dict({"dieTypes": [4, 6, 8, 10]})
        assert rules.die_types == (4, 6, 8, 10)
        assert (rules.min_die, rules.max_die) == (4, 10)
        assert rules.skill_ranks == (0, 4, 6, 8, 10)

    @pytest.mark.parametrize("ladder", [[4, 5, 6], [6, 4, 8], [4, 4, 6], [0, 2]])
    def test_bad_die_ladder_raises(self, ladder):
        with pytest.raises(ValueError, match="dieTypes"):
            GameRules.from_dict({"dieTypes": ladder})
