"""Tests for character save files."""

import json

import pytest

from swade_builder.engine.pools import attribute_pool, available_edges, skill_pool
from swade_builder.export.character_json import (
    bundle_to_dict,
    character_from_dict,
    character_to_dict,
    characters_from_bundle,
    dumps,
    loads,
)
from swade_builder.models.catalog import Catalog
from swade_builder.models.character import Character, HindranceSelection
from swade_builder.models.derived_stats import compute_stats


@pytest.fixture(scope="module")
def catalog() -> Catalog:
    return Catalog.defaults()


def _sample() -> Character:
    char = Character(name="Mira", concept="Ship's doctor", ancestry="Human")
    char.attributes.update(smarts=8, vigor=6)
    char.skills.update({"Healing": 8, "Notice": 6, "Fighting": 4})
    char.custom_skills["Xenobiology"] = "smarts"
    char.custom_skill_dates["Xenobiology"] = "2026-01-02T03:04:05+00:00"
    char.skills["Xenobiology"] = 6
    char.hindrances["Small"] = HindranceSelection("Small", "minor", 1)
    char.hindrances["Heroic"] = HindranceSelection("Heroic", "major", 2)
    char.edges.extend(["Healer", "Brawny"])
    char.notes = "Owes the captain money."
    return char


def _minimal() -> dict:
    return {
        "name": "", "concept": "", "ancestry": "Human",
        "attributes": {"agility": 4, "smarts": 4, "spirit": 4, "strength": 4, "vigor": 4},
        "skills": {}, "hindrances": [], "edges": [],
    }


class TestToDict:
    def test_shape(self):
        data = character_to_dict(_sample())
        assert data["customSkills"] == {
            "Xenobiology": {"attribute": "smarts", "addedDate": "2026-01-02T03:04:05+00:00"}
        }
        assert data["hindrances"] == [
            {"name": "Small", "type": "minor", "points": 1},
            {"name": "Heroic", "type": "major", "points": 2},
        ]
        assert data["edges"] == ["Healer", "Brawny"]
        assert data["specialAbilities"] == ""
        assert data["version"] == "2.0"
        assert {"createdDate", "lastModified"} <= data.keys()

    def test_untrained_skills_omitted(self):
        char = Character(skills={"Notice": 0, "Stealth": 4})
        assert character_to_dict(char)["skills"] == {"Stealth": 4}


class TestRoundTrip:
    def test_character_survives(self):
        original = _sample()
        assert loads(dumps(original)) == original

    def test_pools_and_stats_survive(self, catalog):
        original = _sample()
        restored = loads(dumps(original))
        assert attribute_pool(restored, catalog) == attribute_pool(original, catalog)
        assert skill_pool(restored, catalog) == skill_pool(original, catalog)
        assert available_edges(restored, catalog) == available_edges(original, catalog)
        assert compute_stats(restored, catalog) == compute_stats(original, catalog)

    def test_dumps_is_json(self):
        assert json.loads(dumps(_sample(), indent=None))["name"] == "Mira"


class TestFromDict:
    def test_minimal(self):
        char = character_from_dict(_minimal())
        assert char.ancestry == "Human"
        assert char.attributes["vigor"] == 4
        assert char.custom_skills == {}

    @pytest.mark.parametrize("field", ["name", "concept", "ancestry", "attributes",
                                       "skills", "hindrances", "edges"])
    def test_missing_required_field(self, field):
        data = _minimal()
        del data[field]
        with pytest.raises(ValueError, match=f"Missing required field: {field}"):
            character_from_dict(data)

    def test_attribute_must_be_number(self):
        data = _minimal()
        data["attributes"]["vigor"] = "d6"
        with pytest.raises(ValueError, match="must be a number"):
            character_from_dict(data)

    def test_attribute_must_be_a_die(self):
        data = _minimal()
        data["attributes"]["vigor"] = 7
        with pytest.raises(ValueError, match="Attribute 'vigor'"):
            character_from_dict(data)

    def test_skill_rank_checked(self):
        data = _minimal()
        data["skills"] = {"Notice": 2}
        with pytest.raises(ValueError, match="Skill 'Notice'"):
            character_from_dict(data)

    def test_hindrances_must_be_array(self):
        data = _minimal()
        data["hindrances"] = {"Small": 1}
        with pytest.raises(ValueError, match="Hindrances must be an array"):
            character_from_dict(data)

    def test_edges_must_be_array(self):
        data = _minimal()
        data["edges"] = "Luck"
        with pytest.raises(ValueError, match="Edges must be an array"):
            character_from_dict(data)

    def test_bad_hindrance_type(self):
        data = _minimal()
        data["hindrances"] = [{"name": "Small", "type": "tiny", "points": 1}]
        with pytest.raises(ValueError, match="expected 'minor' or 'major'"):
            character_from_dict(data)

    def test_major_hindrance_points_forced_to_two(self):
        data = _minimal()
        data["hindrances"] = [{"name": "Heroic", "type": "major", "points": 5}]
        assert character_from_dict(data).hindrances["Heroic"].points == 2

    def test_legacy_custom_skill_shape(self):
        data = _minimal()
        data["customSkills"] = {"Xenobiology": "smarts"}
        assert character_from_dict(data).custom_skills == {"Xenobiology": "smarts"}

    def test_custom_skill_attribute_checked(self):
        data = _minimal()
        data["customSkills"] = {"Xenobiology": {"attribute": "luck"}}
        with pytest.raises(ValueError, match="unknown attribute"):
            character_from_dict(data)

    def test_duplicate_edges_collapsed(self):
        data = _minimal()
        data["edges"] = ["Luck", "Luck"]
        assert character_from_dict(data).edges == ["Luck"]

    def test_integral_floats_accepted(self):
        data = _minimal()
        data["attributes"]["smarts"] = 8.0
        assert character_from_dict(data).attributes["smarts"] == 8

    def test_malformed_json(self):
        with pytest.raises(ValueError):
            loads("{not json")

    def test_not_an_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            character_from_dict(["Mira"])


class TestBundle:
    def test_round_trip(self):
        bundle = bundle_to_dict([_sample(), Character(name="Bo")])
        assert bundle["metadata"]["count"] == 2
        assert bundle["metadata"]["version"] == "2.0"
        restored = characters_from_bundle(bundle)
        assert [c.name for c in restored] == ["Mira", "Bo"]

    def test_missing_characters(self):
        with pytest.raises(ValueError, match="'characters' array"):
            characters_from_bundle({"metadata": {}})
