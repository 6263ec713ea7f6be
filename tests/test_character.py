"""Tests for the Character model."""

from swade_builder.models.character import CHARACTER_FORMAT_VERSION, Character, HindranceSelection


def test_defaults():
    char = Character()
    assert char.attributes == {
        "agility": 4, "smarts": 4, "spirit": 4, "strength": 4, "vigor": 4,
    }
    assert char.version == CHARACTER_FORMAT_VERSION
    assert char.created and char.last_modified


def test_default_containers_are_not_shared():
    a, b = Character(), Character()
    a.edges.append("Luck")
    a.attributes["vigor"] = 8
    assert b.edges == []
    assert b.attribute("vigor") == 4


def test_untrained_skill_reads_zero():
    char = Character(skills={"Notice": 6})
    assert char.skill_rank("Notice") == 6
    assert char.skill_rank("Stealth") == 0


def test_trained_skills_skips_zero_entries():
    char = Character(skills={"Notice": 0, "Stealth": 4, "Fighting": 8})
    assert char.trained_skills() == {"Stealth": 4, "Fighting": 8}


def test_selection_names_hindrances_first():
    char = Character(edges=["Luck"])
    char.hindrances["Loyal"] = HindranceSelection("Loyal", "minor", 1)
    assert char.selection_names() == ["Loyal", "Luck"]
    assert char.has_hindrance("Loyal") and char.has_edge("Luck")


def test_touch_updates_last_modified():
    char = Character(last_modified="2000-01-01T00:00:00+00:00")
    char.touch()
    assert char.last_modified != "2000-01-01T00:00:00+00:00"
    assert char.last_modified.endswith("+00:00")
