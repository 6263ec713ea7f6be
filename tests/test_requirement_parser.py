"""Tests for parsing free-text edge requirements into typed clauses."""

import pytest

from swade_builder.models.constants import Rank
from swade_builder.models.requirements import (
    AttributeRequirement,
    EdgeFamilyRequirement,
    EdgeRequirement,
    RankRequirement,
    RawRequirement,
    RequirementClause,
    SkillRequirement,
)
from swade_builder.parser.requirement_parser import RequirementParser, parse_requirements


SKILLS = ["Fighting", "Shooting", "Athletics", "Common Knowledge", "Spellcasting", "Faith"]
EDGES = [
    "Luck", "Great Luck", "Block", "Improved Block",
    "Arcane Background (Magic)", "Arcane Background (Miracles)",
]


def _parser() -> RequirementParser:
    return RequirementParser(SKILLS, EDGES)


def _single(text: str):
    """Parse *text* and return the one requirement it should contain."""
    req_set = _parser().parse(text)
    assert len(req_set.clauses) == 1
    assert len(req_set.clauses[0].requirements) == 1
    return req_set.clauses[0].requirements[0]


class TestFragments:
    @pytest.mark.parametrize(
        "text, rank",
        [
            ("Novice", Rank.NOVICE),
            ("Seasoned", Rank.SEASONED),
            ("veteran", Rank.VETERAN),
            ("Heroic+", Rank.HEROIC),
            ("Legendary Rank", Rank.LEGENDARY),
        ],
    )
    def test_rank(self, text, rank):
        assert _single(text) == RankRequirement(rank)

    def test_attribute(self):
        assert _single("Smarts d8+") == AttributeRequirement("smarts", 8)

    def test_attribute_without_plus(self):
        assert _single("Vigor d6") == AttributeRequirement("vigor", 6)

    def test_skill_canonical_casing(self):
        assert _single("fighting d8+") == SkillRequirement("Fighting", 8)

    def test_multi_word_skill(self):
        assert _single("Common Knowledge d6+") == SkillRequirement("Common Knowledge", 6)

    def test_unknown_skill_kept_as_written(self):
        assert _single("Piloting d6+") == SkillRequirement("Piloting", 6)

    def test_exact_edge(self):
        assert _single("Luck") == EdgeRequirement("Luck")

    def test_edge_case_insensitive(self):
        assert _single("improved block") == EdgeRequirement("Improved Block")

    def test_family_with_any_suffix(self):
        assert _single("Arcane Background (any)") == EdgeFamilyRequirement("Arcane Background")

    def test_family_bare_prefix(self):
        assert _single("Arcane Background") == EdgeFamilyRequirement("Arcane Background")

    def test_luck_does_not_match_great_luck_family(self):
        # "Luck" is an exact edge; it must not become a prefix match.
        assert _single("Luck") != EdgeFamilyRequirement("Luck")


class TestClauses:
    def test_and_clauses(self):
        req_set = _parser().parse("Novice, Agility d8+, Fighting d6+")
        assert req_set.clauses == (
            RequirementClause((RankRequirement(Rank.NOVICE),)),
            RequirementClause((AttributeRequirement("agility", 8),)),
            RequirementClause((SkillRequirement("Fighting", 6),)),
        )
        assert req_set.raw == ()

    def test_or_alternatives(self):
        req_set = _parser().parse("Novice, Spellcasting d6+ or Faith d6+")
        assert req_set.clauses[1] == RequirementClause((
            SkillRequirement("Spellcasting", 6),
            SkillRequirement("Faith", 6),
        ))

    def test_semicolon_and_word_and(self):
        req_set = _parser().parse("Strength d6+; Vigor d6+ and Luck")
        assert len(req_set.clauses) == 3

    def test_empty_text(self):
        req_set = _parser().parse("")
        assert req_set.clauses == ()
        assert req_set.all_requirements() == []

    def test_unrecognised_fragment_kept_raw(self):
        req_set = _parser().parse("Novice, must be a dwarf")
        assert len(req_set.clauses) == 1
        assert req_set.raw == (RawRequirement("must be a dwarf"),)

    def test_clause_with_raw_alternative_is_raw(self):
        req_set = _parser().parse("Luck or a kind heart")
        assert req_set.clauses == ()
        assert req_set.raw == (RawRequirement("Luck or a kind heart"),)

    def test_trailing_period(self):
        assert _parser().parse("Seasoned.").clauses == (
            RequirementClause((RankRequirement(Rank.SEASONED),)),
        )

    def test_all_requirements_flattens(self):
        req_set = _parser().parse("Seasoned, Athletics d8+ or Shooting d8+")
        assert len(req_set.all_requirements()) == 3


def test_parse_requirements_wrapper():
    req_set = parse_requirements("Veteran, Block", edge_names=["Block"])
    assert req_set.all_requirements() == [
        RankRequirement(Rank.VETERAN),
        EdgeRequirement("Block"),
    ]


def test_rank_requirement_name():
    assert RankRequirement(Rank.SEASONED).name == "Seasoned"


class TestLooseText:
    def test_annotated_trait_still_enforced(self):
        req_set = _parser().parse("Novice, Fighting d8+ (unarmed)")
        assert req_set.all_requirements() == [
            RankRequirement(Rank.NOVICE),
            SkillRequirement("Fighting", 8),
        ]
        assert req_set.raw == (RawRequirement("unarmed"),)

    def test_prefixed_rank(self):
        req_set = _parser().parse("Rank: Seasoned")
        assert req_set.all_requirements() == [RankRequirement(Rank.SEASONED)]
        assert req_set.raw == ()

    def test_every_trait_in_a_fragment(self):
        req_set = _parser().parse("Seasoned with Smarts d8+ plus Athletics d6+")
        assert req_set.all_requirements() == [
            RankRequirement(Rank.SEASONED),
            AttributeRequirement("smarts", 8),
            SkillRequirement("Athletics", 6),
        ]

    def test_leading_words_dropped_from_trait_name(self):
        assert _single("Requires Fighting d10+") == SkillRequirement("Fighting", 10)

    def test_rank_inside_trait_name_is_kept(self):
        req_set = _parser().parse("Seasoned Fighting d8+")
        assert req_set.all_requirements() == [
            RankRequirement(Rank.SEASONED),
            SkillRequirement("Fighting", 8),
        ]
        assert req_set.raw == ()

    def test_annotated_alternatives(self):
        req_set = _parser().parse("Fighting d8+ (melee) or Shooting d8+")
        assert req_set.clauses == (
            RequirementClause((SkillRequirement("Fighting", 8), SkillRequirement("Shooting", 8))),
        )

    def test_scan_fragment_leftover(self):
        found, leftover = _parser().scan_fragment("Vigor d6+ [Dwarves only]")
        assert found == [AttributeRequirement("vigor", 6)]
        assert leftover == "Dwarves only"
