"""Parse free-text edge requirements into a RequirementSet.

Catalog requirement strings look like:

    "Novice, Agility d8+, Fighting d6+"
    "Seasoned, Luck"
    "Novice, Arcane Background (any), Spellcasting d6+ or Faith d6+"

Commas, semicolons, and " and " separate AND-clauses; " or " separates alternatives
inside a clause. Each fragment becomes one typed requirement:

  - rank keyword         -> RankRequirement
  - "<attribute> dN+"    -> AttributeRequirement
  - "<skill> dN+"        -> SkillRequirement
  - exact edge name      -> EdgeRequirement
  - edge-name prefix     -> EdgeFamilyRequirement

A fragment that doesn't fit one of those shapes exactly ("Rank: Seasoned",
"Fighting d8+ (unarmed)") is scanned instead: any rank keyword in it and
every "<trait> dN+" in it still become requirements, and only the text left
over is kept as RawRequirement. An OR-clause is kept raw as a whole when an
alternative yields nothing (or more than one requirement), since we can't
tell whether that alternative is met.
"""

import logging
import re
from collections.abc import Iterable

from swade_builder.models.constants import ATTRIBUTES, RANK_NAMES
from swade_builder.models.requirements import (
    AttributeRequirement,
    EdgeFamilyRequirement,
    EdgeRequirement,
    RankRequirement,
    RawRequirement,
    Requirement,
    RequirementClause,
    RequirementSet,
    SkillRequirement,
)

logger = logging.getLogger(__name__)

_CLAUSE_SPLIT_RE = re.compile(r"[,;]|\s+and\s+", re.IGNORECASE)
_OR_SPLIT_RE = re.compile(r"\s+or\s+", re.IGNORECASE)
_RANK_RE = re.compile(
    r"^(?:rank\s+)?(novice|seasoned|veteran|heroic|legendary)\+?(?:\s+rank)?$"
)
_TRAIT_RE = re.compile(r"^(?P<name>[^\d+]+?)\s+d(?P<die>\d+)\s*\+?$", re.IGNORECASE)
_ANY_SUFFIX_RE = re.compile(r"\s*\((?:any|any type)\)$", re.IGNORECASE)
_RANK_SCAN_RE = re.compile(r"\b(novice|seasoned|veteran|heroic|legendary)\b", re.IGNORECASE)
_TRAIT_SCAN_RE = re.compile(r"(?P<name>[a-z][a-z' -]*?)\s+d(?P<die>\d+)\s*\+", re.IGNORECASE)
_RANK_WORD_RE = re.compile(r"\brank\b", re.IGNORECASE)
_LEFTOVER_STRIP = " :;,.()[]-"


class RequirementParser:
    """Parses requirement text against a fixed set of skill and edge names."""

    __slots__ = ("_skills", "_edges")

    def __init__(self, skill_names: Iterable[str], edge_names: Iterable[str]) -> None:
        self._skills: dict[str, str] = {name.casefold(): name for name in skill_names}
        self._edges: dict[str, str] = {name.casefold(): name for name in edge_names}

    def parse(self, text: str) -> RequirementSet:
        """Parse a full requirement string."""
        clauses: list[RequirementClause] = []
        raw: list[RawRequirement] = []

        for part in _CLAUSE_SPLIT_RE.split(text or ""):
            part = part.strip().rstrip(".")
            if not part:
                continue
            alternatives = [alt.strip() for alt in _OR_SPLIT_RE.split(part) if alt.strip()]
            parsed = [self.parse_fragment(alt) for alt in alternatives]
            if not any(isinstance(req, RawRequirement) for req in parsed):
                clauses.append(RequirementClause(tuple(parsed)))
                continue

            scanned = [self.scan_fragment(alt) for alt in alternatives]
            if len(scanned) == 1:
                found, leftover = scanned[0]
                clauses.extend(RequirementClause((req,)) for req in found)
                if leftover:
                    raw.append(RawRequirement(leftover))
            elif all(len(found) == 1 for found, _ in scanned):
                clauses.append(RequirementClause(tuple(found[0] for found, _ in scanned)))
            else:
                raw.append(RawRequirement(part))

        if raw:
            logger.debug("Uninterpreted requirement text in %r: %s", text, raw)
        return RequirementSet(clauses=tuple(clauses), raw=tuple(raw))

    def parse_fragment(self, fragment: str) -> Requirement | RawRequirement:
        """Parse a single alternative such as "Smarts d8+" or "Luck"."""
        text = fragment.strip()
        folded = text.casefold()

        rank_match = _RANK_RE.match(folded)
        if rank_match:
            return RankRequirement(RANK_NAMES[rank_match.group(1)])

        trait_match = _TRAIT_RE.match(text)
        if trait_match:
            name = " ".join(trait_match.group("name").split())
            die = int(trait_match.group("die"))
            known = self._known_trait(name, die)
            if known is not None:
                return known
            if _RANK_SCAN_RE.search(name) or self._has_known_suffix(name, die):
                # Extra words around a real trait; scan_fragment separates them.
                return RawRequirement(text)
            # Could be a custom skill; the name is kept as written.
            logger.debug("Requirement names unknown skill %r", name)
            return SkillRequirement(name, die)

        if folded in self._edges:
            return EdgeRequirement(self._edges[folded])

        prefix = _ANY_SUFFIX_RE.sub("", text)
        family = self._family_prefix(prefix)
        if family is not None:
            return EdgeFamilyRequirement(family)

        return RawRequirement(text)

    def scan_fragment(self, fragment: str) -> tuple[list[Requirement], str]:
        """Pull every rank keyword and trait die out of loosely written text.

        Returns the requirements found and whatever text is left over.
        """
        parsed = self.parse_fragment(fragment)
        if not isinstance(parsed, RawRequirement):
            return [parsed], ""

        text = fragment.strip()
        found: list[Requirement] = []
        consumed = [False] * len(text)

        for match in _RANK_SCAN_RE.finditer(text):
            req = RankRequirement(RANK_NAMES[match.group(1).casefold()])
            if req not in found:
                found.append(req)
            consumed[match.start():match.end()] = [True] * (match.end() - match.start())

        for match in _TRAIT_SCAN_RE.finditer(text):
            req = self._trait(match.group("name"), int(match.group("die")))
            if req not in found:
                found.append(req)
            consumed[match.start():match.end()] = [True] * (match.end() - match.start())

        if not found:
            return [], text
        leftover = "".join(ch for ch, used in zip(text, consumed) if not used)
        leftover = " ".join(_RANK_WORD_RE.sub(" ", leftover).split()).strip(_LEFTOVER_STRIP)
        return found, leftover

    def _known_trait(
        self, name: str, die: int
    ) -> AttributeRequirement | SkillRequirement | None:
        folded = name.casefold()
        if folded in ATTRIBUTES:
            return AttributeRequirement(folded, die)
        if folded in self._skills:
            return SkillRequirement(self._skills[folded], die)
        return None

    def _has_known_suffix(self, name: str, die: int) -> bool:
        words = name.split()
        return any(
            self._known_trait(" ".join(words[start:]), die) is not None
            for start in range(1, len(words))
        )

    def _trait(self, name: str, die: int) -> AttributeRequirement | SkillRequirement:
        """Resolve "<name> dN+", dropping leading words until a trait matches."""
        words = name.split()
        for start in range(len(words)):
            known = self._known_trait(" ".join(words[start:]), die)
            if known is not None:
                return known
        # Could be a custom skill; the name is kept as written.
        name = " ".join(words)
        logger.debug("Requirement names unknown skill %r", name)
        return SkillRequirement(name, die)

    def _family_prefix(self, prefix: str) -> str | None:
        """Return *prefix* in catalog casing if it starts any edge name."""
        folded = prefix.casefold()
        if not folded:
            return None
        for edge_folded, edge_name in sorted(self._edges.items()):
            if edge_folded.startswith(folded + " ") or edge_folded.startswith(folded + "("):
                return edge_name[: len(prefix)]
        return None


def parse_requirements(
    text: str,
    skill_names: Iterable[str] = (),
    edge_names: Iterable[str] = (),
) -> RequirementSet:
    """Convenience wrapper for one-off parsing."""
    return RequirementParser(skill_names, edge_names).parse(text)
