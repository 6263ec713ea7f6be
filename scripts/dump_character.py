"""Dump pools, derived stats, and validation for a character.

Builds a sample Novice character (or loads a save file) and runs it through
the full pipeline: costs -> pools -> validation -> derived stats.

Usage:
    python -m scripts.dump_character [--character PATH] [--catalog PATH] [--json]

Without --catalog, uses the bundled core-rules catalog.
"""

import argparse
import json
import logging
from pathlib import Path

from swade_builder.engine.builder import CharacterBuilder
from swade_builder.export.character_json import loads
from swade_builder.export.state_payload import build_state_payload
from swade_builder.models.catalog import Catalog
from swade_builder.models.constants import ATTRIBUTE_LABELS, ATTRIBUTE_NAMES, die_label


def _sample_builder(catalog: Catalog) -> CharacterBuilder:
    builder = CharacterBuilder(catalog)
    builder.set_details(name="Kestrel Vane", concept="Wandering swordswoman")
    for attr in ("agility", "agility", "strength", "vigor", "spirit"):
        builder.increment_attribute(attr)
    for skill, steps in (
        ("Fighting", 3), ("Athletics", 2), ("Notice", 2), ("Stealth", 1),
        ("Persuasion", 1), ("Common Knowledge", 1), ("Intimidation", 1),
    ):
        for _ in range(steps):
            builder.increment_skill(skill)
    builder.add_hindrance("Loyal")
    builder.add_hindrance("Vengeful (Minor)")
    builder.add_hindrance("Heroic")
    builder.add_edge("Brawny")
    builder.add_edge("Quick")
    return builder


def main():
    parser = argparse.ArgumentParser(description="Dump character pools and stats")
    parser.add_argument("--character", type=Path, help="Character save file (JSON)")
    parser.add_argument("--catalog", type=Path, help="Catalog bundle (JSON)")
    parser.add_argument("--json", action="store_true", help="Print the raw state payload")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.catalog:
        catalog = Catalog.from_dict(json.loads(args.catalog.read_text(encoding="utf-8")))
    else:
        catalog = Catalog.defaults()

    if args.character:
        character = loads(args.character.read_text(encoding="utf-8"))
    else:
        character = _sample_builder(catalog).character

    payload = build_state_payload(character, catalog)
    if args.json:
        print(json.dumps(payload, indent=2))
        return

    name = character.name or "(unnamed)"
    print(f"\n{'=' * 50}")
    print(f"  {name} - {character.ancestry}")
    print(f"{'=' * 50}")

    print("\n--- ATTRIBUTES ---")
    for attr in ATTRIBUTE_NAMES:
        print(f"  {ATTRIBUTE_LABELS[attr]:<14} {die_label(character.attribute(attr)):>4}")

    print("\n--- SKILLS ---")
    for skill, rank in sorted(character.trained_skills().items()):
        custom = " [CUSTOM]" if skill in character.custom_skills else ""
        print(f"  {skill:<20} {die_label(rank):>4}{custom}")

    print("\n--- HINDRANCES / EDGES ---")
    for h in character.hindrances.values():
        print(f"  {h.name} ({h.severity}, {h.points} pt)")
    for edge in character.edges:
        print(f"  {edge}")

    attr_pool = payload["attribute_points"]
    skill_pool = payload["skill_points"]
    slots = payload["edge_slots"]
    print("\n--- POOLS ---")
    print(f"  Attribute points    {attr_pool['used']:>3}/{attr_pool['total']}")
    print(f"  Skill points        {skill_pool['used']:>3}/{skill_pool['total']}")
    print(f"  Hindrance points    {payload['hindrance_points']['total']:>3}"
          f"/{payload['hindrance_points']['max']}")
    print(f"  Edges               {slots['used']:>3}/{slots['total']}")

    stats = payload["derived_stats"]
    print("\n--- DERIVED STATS ---")
    print(f"  Pace                {stats['pace']:>6}")
    print(f"  Parry               {stats['parry']:>6}")
    print(f"  Toughness           {stats['toughness']:>6}")
    print(f"  Starting Funds      ${payload['starting_funds']:>5}")

    validation = payload["validation"]
    if validation["errors"] or validation["warnings"]:
        print("\n--- VALIDATION ---")
        for msg in validation["errors"]:
            print(f"  ERROR   {msg}")
        for msg in validation["warnings"]:
            print(f"  WARNING {msg}")

    print()


if __name__ == "__main__":
    main()
