"""Export a JSON-ready snapshot of a character's rules state for hosts."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from swade_builder.engine import pools
from swade_builder.engine.validator import validate_character
from swade_builder.export.character_json import character_to_dict
from swade_builder.models.catalog import Catalog
from swade_builder.models.character import Character
from swade_builder.models.derived_stats import compute_stats, starting_funds


def _pool_payload(pool: pools.PoolSummary) -> dict[str, Any]:
    payload = asdict(pool)
    payload["over_budget"] = pool.over_budget
    return payload


def build_state_payload(character: Character, catalog: Catalog) -> dict[str, Any]:
    """Pools, edge slots, derived stats, funds, and validation in one dict."""
    report = validate_character(character, catalog)
    ancestry = catalog.ancestry_for(character.ancestry)
    return {
        "character": character_to_dict(character),
        "ancestry": {
            "name": ancestry.name,
            "traits": list(ancestry.traits),
            "bonus_skill_points": ancestry.skill_points,
            "bonus_edges": ancestry.edges,
        },
        "attribute_points": _pool_payload(pools.attribute_pool(character, catalog)),
        "skill_points": _pool_payload(pools.skill_pool(character, catalog)),
        "hindrance_points": {
            **asdict(pools.hindrance_points(character)),
            "max": catalog.rules.hindrance_points_max,
            "minor_max": catalog.rules.hindrance_points_minor_max,
        },
        "hindrance_bonuses": asdict(pools.hindrance_bonuses(character)),
        "edge_slots": asdict(pools.available_edges(character, catalog)),
        "derived_stats": asdict(compute_stats(character, catalog)),
        "starting_funds": starting_funds(character, catalog),
        "validation": {
            "is_valid": report.is_valid,
            "errors": list(report.errors),
            "warnings": list(report.warnings),
        },
    }
