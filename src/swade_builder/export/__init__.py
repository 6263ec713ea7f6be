"""Save-file and host payload interfaces."""

from swade_builder.export.character_json import (
    bundle_to_dict,
    character_from_dict,
    character_to_dict,
    characters_from_bundle,
    dumps,
    loads,
)
from swade_builder.export.state_payload import build_state_payload

__all__ = [
    "build_state_payload",
    "bundle_to_dict",
    "character_from_dict",
    "character_to_dict",
    "characters_from_bundle",
    "dumps",
    "loads",
]
