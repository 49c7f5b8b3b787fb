"""
ZPackage save file parsers
"""

from .zpackage import (
    ZPackage, ZPackageError, UnexpectedEndOfData, InvalidLength,
    UnsupportedShape, DuplicateObjectId, decoding
)
from .versioning import (
    FieldSpec, read_fields, fields_present, version_boundaries,
    since, until, between, exactly, primitive
)
from .zdo import load_zdo, read_properties, ZDO_FIELDS, PROPERTY_READERS
from .world import (
    parse_world, parse_world_metadata, read_world_data, read_world_metadata,
    WORLD_METADATA_FIELDS, WORLD_HEADER_FIELDS, OBJECT_TABLE_FIELDS,
    ZONE_SYSTEM_FIELDS, RANDOM_EVENT_FIELDS
)
from .subrecords import (
    read_inventory, read_food, read_foods, read_skills,
    ITEM_FIELDS, FOOD_FIELDS, SKILL_FIELDS
)
from .player import (
    parse_player_profile, read_player_profile, read_player_data, read_map_data,
    PROFILE_FIELDS, WORLD_ENTRY_FIELDS, PLAYER_DATA_FIELDS, MAP_TAIL_FIELDS
)

__all__ = [
    # Package reader
    'ZPackage', 'ZPackageError', 'UnexpectedEndOfData', 'InvalidLength',
    'UnsupportedShape', 'DuplicateObjectId', 'decoding',

    # Field tables
    'FieldSpec', 'read_fields', 'fields_present', 'version_boundaries',
    'since', 'until', 'between', 'exactly', 'primitive',

    # ZDO
    'load_zdo', 'read_properties', 'ZDO_FIELDS', 'PROPERTY_READERS',

    # World
    'parse_world', 'parse_world_metadata', 'read_world_data', 'read_world_metadata',
    'WORLD_METADATA_FIELDS', 'WORLD_HEADER_FIELDS', 'OBJECT_TABLE_FIELDS',
    'ZONE_SYSTEM_FIELDS', 'RANDOM_EVENT_FIELDS',

    # Player
    'read_inventory', 'read_food', 'read_foods', 'read_skills',
    'ITEM_FIELDS', 'FOOD_FIELDS', 'SKILL_FIELDS',
    'parse_player_profile', 'read_player_profile', 'read_player_data', 'read_map_data',
    'PROFILE_FIELDS', 'WORLD_ENTRY_FIELDS', 'PLAYER_DATA_FIELDS', 'MAP_TAIL_FIELDS',
]
