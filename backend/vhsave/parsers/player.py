"""
Player profile decoder

A profile file (.fch) holds two top-level packages: the profile record and a
trailing package that is not part of the model. The profile record stores the
player's save points for every world it visited, the player identity and an
optional nested player data record. Field presence in the profile and in the
player data is gated by each record's own version.
"""
from typing import Dict, List, Optional

from loguru import logger

from ..models.player_models import (
    MapData, Pin, PlayerData, PlayerProfile, PlayerStats, WorldPlayerData
)
from .subrecords import read_foods, read_inventory, read_skills
from .versioning import FieldSpec, exactly, primitive, read_fields, since, until
from .zpackage import InvalidLength, ZPackage, decoding

_PIN_MIN_SIZE = 1 + 12 + 4 + 1
_WORLD_ENTRY_MIN_SIZE = 8 + 1 + 12 + 1 + 12 + 12
_STATION_MIN_SIZE = 1 + 4
_TEXT_MIN_SIZE = 1 + 1

# Any nonzero explored byte means explored
_EXPLORED_TABLE = bytes([0] + [1] * 255)


# ============================================================
# Map
# ============================================================

PIN_FIELDS = (
    FieldSpec('name', primitive(ZPackage.read_string), label='pin name'),
    FieldSpec('position', primitive(ZPackage.read_vector3), label='pin position'),
    FieldSpec('type', primitive(ZPackage.read_int), label='pin type'),
    FieldSpec('is_checked', primitive(ZPackage.read_bool), label='pin checked flag'),
)


def _read_pins(pkg: ZPackage, map_version: int) -> List[Pin]:
    count = pkg.read_count(element_size=_PIN_MIN_SIZE)
    pins = []
    for index in range(count):
        with decoding(f"pin #{index}"):
            pins.append(Pin(**read_fields(pkg, map_version, PIN_FIELDS)))
    return pins


def _read_explored(pkg: ZPackage, texture_size: int) -> bytes:
    if texture_size < 0:
        raise InvalidLength(f"negative texture size {texture_size}")
    return pkg.read_bytes(texture_size * texture_size).translate(_EXPLORED_TABLE)


# Gated by the map's own version; version and texture size are read first
MAP_TAIL_FIELDS = (
    FieldSpec('pins', _read_pins, since(2)),
    FieldSpec('public_reference_position', primitive(ZPackage.read_bool), since(4),
              label='public reference position flag'),
)


def read_map_data(pkg: ZPackage) -> MapData:
    """Decode a map record from its nested package"""
    with decoding('map version'):
        version = pkg.read_int()
    with decoding('texture size'):
        texture_size = pkg.read_int()
    with decoding('explored cells'):
        explored = _read_explored(pkg, texture_size)
    values = read_fields(pkg, version, MAP_TAIL_FIELDS)
    return MapData(version=version, texture_size=texture_size, explored=explored, **values)


def _read_optional_map(pkg: ZPackage, version: int) -> Optional[MapData]:
    with decoding('map flag'):
        has_map = pkg.read_bool()
    if not has_map:
        return None
    with decoding('map package'):
        map_pkg = pkg.read_package()
    return read_map_data(map_pkg)


# ============================================================
# Profile
# ============================================================

STATS_FIELDS = (
    FieldSpec('kills', primitive(ZPackage.read_int)),
    FieldSpec('deaths', primitive(ZPackage.read_int)),
    FieldSpec('crafts', primitive(ZPackage.read_int)),
    FieldSpec('builds', primitive(ZPackage.read_int)),
)


def _read_stats(pkg: ZPackage, version: int) -> PlayerStats:
    return PlayerStats(**read_fields(pkg, version, STATS_FIELDS))


# Gated by the profile version
WORLD_ENTRY_FIELDS = (
    FieldSpec('have_custom_spawn_point', primitive(ZPackage.read_bool), label='custom spawn flag'),
    FieldSpec('spawn_point', primitive(ZPackage.read_vector3), label='spawn point'),
    FieldSpec('have_logout_point', primitive(ZPackage.read_bool), label='logout flag'),
    FieldSpec('logout_point', primitive(ZPackage.read_vector3), label='logout point'),
    FieldSpec('have_death_point', primitive(ZPackage.read_bool), since(30), label='death flag'),
    FieldSpec('death_point', primitive(ZPackage.read_vector3), since(30), label='death point'),
    FieldSpec('home_point', primitive(ZPackage.read_vector3), label='home point'),
    FieldSpec('map', _read_optional_map, since(29)),
)


def _read_world_entries(pkg: ZPackage, version: int) -> Dict[int, WorldPlayerData]:
    count = pkg.read_count(element_size=_WORLD_ENTRY_MIN_SIZE)
    entries = {}
    for index in range(count):
        with decoding(f"world entry #{index}"):
            with decoding('world key'):
                key = pkg.read_long()
            entries[key] = WorldPlayerData(**read_fields(pkg, version, WORLD_ENTRY_FIELDS))
    return entries


def _read_optional_player_data(pkg: ZPackage, version: int) -> Optional[PlayerData]:
    with decoding('player data flag'):
        has_player = pkg.read_bool()
    if not has_player:
        return None
    with decoding('player data package'):
        player_pkg = pkg.read_package()
    return read_player_data(player_pkg)


PROFILE_FIELDS = (
    FieldSpec('stats', _read_stats, since(28), label='player stats'),
    FieldSpec('world_data', _read_world_entries, label='world entries'),
    FieldSpec('name', primitive(ZPackage.read_string), label='player name'),
    FieldSpec('id', primitive(ZPackage.read_long), label='player id'),
    FieldSpec('start_seed', primitive(ZPackage.read_string), label='start seed'),
    FieldSpec('player', _read_optional_player_data, label='player data'),
)


# ============================================================
# Player data
# ============================================================

def _read_station_levels(pkg: ZPackage, version: int) -> Dict[str, int]:
    count = pkg.read_count(element_size=_STATION_MIN_SIZE)
    stations = {}
    for index in range(count):
        with decoding(f"station #{index}"):
            name = pkg.read_string()
            stations[name] = pkg.read_int()
    return stations


def _read_known_texts(pkg: ZPackage, version: int) -> Dict[str, str]:
    count = pkg.read_count(element_size=_TEXT_MIN_SIZE)
    texts = {}
    for index in range(count):
        with decoding(f"text #{index}"):
            key = pkg.read_string()
            texts[key] = pkg.read_string()
    return texts


# Gated by the player data version
PLAYER_DATA_FIELDS = (
    FieldSpec('max_health', primitive(ZPackage.read_single), since(7), label='max health'),
    FieldSpec('health', primitive(ZPackage.read_single)),
    FieldSpec('stamina', primitive(ZPackage.read_single), since(10)),
    FieldSpec('first_spawn', primitive(ZPackage.read_bool), since(8), label='first spawn flag'),
    FieldSpec('time_since_death', primitive(ZPackage.read_single), since(20), label='time since death'),
    FieldSpec('guardian_power', primitive(ZPackage.read_string), since(23), label='guardian power'),
    FieldSpec('guardian_power_cooldown', primitive(ZPackage.read_single), since(24),
              label='guardian power cooldown'),
    FieldSpec(None, primitive(ZPackage.read_zdoid), exactly(2), label='legacy player id'),
    FieldSpec('inventory', read_inventory),
    FieldSpec('known_recipes', primitive(ZPackage.read_string_list), label='known recipes'),
    FieldSpec(None, primitive(ZPackage.read_string_list), until(15), label='legacy known stations'),
    FieldSpec('known_stations', _read_station_levels, since(15), label='known stations'),
    FieldSpec('known_materials', primitive(ZPackage.read_string_list), label='known materials'),
    FieldSpec('shown_tutorials', primitive(ZPackage.read_string_list), until(19) + since(21),
              label='shown tutorials'),
    FieldSpec('uniques', primitive(ZPackage.read_string_list), since(6)),
    FieldSpec('trophies', primitive(ZPackage.read_string_list), since(9)),
    FieldSpec('known_biomes', primitive(ZPackage.read_int_list), since(18), label='known biomes'),
    FieldSpec('known_texts', _read_known_texts, since(22), label='known texts'),
    FieldSpec('beard', primitive(ZPackage.read_string), since(4)),
    FieldSpec('hair', primitive(ZPackage.read_string), since(4)),
    FieldSpec('skin_color', primitive(ZPackage.read_vector3), since(5), label='skin color'),
    FieldSpec('hair_color', primitive(ZPackage.read_vector3), since(5), label='hair color'),
    FieldSpec('player_model', primitive(ZPackage.read_int), since(11), label='player model'),
    FieldSpec('foods', read_foods, since(12)),
    FieldSpec('skills', read_skills, since(17)),
)


def read_player_data(pkg: ZPackage) -> PlayerData:
    """Decode the embedded player data record from its nested package"""
    with decoding('player data version'):
        version = pkg.read_int()
    values = read_fields(pkg, version, PLAYER_DATA_FIELDS)
    logger.debug(
        f"Player data version {version}: {len(values['inventory'])} items, "
        f"{len(values['known_recipes'])} recipes"
    )
    return PlayerData(version=version, **values)


def read_player_profile(pkg: ZPackage) -> PlayerProfile:
    """Decode the profile record from its package"""
    with decoding('profile version'):
        version = pkg.read_int()
    values = read_fields(pkg, version, PROFILE_FIELDS)
    logger.debug(f"Profile version {version}: {len(values['world_data'])} world entries")
    return PlayerProfile(version=version, **values)


def parse_player_profile(data: bytes, encoding: str = 'utf-8') -> PlayerProfile:
    """Decode a whole profile file"""
    pkg = ZPackage(data, encoding)
    with decoding('profile package'):
        profile_pkg = pkg.read_package()
    with decoding('trailing package'):
        pkg.read_package()
    with decoding('profile'):
        return read_player_profile(profile_pkg)
