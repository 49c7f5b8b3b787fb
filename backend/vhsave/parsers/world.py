"""
World decoder

Decodes the world metadata file (.fwl) and the world data file (.db). World
data is three consecutive sections: the object table, the zone system and the
random event system. Every section is gated by the world version stored at
the start of the data file.
"""
from typing import Any, Dict, List, Optional

from loguru import logger

from ..models.shared_models import Vector2i
from ..models.world_models import LocationInstance, RandomEvent, World, WorldMetadata
from ..models.zdo_models import ZDO
from .versioning import FieldSpec, primitive, read_fields, since
from .zdo import load_zdo
from .zpackage import DuplicateObjectId, ZPackage, decoding

# Encoded sizes used to bound declared counts
_ZDOID_SIZE = 12
_LENGTH_PREFIX_SIZE = 4
_VECTOR2I_SIZE = 8
_TIMESTAMP_SIZE = 8
_LOCATION_MIN_SIZE = 1 + 12


# ============================================================
# Metadata
# ============================================================

WORLD_METADATA_FIELDS = (
    FieldSpec('name', primitive(ZPackage.read_string), label='world name'),
    FieldSpec('seed_name', primitive(ZPackage.read_string), label='seed name'),
    FieldSpec('seed', primitive(ZPackage.read_int)),
    FieldSpec('uid', primitive(ZPackage.read_long), label='world uid'),
    FieldSpec('world_gen_version', primitive(ZPackage.read_int), since(26), label='world generation version'),
)


def read_world_metadata(pkg: ZPackage) -> WorldMetadata:
    """Decode the metadata record from its package"""
    with decoding('world version'):
        version = pkg.read_int()
    values = read_fields(pkg, version, WORLD_METADATA_FIELDS)
    return WorldMetadata(version=version, **values)


def parse_world_metadata(data: bytes, encoding: str = 'utf-8') -> WorldMetadata:
    """Decode a whole metadata file: one nested package holding the record"""
    pkg = ZPackage(data, encoding)
    with decoding('world metadata'):
        metadata = read_world_metadata(pkg.read_package())
    logger.debug(f"World metadata: '{metadata.name}' version {metadata.version}")
    return metadata


# ============================================================
# Object table
# ============================================================

def _read_zdos(pkg: ZPackage, version: int) -> List[ZDO]:
    count = pkg.read_count(element_size=_ZDOID_SIZE + _LENGTH_PREFIX_SIZE)
    zdos = []
    seen = set()
    for index in range(count):
        with decoding(f"object #{index}"):
            with decoding('object id'):
                uid = pkg.read_zdoid()
            key = (uid.user_id, uid.id)
            if key in seen:
                raise DuplicateObjectId(f"object id {uid} appears more than once")
            seen.add(key)
            with decoding('object package'):
                zdo_pkg = pkg.read_package()
            zdos.append(load_zdo(zdo_pkg, version, uid))
    return zdos


def _read_dead_zdos(pkg: ZPackage, version: int) -> Dict[str, int]:
    count = pkg.read_count(element_size=_ZDOID_SIZE + _TIMESTAMP_SIZE)
    dead = {}
    for index in range(count):
        with decoding(f"dead object #{index}"):
            uid = pkg.read_zdoid()
            dead[str(uid)] = pkg.read_long()
    return dead


OBJECT_TABLE_FIELDS = (
    FieldSpec(None, primitive(ZPackage.read_long), label='session id'),
    FieldSpec(None, primitive(ZPackage.read_uint), label='next object id'),
    FieldSpec('zdos', _read_zdos, label='objects'),
    FieldSpec('dead_zdos', _read_dead_zdos, label='dead objects'),
)


# ============================================================
# Zone system
# ============================================================

def _read_generated_zones(pkg: ZPackage, version: int) -> List[Vector2i]:
    count = pkg.read_count(element_size=_VECTOR2I_SIZE)
    return [pkg.read_vector2i() for _ in range(count)]


LOCATION_INSTANCE_FIELDS = (
    FieldSpec('name', primitive(ZPackage.read_string), label='location name'),
    FieldSpec('position', primitive(ZPackage.read_vector3), label='location position'),
    FieldSpec('generated', primitive(ZPackage.read_bool), since(19), label='location generated flag'),
)


def _read_location_instances(pkg: ZPackage, version: int) -> List[LocationInstance]:
    count = pkg.read_count(element_size=_LOCATION_MIN_SIZE)
    locations = []
    for index in range(count):
        with decoding(f"location #{index}"):
            values = read_fields(pkg, version, LOCATION_INSTANCE_FIELDS)
        locations.append(LocationInstance(**values))
    return locations


ZONE_SYSTEM_FIELDS = (
    FieldSpec('generated_zones', _read_generated_zones, label='generated zones'),
    FieldSpec('pgw_version', primitive(ZPackage.read_int), since(13), label='PGW version'),
    FieldSpec('location_version', primitive(ZPackage.read_int), since(21), label='location version'),
    FieldSpec('global_keys', primitive(ZPackage.read_string_list), since(14), label='global keys'),
    FieldSpec('locations_generated', primitive(ZPackage.read_bool), since(20), label='locations generated flag'),
    FieldSpec('location_instances', _read_location_instances, since(18), label='location instances'),
)


# ============================================================
# Random event system
# ============================================================

ACTIVE_EVENT_FIELDS = (
    FieldSpec('text', primitive(ZPackage.read_string), label='event text'),
    FieldSpec('time', primitive(ZPackage.read_single), label='event time'),
    FieldSpec('position', primitive(ZPackage.read_vector3), label='event position'),
)


def _read_random_event(pkg: ZPackage, version: int) -> RandomEvent:
    return RandomEvent(**read_fields(pkg, version, ACTIVE_EVENT_FIELDS))


RANDOM_EVENT_FIELDS = (
    FieldSpec('event_timer', primitive(ZPackage.read_single), label='event timer'),
    FieldSpec('event', _read_random_event, since(25), label='active event'),
)


# ============================================================
# World data
# ============================================================

WORLD_HEADER_FIELDS = (
    FieldSpec('net_time', primitive(ZPackage.read_double), since(4), label='net time'),
)

WORLD_SECTIONS = (
    ('object table', OBJECT_TABLE_FIELDS),
    ('zone system', ZONE_SYSTEM_FIELDS),
    ('random events', RANDOM_EVENT_FIELDS),
)


def read_world_data(pkg: ZPackage) -> Dict[str, Any]:
    """Decode the world data stream into World field values"""
    with decoding('world version'):
        version = pkg.read_int()
    values: Dict[str, Any] = {'version': version}
    read_fields(pkg, version, WORLD_HEADER_FIELDS, values)

    for section, fields in WORLD_SECTIONS:
        with decoding(section):
            read_fields(pkg, version, fields, values)
        logger.debug(f"Decoded world section '{section}' (offset {pkg.tell()})")

    logger.debug(
        f"World data version {version}: {len(values['zdos'])} objects, "
        f"{len(values['dead_zdos'])} dead objects, {len(values['generated_zones'])} zones"
    )
    return values


def parse_world(metadata: Optional[bytes] = None, data: Optional[bytes] = None,
                encoding: str = 'utf-8', metadata_source: Optional[str] = None,
                data_source: Optional[str] = None) -> World:
    """Decode a world from its metadata file contents and/or data file contents

    ``metadata_source`` and ``data_source`` name where each buffer came from;
    when given they lead the path of any decode error in that buffer.
    """
    values: Dict[str, Any] = {}
    if metadata is not None:
        with decoding(metadata_source):
            values['metadata'] = parse_world_metadata(metadata, encoding)
    if data is not None:
        with decoding(data_source), decoding('world data'):
            values.update(read_world_data(ZPackage(data, encoding)))
    return World(**values)
