"""
ZDO codec

Decodes one data object from its nested package. The layout depends on the
version of the enclosing world; the property bag is read as a stream of tagged
values and folded into per-kind maps.
"""
from typing import Dict, Iterator, Optional

from ..models.shared_models import ZDOID
from ..models.zdo_models import PROPERTY_MAPS, ZDO, PropertyKind, ZDOProperty
from .versioning import FieldSpec, between, primitive, read_fields, since, until
from .zpackage import ZPackage, decoding


def _skip_legacy_bytes(pkg: ZPackage, version: int):
    pkg.read_byte()
    pkg.read_byte()


ZDO_FIELDS = (
    FieldSpec('owner_revision', primitive(ZPackage.read_uint)),
    FieldSpec('data_revision', primitive(ZPackage.read_uint)),
    FieldSpec('persistent', primitive(ZPackage.read_bool), label='persistent flag'),
    FieldSpec('owner', primitive(ZPackage.read_long), label='owner id'),
    FieldSpec('time_created', primitive(ZPackage.read_long), label='creation time'),
    FieldSpec('pgw_version', primitive(ZPackage.read_int), label='PGW version'),
    FieldSpec(None, primitive(ZPackage.read_int), between(16, 24), label='legacy int'),
    FieldSpec('type', primitive(ZPackage.read_sbyte), since(23), label='object type'),
    FieldSpec('distant', primitive(ZPackage.read_bool), since(22), label='distant flag'),
    FieldSpec(None, _skip_legacy_bytes, until(13), label='legacy bytes'),
    FieldSpec('prefab', primitive(ZPackage.read_int), since(17), label='prefab id'),
    FieldSpec('sector', primitive(ZPackage.read_vector2i)),
    FieldSpec('position', primitive(ZPackage.read_vector3)),
    FieldSpec('rotation', primitive(ZPackage.read_quaternion)),
)

# Value reader and minimum encoded value size for each property kind, in stream order
PROPERTY_READERS = {
    PropertyKind.FLOAT: (ZPackage.read_single, 4),
    PropertyKind.VECTOR3: (ZPackage.read_vector3, 12),
    PropertyKind.QUATERNION: (ZPackage.read_quaternion, 16),
    PropertyKind.INT: (ZPackage.read_int, 4),
    PropertyKind.LONG: (ZPackage.read_long, 8),
    PropertyKind.STRING: (ZPackage.read_string, 1),
}

_KEY_SIZE = 4


def read_properties(pkg: ZPackage) -> Iterator[ZDOProperty]:
    """Yield the property bag of a ZDO as tagged values"""
    for kind, (read_value, value_size) in PROPERTY_READERS.items():
        with decoding(f"{kind.name.lower()} properties"):
            count = pkg.read_byte_count(element_size=_KEY_SIZE + value_size)
            for index in range(count):
                with decoding(f"entry #{index}"):
                    key = pkg.read_int()
                    yield ZDOProperty(kind=kind, key=key, value=read_value(pkg))


def load_zdo(pkg: ZPackage, version: int, uid: Optional[ZDOID] = None) -> ZDO:
    """Decode a ZDO stored by a world of format ``version``"""
    values = read_fields(pkg, version, ZDO_FIELDS)

    maps: Dict[str, dict] = {attr: {} for attr in PROPERTY_MAPS.values()}
    for prop in read_properties(pkg):
        # Later entries replace earlier ones with the same key
        maps[PROPERTY_MAPS[prop.kind]][prop.key] = prop.value

    return ZDO(uid=uid if uid is not None else ZDOID(), **values, **maps)
