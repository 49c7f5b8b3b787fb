"""
Pydantic models for ZDO records
A ZDO is a generic data object: metadata, spatial state and typed property maps
"""

from enum import IntEnum
from typing import Any, Dict, Iterator, Union

from pydantic import Field

from .shared_models import ZDOID, FrozenModel, Quaternion, Vector2i, Vector3


class PropertyKind(IntEnum):
    """Value types of the ZDO property bag, in stream order"""
    FLOAT = 0
    VECTOR3 = 1
    QUATERNION = 2
    INT = 3
    LONG = 4
    STRING = 5


# ZDO attribute holding the map for each property kind
PROPERTY_MAPS = {
    PropertyKind.FLOAT: 'floats',
    PropertyKind.VECTOR3: 'vectors',
    PropertyKind.QUATERNION: 'quaternions',
    PropertyKind.INT: 'ints',
    PropertyKind.LONG: 'longs',
    PropertyKind.STRING: 'strings',
}

PropertyValue = Union[Vector3, Quaternion, int, float, str]


class ZDOProperty(FrozenModel):
    """One tagged entry of a ZDO property bag"""
    kind: PropertyKind
    key: int = Field(..., description="Hashed property name (int32)")
    value: PropertyValue


class ZDO(FrozenModel):
    """Decoded data object"""
    # Metadata
    uid: ZDOID = Field(default_factory=ZDOID)
    owner_revision: int = Field(0, description="uint32")
    data_revision: int = Field(0, description="uint32")
    persistent: bool = False
    owner: int = Field(0, description="Owner peer id (int64)")
    time_created: int = 0
    pgw_version: int = 0

    # Type and location
    type: int = Field(0, description="Object type (int8)")
    distant: bool = False
    prefab: int = Field(0, description="Hashed prefab name")
    sector: Vector2i = Field(default_factory=Vector2i)
    position: Vector3 = Field(default_factory=Vector3)
    rotation: Quaternion = Field(default_factory=Quaternion)

    # Property maps
    floats: Dict[int, float] = Field(default_factory=dict)
    vectors: Dict[int, Vector3] = Field(default_factory=dict)
    quaternions: Dict[int, Quaternion] = Field(default_factory=dict)
    ints: Dict[int, int] = Field(default_factory=dict)
    longs: Dict[int, int] = Field(default_factory=dict)
    strings: Dict[int, str] = Field(default_factory=dict)

    def properties(self) -> Iterator[ZDOProperty]:
        """Iterate the property bag as tagged values, maps in stream order"""
        for kind, attr in PROPERTY_MAPS.items():
            for key, value in getattr(self, attr).items():
                yield ZDOProperty(kind=kind, key=key, value=value)

    def get_property(self, kind: PropertyKind, key: int, default: Any = None) -> Any:
        return getattr(self, PROPERTY_MAPS[kind]).get(key, default)
