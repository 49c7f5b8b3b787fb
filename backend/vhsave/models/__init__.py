"""
Pydantic models for decoded save records
Each model file corresponds to one record family
"""

from .shared_models import (
    FrozenModel,
    Vector2i,
    Vector3,
    Quaternion,
    ZDOID,
)

from .zdo_models import (
    PropertyKind,
    PROPERTY_MAPS,
    ZDOProperty,
    ZDO,
)

from .world_models import (
    WorldMetadata,
    LocationInstance,
    RandomEvent,
    World,
)

from .player_models import (
    Item,
    Food,
    Skill,
    Pin,
    MapData,
    PlayerStats,
    WorldPlayerData,
    PlayerData,
    PlayerProfile,
)

__all__ = [
    # Shared
    'FrozenModel', 'Vector2i', 'Vector3', 'Quaternion', 'ZDOID',

    # ZDO
    'PropertyKind', 'PROPERTY_MAPS', 'ZDOProperty', 'ZDO',

    # World
    'WorldMetadata', 'LocationInstance', 'RandomEvent', 'World',

    # Player
    'Item', 'Food', 'Skill', 'Pin', 'MapData', 'PlayerStats',
    'WorldPlayerData', 'PlayerData', 'PlayerProfile',
]
