"""
Pydantic models for world files
Metadata (.fwl) and world data (.db): object table, zone system, random events
"""

from typing import Dict, List, Optional

from pydantic import Field

from .shared_models import FrozenModel, Vector2i, Vector3
from .zdo_models import ZDO


class WorldMetadata(FrozenModel):
    """World metadata file contents"""
    version: int
    name: str = ""
    seed_name: str = ""
    seed: int = Field(0, description="World seed (int32)")
    uid: int = Field(0, description="World unique id (int64)")
    world_gen_version: int = Field(0, description="Only stored from version 26")


class LocationInstance(FrozenModel):
    """A placed location of the zone system"""
    name: str
    position: Vector3 = Field(default_factory=Vector3)
    generated: bool = False


class RandomEvent(FrozenModel):
    """The currently running random event"""
    text: str = ""
    time: float = 0.0
    position: Vector3 = Field(default_factory=Vector3)


class World(FrozenModel):
    """A decoded world: metadata and/or world data"""
    metadata: Optional[WorldMetadata] = None

    version: int = 0
    net_time: float = 0.0

    # Object table
    zdos: List[ZDO] = Field(default_factory=list)
    dead_zdos: Dict[str, int] = Field(default_factory=dict, description="ZDOID string to timestamp")

    # Zone system
    generated_zones: List[Vector2i] = Field(default_factory=list)
    pgw_version: int = 0
    location_version: int = 0
    global_keys: List[str] = Field(default_factory=list)
    locations_generated: bool = False
    location_instances: List[LocationInstance] = Field(default_factory=list)

    # Random event system
    event_timer: float = 0.0
    event: Optional[RandomEvent] = None
