"""
Pydantic models for player profiles
Profile, per-world save points, map data and the embedded player record
"""

from typing import Dict, List, Optional

from pydantic import Field, field_serializer

from .shared_models import FrozenModel, Vector2i, Vector3


# ============================================================
# Inventory and Sub-records
# ============================================================

class Item(FrozenModel):
    """Inventory item"""
    name: str
    stack: int = 0
    durability: float = 0.0
    position: Vector2i = Field(default_factory=Vector2i, description="Inventory grid slot")
    equipped: bool = False
    quality: int = 1
    variant: int = 0
    crafter_id: int = 0
    crafter_name: str = ""


class Food(FrozenModel):
    """Active food effect"""
    name: str
    health: float = 0.0
    stamina: float = 0.0


class Skill(FrozenModel):
    """Skill progress"""
    type: int = Field(..., description="Skill type id")
    level: float = 0.0
    accumulator: float = 0.0


# ============================================================
# Map
# ============================================================

class Pin(FrozenModel):
    """Map pin"""
    name: str = ""
    position: Vector3 = Field(default_factory=Vector3)
    type: int = 0
    is_checked: bool = False


class MapData(FrozenModel):
    """Explored map of one world

    ``explored`` holds one byte per cell (0 or 1), row major,
    ``texture_size * texture_size`` cells. JSON output lists the cells as
    booleans.
    """

    version: int
    texture_size: int = 0
    explored: bytes = b""
    pins: List[Pin] = Field(default_factory=list)
    public_reference_position: bool = False

    @property
    def explored_count(self) -> int:
        return self.explored.count(1)

    def is_explored(self, x: int, y: int) -> bool:
        if not (0 <= x < self.texture_size and 0 <= y < self.texture_size):
            raise IndexError(f"cell ({x}, {y}) outside {self.texture_size}x{self.texture_size} map")
        return self.explored[y * self.texture_size + x] != 0

    @field_serializer('explored', when_used='json')
    def _explored_cells(self, explored: bytes) -> List[bool]:
        return [cell != 0 for cell in explored]


# ============================================================
# Profile
# ============================================================

class PlayerStats(FrozenModel):
    kills: int = 0
    deaths: int = 0
    crafts: int = 0
    builds: int = 0


class WorldPlayerData(FrozenModel):
    """Save points of the player in one world"""
    have_custom_spawn_point: bool = False
    spawn_point: Vector3 = Field(default_factory=Vector3)
    have_logout_point: bool = False
    logout_point: Vector3 = Field(default_factory=Vector3)
    have_death_point: bool = False
    death_point: Vector3 = Field(default_factory=Vector3)
    home_point: Vector3 = Field(default_factory=Vector3)
    map: Optional[MapData] = None


class PlayerData(FrozenModel):
    """Embedded player record: vitals, inventory, knowledge, appearance"""
    version: int

    # Vitals
    max_health: float = 0.0
    health: float = 0.0
    stamina: float = 0.0
    first_spawn: bool = False
    time_since_death: float = 0.0
    guardian_power: str = ""
    guardian_power_cooldown: float = 0.0

    inventory: List[Item] = Field(default_factory=list)

    # Knowledge
    known_recipes: List[str] = Field(default_factory=list)
    known_stations: Dict[str, int] = Field(default_factory=dict)
    known_materials: List[str] = Field(default_factory=list)
    shown_tutorials: List[str] = Field(default_factory=list)
    uniques: List[str] = Field(default_factory=list)
    trophies: List[str] = Field(default_factory=list)
    known_biomes: List[int] = Field(default_factory=list)
    known_texts: Dict[str, str] = Field(default_factory=dict)

    # Appearance
    beard: str = ""
    hair: str = ""
    skin_color: Vector3 = Field(default_factory=Vector3)
    hair_color: Vector3 = Field(default_factory=Vector3)
    player_model: int = 0

    foods: List[Food] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)


class PlayerProfile(FrozenModel):
    """A decoded player profile file"""
    version: int
    stats: PlayerStats = Field(default_factory=PlayerStats)
    world_data: Dict[int, WorldPlayerData] = Field(default_factory=dict, description="Keyed by world uid")
    name: str = ""
    id: int = Field(0, description="Player id (int64)")
    start_seed: str = ""
    player: Optional[PlayerData] = None
