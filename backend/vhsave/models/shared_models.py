"""
Shared Pydantic models used across the world and player records
Spatial value types and object identifiers
"""

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    """Base for every decoded record; instances are immutable once built"""
    model_config = ConfigDict(frozen=True)


# ============================================================
# Spatial Types
# ============================================================

class Vector2i(FrozenModel):
    """Integer 2D coordinate (zone sectors, inventory grid)"""
    x: int = 0
    y: int = 0


class Vector3(FrozenModel):
    """Single precision 3D vector"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Quaternion(FrozenModel):
    """Single precision rotation quaternion"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0


# ============================================================
# Identifiers
# ============================================================

class ZDOID(FrozenModel):
    """Identity of a data object: owning peer plus a per-peer counter"""
    user_id: int = Field(0, description="Owner peer id (int64)")
    id: int = Field(0, description="Local object id (uint32)")

    def __str__(self) -> str:
        return f"{self.user_id}:{self.id}"
