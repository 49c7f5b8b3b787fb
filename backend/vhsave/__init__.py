"""
Decoder for ZPackage save files: player profiles and worlds
"""

__version__ = "0.1.0"

from .parsers import (
    ZPackage, ZPackageError, UnexpectedEndOfData, InvalidLength,
    UnsupportedShape, DuplicateObjectId,
    parse_player_profile, parse_world, parse_world_metadata
)
from .services import load_player_profile, load_world, decode_buffers_parallel

__all__ = [
    'ZPackage', 'ZPackageError', 'UnexpectedEndOfData', 'InvalidLength',
    'UnsupportedShape', 'DuplicateObjectId',
    'parse_player_profile', 'parse_world', 'parse_world_metadata',
    'load_player_profile', 'load_world', 'decode_buffers_parallel',
]
