"""
Save file loading

Reads profile and world files into memory and hands the buffers to the
decoders. Decode errors are prefixed with the file name.
"""
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from ..config.settings import get_settings
from ..models.player_models import PlayerProfile
from ..models.world_models import World
from ..parsers.player import parse_player_profile
from ..parsers.world import parse_world
from ..parsers.zpackage import decoding

PathLike = Union[str, Path]

PROFILE_EXTENSIONS = ('.fch',)
WORLD_METADATA_EXTENSIONS = ('.fwl',)
WORLD_DATA_EXTENSIONS = ('.db',)


def _read_file(path: PathLike) -> bytes:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Save file not found: {path}")
    data = path.read_bytes()
    logger.debug(f"Read {len(data)} bytes from {path}")
    return data


def _check_extension(path: Path, expected: tuple):
    if path.suffix.lower() not in expected:
        logger.warning(f"{path.name}: unexpected extension, expected one of {', '.join(expected)}")


def load_player_profile(path: PathLike, encoding: Optional[str] = None) -> PlayerProfile:
    """Load and decode a player profile file"""
    path = Path(path)
    _check_extension(path, PROFILE_EXTENSIONS)
    encoding = encoding or get_settings().string_encoding

    data = _read_file(path)
    with decoding(path.name):
        profile = parse_player_profile(data, encoding)

    logger.info(f"Loaded player profile '{profile.name}' (version {profile.version}) from {path}")
    return profile


def load_world(meta_path: Optional[PathLike] = None, data_path: Optional[PathLike] = None,
               encoding: Optional[str] = None) -> World:
    """Load a world from its metadata file, its data file, or both"""
    if meta_path is None and data_path is None:
        raise ValueError("load_world needs a metadata file, a data file, or both")
    encoding = encoding or get_settings().string_encoding

    meta_bytes = data_bytes = None
    meta_name = data_name = None
    if meta_path is not None:
        meta_path = Path(meta_path)
        _check_extension(meta_path, WORLD_METADATA_EXTENSIONS)
        meta_bytes, meta_name = _read_file(meta_path), meta_path.name
    if data_path is not None:
        data_path = Path(data_path)
        _check_extension(data_path, WORLD_DATA_EXTENSIONS)
        data_bytes, data_name = _read_file(data_path), data_path.name

    world = parse_world(meta_bytes, data_bytes, encoding,
                        metadata_source=meta_name, data_source=data_name)
    name = world.metadata.name if world.metadata else "(no metadata)"
    logger.info(f"Loaded world '{name}': {len(world.zdos)} objects")
    return world
