"""
Parallel decoding utilities

Decodes many independent save buffers on a thread pool. Every decode works on
its own buffer and builds its own model, so no locking is involved.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from ..config.settings import get_settings
from ..parsers.player import parse_player_profile
from ..parsers.world import parse_world, parse_world_metadata
from ..parsers.zpackage import ZPackageError


def _parse_world_data(data: bytes, encoding: str):
    return parse_world(data=data, encoding=encoding)


DECODERS: Dict[str, Callable[[bytes, str], Any]] = {
    'player': parse_player_profile,
    'world_metadata': parse_world_metadata,
    'world_data': _parse_world_data,
}


def decode_buffer(name: str, data: bytes, kind: str, encoding: str = 'utf-8') -> Dict[str, Any]:
    """
    Decode one buffer

    Args:
        name: Label of the buffer (for error reporting)
        data: Raw file contents
        kind: One of DECODERS ('player', 'world_metadata', 'world_data')
        encoding: String encoding passed to the decoder

    Returns:
        Dict containing the decoded model or the decode error
    """
    decoder = DECODERS.get(kind)
    if decoder is None:
        raise ValueError(f"Unknown record kind '{kind}' (expected one of {', '.join(DECODERS)})")

    try:
        model = decoder(data, encoding)
    except ZPackageError as e:
        logger.warning(f"Failed to decode {name}: {e}")
        return {
            'name': name,
            'success': False,
            'data': None,
            'error': str(e)
        }

    return {
        'name': name,
        'success': True,
        'data': model,
        'error': None
    }


def decode_buffers_parallel(buffers: List[Tuple[str, bytes]], kind: str,
                            max_workers: Optional[int] = None,
                            encoding: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Decode multiple buffers of the same record kind on a thread pool

    Args:
        buffers: List of (name, data) tuples
        kind: Record kind of every buffer
        max_workers: Number of threads (default: VHSAVE_MAX_WORKERS)
        encoding: String encoding (default: VHSAVE_STRING_ENCODING)

    Returns:
        Dict mapping name to the decode_buffer result

    Example:
        results = decode_buffers_parallel([('a.fch', a), ('b.fch', b)], 'player')
        profile = results['a.fch']['data']
    """
    settings = get_settings()
    max_workers = max_workers or settings.max_workers
    encoding = encoding or settings.string_encoding
    results = {}

    if not buffers:
        return results

    # Not worth a pool for a single buffer
    if len(buffers) == 1 or max_workers == 1:
        for name, data in buffers:
            results[name] = decode_buffer(name, data, kind, encoding)
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_name = {
            executor.submit(decode_buffer, name, data, kind, encoding): name
            for name, data in buffers
        }
        for future in as_completed(future_to_name):
            name = future_to_name[future]
            results[name] = future.result()

    logger.debug(f"Decoded {len(results)} {kind} buffers with {max_workers} workers")
    return results
