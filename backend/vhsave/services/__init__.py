"""
Save loading services
"""

from .save_loader import load_player_profile, load_world
from .parallel_decode import decode_buffer, decode_buffers_parallel, DECODERS

__all__ = [
    'load_player_profile', 'load_world',
    'decode_buffer', 'decode_buffers_parallel', 'DECODERS',
]
