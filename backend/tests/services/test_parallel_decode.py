"""
Tests for decoding many buffers on a thread pool
"""
import pytest

from vhsave.parsers import parse_player_profile, parse_world
from vhsave.services.parallel_decode import decode_buffer, decode_buffers_parallel
from tests.fixtures.zpackage_builder import (
    build_player_data, build_profile, build_profile_file, build_world_data,
    build_world_metadata, build_zdo
)


def _profiles(count):
    return [
        (f"player{i}.fch", build_profile_file(build_profile(
            30, name=f"Player{i}", player_id=i, player_data=build_player_data(20 + i % 5)
        )))
        for i in range(count)
    ]


class TestDecodeBuffer:

    def test_success(self):
        name, data = _profiles(1)[0]
        result = decode_buffer(name, data, 'player')
        assert result['success'] is True
        assert result['error'] is None
        assert result['data'].name == "Player0"

    def test_failure_is_reported(self):
        result = decode_buffer("broken.fch", b'\x05', 'player')
        assert result['success'] is False
        assert result['data'] is None
        assert result['error'].startswith("profile package: unexpected end of data")

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            decode_buffer("x", b'', 'character')

    def test_world_kinds(self):
        meta = decode_buffer("w.fwl", build_world_metadata(26), 'world_metadata')
        data = decode_buffer("w.db", build_world_data(26), 'world_data')
        assert meta['data'].name == "Midgard"
        assert data['data'].version == 26


class TestDecodeBuffersParallel:

    def test_matches_sequential(self):
        """Test concurrent decoding gives the same models as decoding one by one"""
        buffers = _profiles(12)
        results = decode_buffers_parallel(buffers, 'player', max_workers=4, encoding='utf-8')

        assert set(results) == {name for name, _ in buffers}
        for name, data in buffers:
            assert results[name]['success'] is True
            assert results[name]['data'] == parse_player_profile(data)

    def test_worlds_in_parallel(self):
        buffers = [
            (f"world{i}.db", build_world_data(26, zdos=[((i, j), build_zdo(26)) for j in range(3)]))
            for i in range(6)
        ]
        results = decode_buffers_parallel(buffers, 'world_data', max_workers=3, encoding='utf-8')
        for name, data in buffers:
            assert results[name]['data'] == parse_world(data=data)

    def test_one_failure_does_not_stop_others(self):
        buffers = _profiles(3) + [("broken.fch", b'\x00\x00')]
        results = decode_buffers_parallel(buffers, 'player', max_workers=2, encoding='utf-8')

        assert results["broken.fch"]['success'] is False
        assert all(results[name]['success'] for name, _ in buffers[:3])

    def test_single_worker(self):
        buffers = _profiles(3)
        results = decode_buffers_parallel(buffers, 'player', max_workers=1, encoding='utf-8')
        assert [results[name]['data'].name for name, _ in buffers] == ["Player0", "Player1", "Player2"]

    def test_empty(self):
        assert decode_buffers_parallel([], 'player', max_workers=2, encoding='utf-8') == {}
