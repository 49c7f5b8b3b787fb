"""
Tests for loading save files from disk
"""
import pytest

from vhsave.parsers.zpackage import UnexpectedEndOfData, ZPackageError
from vhsave.services.save_loader import load_player_profile, load_world
from tests.fixtures.zpackage_builder import (
    build_player_data, build_profile, build_profile_file, build_world_data,
    build_world_metadata, build_zdo
)


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "bjorn.fch"
    path.write_bytes(build_profile_file(build_profile(30, player_data=build_player_data(24))))
    return path


@pytest.fixture
def world_files(tmp_path):
    meta = tmp_path / "Midgard.fwl"
    meta.write_bytes(build_world_metadata(26))
    data = tmp_path / "Midgard.db"
    data.write_bytes(build_world_data(26, net_time=100.0, zdos=[((1, 1), build_zdo(26))]))
    return meta, data


class TestLoadPlayerProfile:

    def test_load(self, profile_file):
        profile = load_player_profile(profile_file)
        assert profile.name == "Bjorn"
        assert profile.player.version == 24

    def test_load_str_path(self, profile_file):
        assert load_player_profile(str(profile_file)).version == 30

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_player_profile(tmp_path / "nobody.fch")

    def test_error_names_file(self, tmp_path):
        """Test decode errors start with the file name"""
        path = tmp_path / "broken.fch"
        path.write_bytes(b'\x01\x00')
        with pytest.raises(UnexpectedEndOfData) as exc_info:
            load_player_profile(path)
        assert exc_info.value.path[0] == "broken.fch"
        assert str(exc_info.value).startswith("broken.fch: profile package: ")

    def test_unexpected_extension_still_loads(self, tmp_path, profile_file):
        other = tmp_path / "bjorn.bak"
        other.write_bytes(profile_file.read_bytes())
        assert load_player_profile(other).name == "Bjorn"


class TestLoadWorld:

    def test_metadata_and_data(self, world_files):
        meta, data = world_files
        world = load_world(meta, data)

        assert world.metadata.name == "Midgard"
        assert world.version == 26
        assert world.net_time == 100.0
        assert len(world.zdos) == 1

    def test_metadata_only(self, world_files):
        meta, _ = world_files
        world = load_world(meta)
        assert world.metadata.world_gen_version == 2
        assert world.zdos == []
        assert world.version == 0

    def test_data_only(self, world_files):
        _, data = world_files
        world = load_world(data_path=data)
        assert world.metadata is None
        assert world.version == 26

    def test_requires_a_file(self):
        with pytest.raises(ValueError):
            load_world()

    def test_error_names_data_file(self, tmp_path, world_files):
        meta, _ = world_files
        broken = tmp_path / "broken.db"
        broken.write_bytes(build_world_data(26)[:-2])
        with pytest.raises(ZPackageError) as exc_info:
            load_world(meta, broken)
        assert exc_info.value.path[:3] == ["broken.db", "world data", "random events"]

    def test_error_names_metadata_file(self, tmp_path, world_files):
        _, data = world_files
        broken = tmp_path / "broken.fwl"
        broken.write_bytes(b'\x00')
        with pytest.raises(ZPackageError) as exc_info:
            load_world(broken, data)
        assert exc_info.value.path[:2] == ["broken.fwl", "world metadata"]
