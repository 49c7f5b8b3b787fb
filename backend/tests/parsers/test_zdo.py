"""
Tests for the ZDO codec
"""
import pytest

from vhsave.models import ZDOID, PropertyKind, Quaternion, Vector2i, Vector3
from vhsave.parsers.versioning import read_fields
from vhsave.parsers.zdo import ZDO_FIELDS, load_zdo, read_properties
from vhsave.parsers.zpackage import InvalidLength, UnexpectedEndOfData, ZPackage
from tests.fixtures.zpackage_builder import ZDO_VALUES, build_zdo


def _field_cases():
    """(field, version) pairs on both sides of every boundary of a named ZDO field"""
    for spec in ZDO_FIELDS:
        if spec.name is None:
            continue
        for boundary in spec.boundaries():
            yield spec.name, boundary - 1
            yield spec.name, boundary


class TestZDOLayout:
    """Field presence by world version"""

    @pytest.mark.parametrize("version", [12, 13, 15, 16, 17, 21, 22, 23, 24, 26])
    def test_decodes_whole_record(self, version):
        """Test every version consumes exactly the bytes it wrote"""
        pkg = ZPackage(build_zdo(version))
        zdo = load_zdo(pkg, version)

        assert pkg.at_end
        assert zdo.owner_revision == 3
        assert zdo.data_revision == 7
        assert zdo.persistent is True
        assert zdo.owner == -123456789012
        assert zdo.time_created == 987654321
        assert zdo.pgw_version == 99
        assert zdo.sector == Vector2i(x=5, y=-6)
        assert zdo.position == Vector3(x=1.5, y=2.5, z=-3.5)
        assert zdo.rotation == Quaternion(x=0.0, y=0.5, z=0.0, w=1.0)

    @pytest.mark.parametrize("name, version", list(_field_cases()))
    def test_field_threshold(self, name, version):
        """Test gated fields decode on the present side and default on the absent side"""
        spec = next(s for s in ZDO_FIELDS if s.name == name)
        zdo = load_zdo(ZPackage(build_zdo(version)), version)

        if spec.applies(version):
            assert getattr(zdo, name) == ZDO_VALUES[name]
        else:
            assert getattr(zdo, name) == type(zdo).model_fields[name].get_default(call_default_factory=True)

    def test_uid_attached(self):
        uid = ZDOID(user_id=12, id=34)
        zdo = load_zdo(ZPackage(build_zdo(26)), 26, uid)
        assert zdo.uid == uid

    def test_truncated_record(self):
        data = build_zdo(26)[:-1]
        with pytest.raises(UnexpectedEndOfData) as exc_info:
            load_zdo(ZPackage(data), 26)
        assert exc_info.value.path == ['string properties']


class TestZDOProperties:
    """Typed property bag"""

    def test_property_maps(self):
        data = build_zdo(
            26,
            floats=[(1, 0.5)],
            vectors=[(2, (1.0, 2.0, 3.0))],
            quaternions=[(3, (0.0, 0.0, 0.0, 1.0))],
            ints=[(4, -7)],
            longs=[(5, 2 ** 40)],
            strings=[(6, "tag")],
        )
        zdo = load_zdo(ZPackage(data), 26)

        assert zdo.floats == {1: 0.5}
        assert zdo.vectors == {2: Vector3(x=1.0, y=2.0, z=3.0)}
        assert zdo.quaternions == {3: Quaternion(x=0.0, y=0.0, z=0.0, w=1.0)}
        assert zdo.ints == {4: -7}
        assert zdo.longs == {5: 2 ** 40}
        assert zdo.strings == {6: "tag"}
        assert zdo.get_property(PropertyKind.STRING, 6) == "tag"
        assert zdo.get_property(PropertyKind.INT, 99, default=0) == 0

    def test_duplicate_keys_last_wins(self):
        """Test a repeated key keeps the value of its last entry"""
        data = build_zdo(26, ints=[(7, 1), (8, 2), (7, 3)])
        zdo = load_zdo(ZPackage(data), 26)
        assert zdo.ints == {7: 3, 8: 2}

    def test_tagged_stream(self):
        """Test the raw property stream keeps every entry in order"""
        data = build_zdo(26, floats=[(1, 1.0)], ints=[(7, 1), (7, 3)])
        pkg = ZPackage(data)
        read_fields(pkg, 26, ZDO_FIELDS)

        props = list(read_properties(pkg))
        assert [(p.kind, p.key, p.value) for p in props] == [
            (PropertyKind.FLOAT, 1, 1.0),
            (PropertyKind.INT, 7, 1),
            (PropertyKind.INT, 7, 3),
        ]
        assert pkg.at_end

    def test_properties_iterator(self):
        zdo = load_zdo(ZPackage(build_zdo(26, longs=[(1, 5)], strings=[(2, "a")])), 26)
        assert [(p.kind, p.key) for p in zdo.properties()] == [
            (PropertyKind.LONG, 1), (PropertyKind.STRING, 2)
        ]

    def test_count_exceeding_package(self):
        """Test a property count larger than the package can hold"""
        data = bytearray(build_zdo(26))
        # Last six bytes are the six property counts; claim 200 strings
        data[-1] = 200
        with pytest.raises(InvalidLength) as exc_info:
            load_zdo(ZPackage(bytes(data)), 26)
        assert exc_info.value.path == ['string properties']

    def test_truncated_entry(self):
        data = build_zdo(26, strings=[(6, "tag")])[:-2]
        with pytest.raises(InvalidLength) as exc_info:
            load_zdo(ZPackage(data), 26)
        assert exc_info.value.path == ['string properties', 'entry #0']
