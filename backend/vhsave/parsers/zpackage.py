"""
ZPackage reader

Sequential little-endian reader over an in-memory save buffer. Nested packages
are bounded views into the same backing buffer, so extracting one never copies
and never lets a read escape the nested range.
"""
import struct
from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

from ..models.shared_models import ZDOID, Quaternion, Vector2i, Vector3


class ZPackageError(Exception):
    """Base exception for ZPackage decoding errors

    Carries the chain of record/field names that were being decoded when the
    error was raised, outermost first.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.path: List[str] = []

    def add_context(self, label: str):
        self.path.insert(0, label)

    def __str__(self):
        return ": ".join(self.path + [self.message])


class UnexpectedEndOfData(ZPackageError):
    """Raised when a read needs more bytes than remain in the current package"""
    pass


class InvalidLength(ZPackageError):
    """Raised when a declared length or count is negative or exceeds the remaining bytes"""
    pass


class UnsupportedShape(ZPackageError):
    """Raised when the generic list reader is asked for an unknown element shape"""
    pass


class DuplicateObjectId(ZPackageError):
    """Raised when the same ZDOID appears twice in a world's object table"""
    pass


@contextmanager
def decoding(label: Optional[str]) -> Iterator[None]:
    """Prefix any ZPackageError raised inside the block with ``label`` (if given)"""
    try:
        yield
    except ZPackageError as e:
        if label:
            e.add_context(label)
        raise


_UINT8 = struct.Struct('<B')
_INT8 = struct.Struct('<b')
_INT32 = struct.Struct('<i')
_UINT32 = struct.Struct('<I')
_INT64 = struct.Struct('<q')
_UINT64 = struct.Struct('<Q')
_FLOAT = struct.Struct('<f')
_DOUBLE = struct.Struct('<d')
_VECTOR2I = struct.Struct('<2i')
_VECTOR3 = struct.Struct('<3f')
_QUATERNION = struct.Struct('<4f')
_ZDOID = struct.Struct('<qI')

# Longest varint accepted for a string length (7 bits per byte)
MAX_VARINT_BYTES = 4

# Element shapes accepted by ZPackage.read_list
LIST_SHAPES = ('string', 'int')


class ZPackage:
    """Reader for one ZPackage frame

    Args:
        data: Backing buffer (bytes, bytearray or memoryview)
        encoding: Text encoding used by read_string; undecodable bytes are
            kept through ``surrogateescape`` so the raw value is recoverable
        start: First byte of this frame inside ``data``
        end: One past the last byte of this frame (defaults to len(data))
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview], encoding: str = 'utf-8',
                 start: int = 0, end: Optional[int] = None):
        view = data if isinstance(data, memoryview) else memoryview(data)
        if view.ndim != 1 or view.itemsize != 1:
            view = view.cast('B')
        if end is None:
            end = len(view)
        if not 0 <= start <= end <= len(view):
            raise InvalidLength(f"package bounds [{start}, {end}) outside buffer of {len(view)} bytes")

        self._view = view
        self._start = start
        self._end = end
        self._pos = start
        self.encoding = encoding

    def __repr__(self):
        return f"ZPackage(offset={self.tell()}, size={len(self)})"

    def __len__(self) -> int:
        return self._end - self._start

    @property
    def remaining(self) -> int:
        """Bytes left before the end of this package"""
        return self._end - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= self._end

    def tell(self) -> int:
        """Current offset relative to the start of this package"""
        return self._pos - self._start

    def _take(self, size: int, what: str) -> int:
        """Reserve ``size`` bytes and return their absolute offset"""
        if size > self.remaining:
            raise UnexpectedEndOfData(
                f"unexpected end of data reading {what}: need {size} bytes at offset "
                f"{self.tell()}, {self.remaining} remaining"
            )
        pos = self._pos
        self._pos += size
        return pos

    def _unpack(self, codec: struct.Struct, what: str):
        return codec.unpack_from(self._view, self._take(codec.size, what))

    def _check_length(self, length: int, what: str, unit: int = 1):
        if length < 0:
            raise InvalidLength(f"negative {what} {length} at offset {self.tell()}")
        if length * unit > self.remaining:
            raise InvalidLength(
                f"{what} {length} exceeds remaining data at offset {self.tell()} "
                f"({self.remaining} bytes left)"
            )

    # ------------------------------------------------------------
    # Fixed width primitives
    # ------------------------------------------------------------

    def read_bool(self) -> bool:
        return self._view[self._take(1, 'bool')] != 0

    def read_byte(self) -> int:
        return self._unpack(_UINT8, 'byte')[0]

    def read_sbyte(self) -> int:
        return self._unpack(_INT8, 'signed byte')[0]

    def read_int(self) -> int:
        return self._unpack(_INT32, 'int32')[0]

    def read_uint(self) -> int:
        return self._unpack(_UINT32, 'uint32')[0]

    def read_long(self) -> int:
        return self._unpack(_INT64, 'int64')[0]

    def read_ulong(self) -> int:
        return self._unpack(_UINT64, 'uint64')[0]

    def read_single(self) -> float:
        return self._unpack(_FLOAT, 'float32')[0]

    def read_double(self) -> float:
        return self._unpack(_DOUBLE, 'float64')[0]

    # ------------------------------------------------------------
    # Composite values
    # ------------------------------------------------------------

    def read_zdoid(self) -> ZDOID:
        user_id, local_id = self._unpack(_ZDOID, 'ZDOID')
        return ZDOID(user_id=user_id, id=local_id)

    def read_vector2i(self) -> Vector2i:
        x, y = self._unpack(_VECTOR2I, 'Vector2i')
        return Vector2i(x=x, y=y)

    def read_vector3(self) -> Vector3:
        x, y, z = self._unpack(_VECTOR3, 'Vector3')
        return Vector3(x=x, y=y, z=z)

    def read_quaternion(self) -> Quaternion:
        x, y, z, w = self._unpack(_QUATERNION, 'Quaternion')
        return Quaternion(x=x, y=y, z=z, w=w)

    # ------------------------------------------------------------
    # Variable length data
    # ------------------------------------------------------------

    def _peek_varint_length(self):
        """Decode a string length prefix without consuming it; returns (length, size)"""
        length = 0
        for index in range(MAX_VARINT_BYTES):
            if index >= self.remaining:
                raise UnexpectedEndOfData(
                    f"unexpected end of data reading string length at offset {self.tell()}"
                )
            b = self._view[self._pos + index]
            length |= (b & 0x7F) << (7 * index)
            if not b & 0x80:
                return length, index + 1
        return length, MAX_VARINT_BYTES

    def read_string_bytes(self) -> bytes:
        """Read a varint length prefixed string and return its raw bytes"""
        length, prefix_size = self._peek_varint_length()
        if length > self.remaining - prefix_size:
            raise InvalidLength(
                f"string length {length} exceeds remaining data at offset {self.tell()} "
                f"({self.remaining - prefix_size} bytes left)"
            )
        self._pos += prefix_size
        start = self._take(length, 'string')
        return bytes(self._view[start:start + length])

    def read_string(self) -> str:
        return self.read_string_bytes().decode(self.encoding, errors='surrogateescape')

    def read_bytes(self, length: int) -> bytes:
        """Read exactly ``length`` raw bytes"""
        self._check_length(length, 'byte count')
        start = self._take(length, 'bytes')
        return bytes(self._view[start:start + length])

    def _read_length_prefix(self) -> int:
        pos = self._pos
        length = self.read_int()
        try:
            self._check_length(length, 'length prefix')
        except InvalidLength:
            self._pos = pos
            raise
        return length

    def read_byte_array(self) -> bytes:
        """Read an int32 length prefixed byte array"""
        length = self._read_length_prefix()
        start = self._take(length, 'byte array')
        return bytes(self._view[start:start + length])

    def read_package(self) -> 'ZPackage':
        """Read an int32 length prefixed nested package

        The returned package shares this package's buffer and is bounded to
        exactly the declared range.
        """
        length = self._read_length_prefix()
        start = self._take(length, 'nested package')
        return ZPackage(self._view, self.encoding, start=start, end=start + length)

    def read_count(self, element_size: int = 1) -> int:
        """Read an int32 element count

        The count is rejected when it is negative or when ``count`` elements of
        at least ``element_size`` bytes each cannot fit in the remaining data.
        """
        pos = self._pos
        count = self.read_int()
        try:
            self._check_length(count, 'element count', unit=element_size)
        except InvalidLength:
            self._pos = pos
            raise
        return count

    def read_byte_count(self, element_size: int = 1) -> int:
        """Read a uint8 element count, checked like read_count"""
        pos = self._pos
        count = self.read_byte()
        try:
            self._check_length(count, 'element count', unit=element_size)
        except InvalidLength:
            self._pos = pos
            raise
        return count

    # ------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------

    def read_string_list(self) -> List[str]:
        """Read an int32 count followed by that many strings"""
        count = self.read_count(element_size=1)
        return [self.read_string() for _ in range(count)]

    def read_int_list(self) -> List[int]:
        """Read an int32 count followed by that many int32 values"""
        count = self.read_count(element_size=_INT32.size)
        start = self._take(count * _INT32.size, 'int list')
        return list(struct.unpack_from(f'<{count}i', self._view, start))

    def read_list(self, shape: str) -> list:
        """Read a counted list whose element shape is named by ``shape``"""
        if shape == 'string':
            return self.read_string_list()
        if shape == 'int':
            return self.read_int_list()
        raise UnsupportedShape(f"cannot read list of '{shape}' (expected one of {', '.join(LIST_SHAPES)})")
