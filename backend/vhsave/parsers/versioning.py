"""
Version gated field tables

Each record layout is declared as an ordered table of FieldSpec entries. A
field is present in the stream only when the record version falls inside one
of its windows; read_fields walks the table front to back and collects the
values of the fields that apply.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .zpackage import ZPackage, decoding

# (first version, first version no longer matching); None leaves that side open
Window = Tuple[Optional[int], Optional[int]]
Reader = Callable[[ZPackage, int], Any]

ALWAYS: Tuple[Window, ...] = ((None, None),)


def since(version: int) -> Tuple[Window, ...]:
    return ((version, None),)


def until(version: int) -> Tuple[Window, ...]:
    return ((None, version),)


def between(first: int, stop: int) -> Tuple[Window, ...]:
    return ((first, stop),)


def exactly(version: int) -> Tuple[Window, ...]:
    return ((version, version + 1),)


def primitive(method: Callable[[ZPackage], Any]) -> Reader:
    """Adapt a ZPackage.read_* method to the (package, version) reader signature"""
    def read(pkg: ZPackage, version: int) -> Any:
        return method(pkg)
    read.__name__ = getattr(method, '__name__', 'read')
    return read


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record layout

    A field with ``name=None`` is read to advance the stream and then dropped.
    """
    name: Optional[str]
    read: Reader
    windows: Tuple[Window, ...] = ALWAYS
    label: Optional[str] = None

    @property
    def description(self) -> str:
        return self.label or (self.name or 'skipped value').replace('_', ' ')

    def applies(self, version: int) -> bool:
        for first, stop in self.windows:
            if (first is None or version >= first) and (stop is None or version < stop):
                return True
        return False

    def boundaries(self) -> List[int]:
        """Versions at which this field switches between present and absent"""
        edges = set()
        for first, stop in self.windows:
            if first is not None:
                edges.add(first)
            if stop is not None:
                edges.add(stop)
        return sorted(edges)


def read_fields(pkg: ZPackage, version: int, fields: Sequence[FieldSpec],
                values: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Read every field of ``fields`` that applies to ``version``, in table order"""
    if values is None:
        values = {}
    for spec in fields:
        if not spec.applies(version):
            continue
        with decoding(spec.description):
            value = spec.read(pkg, version)
        if spec.name is not None:
            values[spec.name] = value
    return values


def fields_present(version: int, fields: Iterable[FieldSpec]) -> List[str]:
    """Names of the named fields a record of ``version`` carries"""
    return [spec.name for spec in fields if spec.name is not None and spec.applies(version)]


def version_boundaries(fields: Iterable[FieldSpec]) -> List[int]:
    """Every version at which some field of the table appears or disappears"""
    edges = set()
    for spec in fields:
        edges.update(spec.boundaries())
    return sorted(edges)
