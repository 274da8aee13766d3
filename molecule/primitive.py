"""The single primitive type, ``byte``, as an entity and a reader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from molecule.errors import TotalSizeNotMatch


@dataclass(frozen=True, order=True, repr=False)
class Byte:
    """An owned single byte."""

    value: int = 0

    NAME: ClassVar[str] = "Byte"

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"byte value {self.value} is out of range")

    def __repr__(self) -> str:
        return f"{self.NAME}(0x{self.value:02x})"

    __str__ = __repr__

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    @classmethod
    def from_slice(cls, data: bytes) -> Byte:
        """Build from exactly one byte, raising if the length is wrong."""
        ByteReader.verify(data, False)
        return cls(data[0])

    @classmethod
    def from_compatible_slice(cls, data: bytes) -> Byte:
        """Same as :meth:`from_slice`; a byte has no extension to allow."""
        ByteReader.verify(data, True)
        return cls(data[0])

    def as_bytes(self) -> bytes:
        return bytes((self.value,))

    def as_reader(self) -> ByteReader:
        return ByteReader(self.as_bytes())


@dataclass(frozen=True, repr=False)
class ByteReader:
    """A view over a one-byte slice; the constructor does not verify."""

    data: bytes

    NAME: ClassVar[str] = "ByteReader"

    def __repr__(self) -> str:
        return f"{self.NAME}(0x{self.data[0]:02x})"

    __str__ = __repr__

    def __int__(self) -> int:
        return self.data[0]

    @classmethod
    def verify(cls, data: bytes, compatible: bool) -> None:
        """Raise :class:`TotalSizeNotMatch` unless ``data`` is one byte long."""
        if len(data) != 1:
            raise TotalSizeNotMatch(cls.NAME, 1, len(data))

    @classmethod
    def from_slice(cls, data: bytes) -> ByteReader:
        cls.verify(data, False)
        return cls(bytes(data))

    @classmethod
    def from_compatible_slice(cls, data: bytes) -> ByteReader:
        cls.verify(data, True)
        return cls(bytes(data))

    def to_entity(self) -> Byte:
        return Byte(self.data[0])