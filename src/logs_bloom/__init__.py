# The 2048-bit bloom carried by Ethereum receipts and block headers.
# Size, hash count and hash function are fixed by the protocol.
from typing import Iterable, Iterator, Optional, Union

from fips_202 import keccak256

BYTE_SIZE = 256
BIT_SIZE = BYTE_SIZE * 8
HASH_ROUNDS = 3
ADD_MASK = 0x07FF  # 11 bits, addresses all of BIT_SIZE
LEGACY_CHECK_MASK = 0x01FF  # 9 bits

BytesLike = Union[bytes, bytearray, memoryview]


class InvalidLengthError(ValueError):
    def __init__(self, length: int):
        super().__init__(
            f"bloom must be {BYTE_SIZE} bytes ({BIT_SIZE} bits), got {length}"
        )
        self.length = length


def _require_bytes(value, what: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes, got {type(value).__name__}")
    return bytes(value)


def decode_hex(text: str) -> bytes:
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    return bytes.fromhex(text)


def trim_leading_zeros(element: bytes) -> bytes:
    """Strip the leading run of zero bytes.

    Addresses are often right-aligned in 32-byte words; both widths must hash
    the same. An all-zero (or empty) element trims to b"".
    """
    for i, octet in enumerate(element):
        if octet != 0:
            return element[i:]
    return b""


def bit_positions(digest: bytes, mask: int) -> Iterator[int]:
    for i in range(HASH_ROUNDS):
        yield int.from_bytes(digest[2 * i : 2 * i + 2], "big") & mask


def locate(position: int) -> tuple[int, int]:
    """Map a bit position to (byte index, bit value) in the vector.

    Position 0 is the least significant bit of the last byte.
    """
    return BYTE_SIZE - (position >> 3) - 1, 1 << (position % 8)


class Bloom:
    ADD_MASK = ADD_MASK
    CHECK_MASK = ADD_MASK

    def __init__(self, bits: Optional[BytesLike] = None):
        if bits is None:
            self.bits = bytearray(BYTE_SIZE)
            return
        bits = _require_bytes(bits, "bloom")
        if len(bits) != BYTE_SIZE:
            raise InvalidLengthError(len(bits))
        self.bits = bytearray(bits)

    @classmethod
    def from_bytes(cls, bits: BytesLike) -> "Bloom":
        return cls(bits)

    @classmethod
    def from_hex(cls, text: str) -> "Bloom":
        return cls(decode_hex(text))

    @classmethod
    def from_elements(cls, elements: Iterable[BytesLike]) -> "Bloom":
        bloom = cls()
        for element in elements:
            bloom.add(element)
        return bloom

    def indices(self, element: BytesLike, mask: int) -> Iterator[int]:
        element = _require_bytes(element, "element")
        digest = keccak256(trim_leading_zeros(element))
        return bit_positions(digest, mask)

    def add(self, element: BytesLike) -> None:
        # resolve every position before touching the vector
        for position in list(self.indices(element, self.ADD_MASK)):
            byte_index, bit = locate(position)
            self.bits[byte_index] |= bit

    def check(self, element: BytesLike) -> bool:
        for position in self.indices(element, self.CHECK_MASK):
            byte_index, bit = locate(position)
            if not self.bits[byte_index] & bit:
                return False
        return True

    def multi_check(self, topics: Iterable[Union[BytesLike, str]]) -> bool:
        for topic in topics:
            if isinstance(topic, str):
                topic = decode_hex(topic)
            if not self.check(topic):
                return False
        return True

    def union(self, other: Optional["Bloom"]) -> None:
        if other is None:
            return
        if not isinstance(other, Bloom):
            raise TypeError(f"cannot union with {type(other).__name__}")
        assert len(self.bits) == len(other.bits) == BYTE_SIZE
        for i in range(BYTE_SIZE):
            self.bits[i] |= other.bits[i]

    def copy(self) -> "Bloom":
        return type(self)(self.bits)

    def hex(self) -> str:
        return "0x" + self.bits.hex()

    def __bytes__(self) -> bytes:
        return bytes(self.bits)

    def __contains__(self, element: BytesLike) -> bool:
        return self.check(element)

    def __or__(self, other: "Bloom") -> "Bloom":
        if not isinstance(other, Bloom):
            return NotImplemented
        out = self.copy()
        out.union(other)
        return out

    def __ior__(self, other: "Bloom") -> "Bloom":
        if not isinstance(other, Bloom):
            return NotImplemented
        self.union(other)
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bloom):
            return NotImplemented
        return type(self) is type(other) and self.bits == other.bits

    def __repr__(self) -> str:
        set_bits = sum(bin(octet).count("1") for octet in self.bits)
        return f"{type(self).__name__}({set_bits}/{BIT_SIZE} bits set)"


class LegacyBloom(Bloom):
    """Queries through a 9-bit mask while inserting through an 11-bit one.

    Matches filters read by older ethereumjs tooling. Positions above 511
    written by add() are never consulted, so check() can report an added
    element as absent.
    """

    CHECK_MASK = LEGACY_CHECK_MASK


__all__ = [
    "ADD_MASK",
    "BIT_SIZE",
    "BYTE_SIZE",
    "HASH_ROUNDS",
    "LEGACY_CHECK_MASK",
    "Bloom",
    "InvalidLengthError",
    "LegacyBloom",
    "bit_positions",
    "decode_hex",
    "locate",
    "trim_leading_zeros",
]
