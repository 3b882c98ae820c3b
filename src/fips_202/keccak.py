from fixedint import UInt64

LANE_BIT_LEN = 64
LANE_BYTE_LEN = LANE_BIT_LEN // 8
STATE_LANES = 25
PERMUTATION_ROUNDS = 24

# Round constants for the iota step, as tabulated in the
# Keccak reference. RC[i] is XORed into lane (0, 0) at the end of round i.
ROUND_CONSTANTS = [
    UInt64(i)
    for i in [
        0x0000000000000001,
        0x0000000000008082,
        0x800000000000808A,
        0x8000000080008000,
        0x000000000000808B,
        0x0000000080000001,
        0x8000000080008081,
        0x8000000000008009,
        0x000000000000008A,
        0x0000000000000088,
        0x0000000080008009,
        0x000000008000000A,
        0x000000008000808B,
        0x800000000000008B,
        0x8000000000008089,
        0x8000000000008003,
        0x8000000000008002,
        0x8000000000000080,
        0x000000000000800A,
        0x800000008000000A,
        0x8000000080008081,
        0x8000000000008080,
        0x0000000080000001,
        0x8000000080008008,
    ]
]


def _rho_offsets() -> list[int]:
    # FIPS 202 Algorithm 2: walk (x, y) from (1, 0), offset is (t+1)(t+2)/2
    offsets = [0] * STATE_LANES
    x, y = 1, 0
    for t in range(PERMUTATION_ROUNDS):
        offsets[index(x, y)] = ((t + 1) * (t + 2) // 2) % LANE_BIT_LEN
        x, y = y, (2 * x + 3 * y) % 5
    return offsets


def index(x: int, y: int) -> int:
    return (x % 5) + 5 * (y % 5)


def rotl(lane: int, n: int) -> UInt64:
    lane = UInt64(lane)
    if n == 0:
        return lane
    return (lane << n) | (lane >> (LANE_BIT_LEN - n))


RHO_OFFSETS = _rho_offsets()


def theta(state: list[UInt64]) -> list[UInt64]:
    columns = [
        state[index(x, 0)]
        ^ state[index(x, 1)]
        ^ state[index(x, 2)]
        ^ state[index(x, 3)]
        ^ state[index(x, 4)]
        for x in range(5)
    ]
    out = list(state)
    for x in range(5):
        d = columns[(x - 1) % 5] ^ rotl(columns[(x + 1) % 5], 1)
        for y in range(5):
            out[index(x, y)] ^= d
    return out


def rho_pi(state: list[UInt64]) -> list[UInt64]:
    out = [UInt64(0)] * STATE_LANES
    for x in range(5):
        for y in range(5):
            out[index(y, 2 * x + 3 * y)] = rotl(
                state[index(x, y)], RHO_OFFSETS[index(x, y)]
            )
    return out


def chi(state: list[UInt64]) -> list[UInt64]:
    out = [UInt64(0)] * STATE_LANES
    for x in range(5):
        for y in range(5):
            out[index(x, y)] = state[index(x, y)] ^ (
                (~state[index(x + 1, y)]) & state[index(x + 2, y)]
            )
    return out


def iota(state: list[UInt64], round_num: int) -> list[UInt64]:
    out = list(state)
    out[0] ^= ROUND_CONSTANTS[round_num]
    return out


class Keccak:
    RATE_BYTE_LEN: int
    DIGEST_BYTE_LEN: int
    DOMAIN_SUFFIX: int

    @classmethod
    def pad(cls, message: bytes) -> bytes:
        # pad10*1 with the domain bits folded into the first padding byte.
        # When only one byte is free, the suffix and the final 1 share it.
        pad_len = cls.RATE_BYTE_LEN - len(message) % cls.RATE_BYTE_LEN
        padding = bytearray(pad_len)
        padding[0] |= cls.DOMAIN_SUFFIX
        padding[-1] |= 0x80
        return bytes(message) + bytes(padding)

    @classmethod
    def permute(cls, state: list[UInt64]) -> list[UInt64]:
        for round_num in range(PERMUTATION_ROUNDS):
            state = iota(chi(rho_pi(theta(state))), round_num)
        return state

    @classmethod
    def process(cls, message: bytes) -> list[UInt64]:
        if not isinstance(message, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"{cls.__name__} expects bytes, got {type(message).__name__}"
            )
        message = cls.pad(message)
        state = [UInt64(0)] * STATE_LANES
        for block_num in range(len(message) // cls.RATE_BYTE_LEN):
            block = message[
                block_num
                * cls.RATE_BYTE_LEN : (block_num + 1)
                * cls.RATE_BYTE_LEN
            ]
            for lane in range(cls.RATE_BYTE_LEN // LANE_BYTE_LEN):
                state[lane] ^= int.from_bytes(
                    block[lane * LANE_BYTE_LEN : (lane + 1) * LANE_BYTE_LEN],
                    "little",
                )
            state = cls.permute(state)
        return state

    @classmethod
    def digest(cls, message: bytes) -> bytes:
        # every digest length used here fits in a single squeeze
        squeezed = b"".join(
            int.to_bytes(int(lane), LANE_BYTE_LEN, "little")
            for lane in cls.process(message)[: cls.RATE_BYTE_LEN // LANE_BYTE_LEN]
        )
        return squeezed[: cls.DIGEST_BYTE_LEN]


class Keccak256(Keccak):
    """Keccak-256 as submitted to the SHA-3 competition, used by Ethereum."""

    RATE_BYTE_LEN = 136
    DIGEST_BYTE_LEN = 32
    DOMAIN_SUFFIX = 0x01


class Keccak512(Keccak):
    RATE_BYTE_LEN = 72
    DIGEST_BYTE_LEN = 64
    DOMAIN_SUFFIX = 0x01


class Sha3_224(Keccak):
    RATE_BYTE_LEN = 144
    DIGEST_BYTE_LEN = 28
    DOMAIN_SUFFIX = 0x06


class Sha3_256(Keccak):
    RATE_BYTE_LEN = 136
    DIGEST_BYTE_LEN = 32
    DOMAIN_SUFFIX = 0x06


class Sha3_384(Keccak):
    RATE_BYTE_LEN = 104
    DIGEST_BYTE_LEN = 48
    DOMAIN_SUFFIX = 0x06


class Sha3_512(Keccak):
    RATE_BYTE_LEN = 72
    DIGEST_BYTE_LEN = 64
    DOMAIN_SUFFIX = 0x06


def keccak256(message: bytes) -> bytes:
    return Keccak256.digest(message)
