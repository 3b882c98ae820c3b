from fips_202.keccak import (
    Keccak,
    Keccak256,
    Keccak512,
    Sha3_224,
    Sha3_256,
    Sha3_384,
    Sha3_512,
    keccak256,
)

__all__ = [
    "Keccak",
    "Keccak256",
    "Keccak512",
    "Sha3_224",
    "Sha3_256",
    "Sha3_384",
    "Sha3_512",
    "keccak256",
]
