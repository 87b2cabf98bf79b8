import struct
from typing import Any

from bitcointx import base58
from bitcointx.core import Hash

from coinuri.errors import AddressFormatError

# Base58Check addresses: one version byte, a 20 byte hash160 and a four
# byte double-SHA256 checksum.
HASH160_LENGTH = 20
CHECKSUM_LENGTH = 4


def bin_to_b58check(inp: bytes, magicbyte: int) -> str:
    """ Returns the base58 encoding of the payload, prefixed with
    the version byte and suffixed with the checksum.
    """
    assert(0 <= magicbyte <= 0xff)
    inp_fmtd = struct.pack(b'B', magicbyte) + inp
    checksum = Hash(inp_fmtd)[:CHECKSUM_LENGTH]
    return base58.encode(inp_fmtd + checksum)


def b58check_to_bin(s: str):
    """ Returns (version byte, payload) of a Base58Check string.
    Raises AddressFormatError on bad characters or a bad checksum.
    """
    try:
        data = base58.decode(s)
    except base58.Base58Error as e:
        raise AddressFormatError("Invalid base58 data: " + str(e))
    if len(data) <= CHECKSUM_LENGTH:
        raise AddressFormatError("Base58 data too short")
    if Hash(data[:-CHECKSUM_LENGTH])[:CHECKSUM_LENGTH] != \
            data[-CHECKSUM_LENGTH:]:
        raise AddressFormatError("Checksum wrong. Typo in address?")
    return data[0], data[1:-CHECKSUM_LENGTH]


class CoinAddress(object):
    """ An address that has been validated against one currency's
    version bytes. The same string may be valid for several currencies
    (e.g. testnets sharing version bytes); the address is always bound
    to exactly one.
    """

    def __init__(self, coin_type: Any, version: int, hash160: bytes) -> None:
        if version not in coin_type.acceptable_address_codes:
            raise AddressFormatError("Version " + str(version) +
                                     " is not used by " + coin_type.id)
        if len(hash160) != HASH160_LENGTH:
            raise AddressFormatError("Address has wrong length.")
        self._type = coin_type
        self._version = version
        self._hash160 = bytes(hash160)

    type = property(lambda self: self._type)
    version = property(lambda self: self._version)
    hash160 = property(lambda self: self._hash160)

    @classmethod
    def from_hash(cls, coin_type: Any, hash160: bytes,
                  p2sh: bool = False) -> "CoinAddress":
        if p2sh:
            return cls(coin_type, coin_type.p2sh_header, hash160)
        return cls(coin_type, coin_type.address_header, hash160)

    def is_p2sh(self) -> bool:
        return self._version == self._type.p2sh_header

    def __eq__(self, other):
        return (isinstance(other, CoinAddress) and
                other.type == self._type and
                other.version == self._version and
                other.hash160 == self._hash160)

    def __hash__(self):
        return hash((self._type, self._version, self._hash160))

    def __repr__(self):
        return "CoinAddress(" + self._type.id + ", " + str(self) + ")"

    def __str__(self):
        return bin_to_b58check(self._hash160, self._version)


def decode_address(coin_type: Any, addr: str) -> CoinAddress:
    if not isinstance(addr, str) or not addr:
        raise AddressFormatError("Empty address")
    version, payload = b58check_to_bin(addr)
    if version not in coin_type.acceptable_address_codes:
        raise AddressFormatError("Wrong address version for " +
                                 coin_type.id + ". Testnet/mainnet confused?")
    if len(payload) != HASH160_LENGTH:
        raise AddressFormatError("Address has correct checksum but "
                                 "wrong length.")
    return CoinAddress(coin_type, version, payload)


def is_valid_address(coin_type: Any, addr: str) -> bool:
    try:
        decode_address(coin_type, addr)
    except AddressFormatError:
        return False
    return True
