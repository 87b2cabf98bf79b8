# Currency registry: which currencies exist, which URI scheme each one
# claims, and how their amounts and addresses are shaped.

from typing import List, Tuple
from urllib.parse import urlparse

from coinuri.amount import Value, parse_amount
from coinuri.errors import CoinNotFoundError
from coinuri.support import get_log

log = get_log()


class CoinType(object):
    """ Describes one currency on one network.
    unit_exponent is the number of decimal places between one whole coin
    and the smallest indivisible unit (8 for bitcoin: 1 BTC = 10^8 sat).
    """

    def __init__(self, id: str, name: str, symbol: str, uri_scheme: str,
                 unit_exponent: int, address_header: int,
                 p2sh_header: int) -> None:
        if unit_exponent < 0:
            raise ValueError("Invalid unit exponent " + str(unit_exponent))
        for header in (address_header, p2sh_header):
            if not 0 <= header <= 0xff:
                raise ValueError("Invalid address header " + str(header))
        self._id = id
        self._name = name
        self._symbol = symbol
        self._uri_scheme = uri_scheme
        self._unit_exponent = unit_exponent
        self._address_header = address_header
        self._p2sh_header = p2sh_header

    id = property(lambda self: self._id)
    name = property(lambda self: self._name)
    symbol = property(lambda self: self._symbol)
    uri_scheme = property(lambda self: self._uri_scheme)
    unit_exponent = property(lambda self: self._unit_exponent)
    address_header = property(lambda self: self._address_header)
    p2sh_header = property(lambda self: self._p2sh_header)

    @property
    def acceptable_address_codes(self) -> Tuple[int, int]:
        return (self._address_header, self._p2sh_header)

    @property
    def one_coin(self) -> int:
        """ Number of smallest units in one whole coin.
        """
        return 10 ** self._unit_exponent

    def value(self, amount_str: str) -> Value:
        return parse_amount(self, amount_str)

    def __eq__(self, other):
        return isinstance(other, CoinType) and other.id == self.id

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        return "CoinType(" + self._id + ")"

    def __str__(self):
        return self._name


# Registration order matters: when several currencies share a URI
# scheme, types_from_scheme returns them in this order and the URI
# parser binds the first one that accepts the address.
_registry: List[CoinType] = []


def register_coin(coin: CoinType) -> CoinType:
    if any(c.id == coin.id for c in _registry):
        raise ValueError("Currency " + coin.id + " is already registered")
    _registry.append(coin)
    log.debug("Registered currency " + coin.id + " for scheme " +
              coin.uri_scheme)
    return coin


def unregister_coin(coin_id: str) -> CoinType:
    coin = get_coin(coin_id)
    _registry.remove(coin)
    return coin


def get_coin(coin_id: str) -> CoinType:
    for coin in _registry:
        if coin.id == coin_id:
            return coin
    raise CoinNotFoundError("Unknown currency: " + coin_id)


def get_coins() -> List[CoinType]:
    return list(_registry)


def types_from_scheme(scheme: str) -> List[CoinType]:
    """ All registered currencies claiming this URI scheme, in
    registration order. Raises CoinNotFoundError if there are none.
    """
    candidates = [c for c in _registry
                  if c.uri_scheme.lower() == scheme.lower()]
    if not candidates:
        raise CoinNotFoundError("Unsupported URI scheme: " + scheme)
    return candidates


def types_from_uri(uri: str) -> List[CoinType]:
    scheme = urlparse(uri).scheme
    if not scheme:
        raise CoinNotFoundError("No URI scheme in: " + uri)
    return types_from_scheme(scheme)


BITCOIN_MAIN = register_coin(CoinType(
    "bitcoin.main", "Bitcoin", "BTC", "bitcoin", 8, 0, 5))
BITCOIN_TEST = register_coin(CoinType(
    "bitcoin.test", "Bitcoin Test", "BTCTEST", "bitcoin", 8, 111, 196))
LITECOIN_MAIN = register_coin(CoinType(
    "litecoin.main", "Litecoin", "LTC", "litecoin", 8, 48, 5))
LITECOIN_TEST = register_coin(CoinType(
    "litecoin.test", "Litecoin Test", "LTCTEST", "litecoin", 8, 111, 196))
DOGECOIN_MAIN = register_coin(CoinType(
    "dogecoin.main", "Dogecoin", "DOGE", "dogecoin", 8, 30, 22))
PEERCOIN_MAIN = register_coin(CoinType(
    "peercoin.main", "Peercoin", "PPC", "peercoin", 6, 55, 117))
PARKBYTE_TEST = register_coin(CoinType(
    "parkbyte.test", "Parkbyte Test", "PKBTEST", "parkbyte", 6, 111, 196))
