# Payment request URIs, BIP21 style:
# https://github.com/bitcoin/bips/blob/master/bip-0021.mediawiki
# <scheme>:<address>[?amount=<amount>][&label=<label>][&message=<message>]
#
# Accepted input forms:
#   <scheme>:<address>
#   <scheme>://<address>  (non compliant, still produced by some wallets)
#   <scheme>:<address>?<name1>=<value1>&<name2>=<value2>
#   <scheme>:?r=<payment request url>  (no address)
#
# Name/value pairs are processed as follows:
#   - names are case insensitive and stored lower case
#   - 'amount' is a plain decimal number of whole coins
#   - names prefixed with 'req-' are required; none are supported, so any
#     of them invalidates the URI
#   - any other name is URL decoded (UTF-8) and kept as a string
#   - a name may appear only once; 'address' counts as already present
#     when the URI has an address

import re
from types import MappingProxyType
from typing import Dict, List, Optional, Union
from urllib.parse import quote_plus, unquote_plus

from coinuri.address import CoinAddress, decode_address
from coinuri.amount import Value, format_amount, parse_amount
from coinuri.coins import CoinType, types_from_scheme
from coinuri.errors import (AddressFormatError, AmbiguousCurrencyError,
                            CoinNotFoundError, CoinURIParseError,
                            DuplicateFieldError, InvalidAddressError,
                            InvalidArgumentError, MissingDestinationError,
                            NegativeAmountError, RequiredFieldUnknownError,
                            URISyntaxError, UnsupportedSchemeError)
from coinuri.support import get_log

log = get_log()

FIELD_MESSAGE = "message"
FIELD_LABEL = "label"
FIELD_AMOUNT = "amount"
FIELD_ADDRESS = "address"
FIELD_PAYMENT_REQUEST_URL = "r"

REQUIRED_PREFIX = "req-"

ENCODED_SPACE_CHARACTER = "%20"
AMPERSAND_SEPARATOR = "&"
QUESTION_MARK_SEPARATOR = "?"
EQUALS_SEPARATOR = "="

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
# characters that can never appear unescaped in a URI
_ILLEGAL_URI_CHARS_RE = re.compile(r'[\x00-\x20\x7f"<>\\^`{|}]')
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

FieldValue = Union[CoinAddress, Value, str]


def _check_uri_syntax(uri: str) -> str:
    """ Fail fast on anything that is not a URI at all.
    Returns the scheme.
    """
    if not isinstance(uri, str):
        raise URISyntaxError("Bad URI syntax: not a string")
    m = _ILLEGAL_URI_CHARS_RE.search(uri)
    if m is not None:
        raise URISyntaxError("Bad URI syntax: illegal character " +
                             repr(m.group(0)) + " at index " +
                             str(m.start()))
    m = _BAD_ESCAPE_RE.search(uri)
    if m is not None:
        raise URISyntaxError("Bad URI syntax: malformed escape at index " +
                             str(m.start()))
    m = _SCHEME_RE.match(uri)
    if m is None:
        raise URISyntaxError("Unrecognisable URI format: " + uri)
    return m.group(1)


def _decode_value(name: str, value: str) -> str:
    try:
        return unquote_plus(value, encoding="utf-8", errors="strict")
    except UnicodeDecodeError:
        raise URISyntaxError("Malformed URI - '" + name + "' is not "
                             "valid UTF-8 once decoded")


class _FieldAccumulator(object):
    """ Write-once store used while parsing. Each name may be put only
    once; seal() hands out a read-only view.
    """

    def __init__(self) -> None:
        self._fields: Dict[str, FieldValue] = {}

    def put(self, name: str, value: FieldValue) -> None:
        if name in self._fields:
            raise DuplicateFieldError("'" + name + "' is duplicated, URI is "
                                      "invalid", field=name)
        self._fields[name] = value

    def get(self, name: str) -> Optional[FieldValue]:
        return self._fields.get(name)

    def seal(self) -> MappingProxyType:
        return MappingProxyType(dict(self._fields))


class CoinURI(object):
    """ A parsed payment URI.

    If coin_type is None the currency is taken from the URI scheme. When
    several registered currencies share the scheme (mainnet and testnet
    usually do) the address is tried against each of them in registration
    order and the FIRST one that accepts it wins. An address that is valid
    for more than one of them is NOT reported as ambiguous; it is bound to
    whichever was registered first.

    If coin_type is given, only that currency is tried and its own scheme
    must prefix the input.

    Raises a CoinURIParseError subclass if the input is not a valid URI;
    nothing is returned partially parsed.
    """

    def __init__(self, uri: str, coin_type: Optional[CoinType] = None) -> None:
        log.debug("Attempting to parse '" + str(uri) + "' for " +
                  (coin_type.id if coin_type is not None else "any"))
        scheme = _check_uri_syntax(uri)

        if coin_type is None:
            try:
                candidates = types_from_scheme(scheme)
            except CoinNotFoundError:
                raise UnsupportedSchemeError("Unsupported URI scheme: " +
                                             scheme)
            uri_scheme = candidates[0].uri_scheme
        else:
            candidates = [coin_type]
            uri_scheme = coin_type.uri_scheme

        # blockchain.info style bitcoin://address is accepted too
        if uri.startswith(uri_scheme + "://"):
            scheme_specific_part = uri[len(uri_scheme + "://"):]
        elif uri.startswith(uri_scheme + ":"):
            scheme_specific_part = uri[len(uri_scheme + ":"):]
        else:
            raise UnsupportedSchemeError("Unsupported URI scheme: " + scheme)

        # The query is split before any URL decoding so that an escaped
        # '&' (%26) inside a label does not act as a separator.
        address_split_tokens = scheme_specific_part.split(
            QUESTION_MARK_SEPARATOR)
        if len(address_split_tokens) > 2:
            raise URISyntaxError("Too many question marks in URI '" + uri +
                                 "'")
        address_token = address_split_tokens[0]  # may be empty
        if len(address_split_tokens) == 2 and address_split_tokens[1]:
            name_value_pair_tokens = address_split_tokens[1].split(
                AMPERSAND_SEPARATOR)
        else:
            name_value_pair_tokens = []

        fields = _FieldAccumulator()
        self._type = None
        if address_token:
            address = self._resolve_address(candidates, address_token)
            fields.put(FIELD_ADDRESS, address)
            self._type = address.type
        elif coin_type is not None:
            self._type = coin_type

        self._parse_parameters(fields, name_value_pair_tokens)

        if not address_token and fields.get(FIELD_PAYMENT_REQUEST_URL) is None:
            raise MissingDestinationError("No address and no r= parameter "
                                          "found")
        self._fields = fields.seal()
        log.debug("Parsed " + str(self))

    @staticmethod
    def _resolve_address(candidates: List[CoinType],
                         address_token: str) -> CoinAddress:
        # First match wins, see the class docstring.
        for candidate in candidates:
            try:
                address = decode_address(candidate, address_token)
            except AddressFormatError as e:
                log.debug("Address " + address_token + " is not valid for " +
                          candidate.id + ": " + str(e))
                continue
            log.debug("Address " + address_token + " resolved to " +
                      candidate.id)
            return address
        raise InvalidAddressError("Bad address: " + address_token,
                                  token=address_token)

    def _parse_parameters(self, fields: _FieldAccumulator,
                          name_value_pair_tokens: List[str]) -> None:
        for token in name_value_pair_tokens:
            sep_index = token.find(EQUALS_SEPARATOR)
            if sep_index == -1:
                raise URISyntaxError("Malformed URI - no separator in '" +
                                     token + "'")
            if sep_index == 0:
                raise URISyntaxError("Malformed URI - empty name '" +
                                     token + "'")
            name = token[:sep_index].lower()
            value = token[sep_index + 1:]

            if name == FIELD_AMOUNT:
                fields.put(FIELD_AMOUNT, self._parse_amount_field(value))
            elif name.startswith(REQUIRED_PREFIX):
                raise RequiredFieldUnknownError("'" + name + "' is required "
                                                "but not known, this URI is "
                                                "not valid", field=name)
            elif value:
                # an empty value has no effect and is not stored
                fields.put(name, _decode_value(name, value))

    def _parse_amount_field(self, value: str) -> Value:
        if self._type is None:
            raise AmbiguousCurrencyError("Cannot parse amount '" + value +
                                         "' without an address or an "
                                         "explicit currency", token=value)
        amount = parse_amount(self._type, value)
        if amount.signum() < 0:
            raise NegativeAmountError("'" + value + "' Negative coins "
                                      "specified", token=value)
        return amount

    @property
    def type(self) -> Optional[CoinType]:
        return self._type

    @property
    def address(self) -> Optional[CoinAddress]:
        """ The address from the URI, if one was present. A URI with only
        an r= parameter has none.
        """
        address = self._fields.get(FIELD_ADDRESS)
        return address if isinstance(address, CoinAddress) else None

    @property
    def amount(self) -> Optional[Value]:
        return self._fields.get(FIELD_AMOUNT)

    @property
    def label(self) -> Optional[str]:
        return self._fields.get(FIELD_LABEL)

    @property
    def message(self) -> Optional[str]:
        return self._fields.get(FIELD_MESSAGE)

    @property
    def payment_request_url(self) -> Optional[str]:
        """ The URL from which a BIP70 payment request may be fetched.
        """
        return self._fields.get(FIELD_PAYMENT_REQUEST_URL)

    @property
    def fields(self) -> MappingProxyType:
        return self._fields

    def get(self, name: str) -> Optional[FieldValue]:
        return self._fields.get(name)

    def to_uri_string(self) -> str:
        if self.address is None:
            raise InvalidArgumentError("URI has no address, only a payment "
                                       "request URL")
        return convert_to_coin_uri(self.address, self.amount, self.label,
                                   self.message)

    def __eq__(self, other):
        return (isinstance(other, CoinURI) and other.type == self._type and
                list(other.fields.items()) == list(self._fields.items()))

    def __hash__(self):
        return hash((self._type, tuple(self._fields.items())))

    def __repr__(self):
        return "CoinURI(" + repr(self._type) + ", " + str(self) + ")"

    def __str__(self):
        return "CoinURI[" + ",".join(
            "'" + k + "'='" + str(v) + "'" for k, v in self._fields.items()
            ) + "]"


def encode_url_string(s: str) -> str:
    """ URL encode a free text value. Spaces become %20, never '+', and
    only letters, digits and "._-*" are left unescaped.
    """
    return quote_plus(s, safe="*", encoding="utf-8").replace(
        "+", ENCODED_SPACE_CHARACTER).replace("~", "%7E")


def convert_to_coin_uri(address: CoinAddress, amount: Optional[Value] = None,
                        label: Optional[str] = None,
                        message: Optional[str] = None) -> str:
    """ Simple payment URI builder using known good fields.
    Fields are emitted in the fixed order amount, label, message; empty
    label and message are left out.
    """
    if address is None:
        raise InvalidArgumentError("An address is required")
    coin_type = address.type
    if amount is not None:
        if amount.signum() < 0:
            raise InvalidArgumentError("Coin must be positive")
        if amount.type != coin_type:
            raise InvalidArgumentError("Amount in " + str(amount.type) +
                                       " for an address of " + str(coin_type))

    params = []
    if amount is not None:
        params.append(FIELD_AMOUNT + EQUALS_SEPARATOR + format_amount(amount))
    if label:
        params.append(FIELD_LABEL + EQUALS_SEPARATOR +
                      encode_url_string(label))
    if message:
        params.append(FIELD_MESSAGE + EQUALS_SEPARATOR +
                      encode_url_string(message))

    uri = coin_type.uri_scheme + ":" + str(address)
    if params:
        uri += QUESTION_MARK_SEPARATOR + AMPERSAND_SEPARATOR.join(params)
    return uri


encode_coin_uri = convert_to_coin_uri


def decode_coin_uri(uri: str, coin_type: Optional[CoinType] = None) -> CoinURI:
    return CoinURI(uri, coin_type)


def is_coin_uri(uri: str, coin_type: Optional[CoinType] = None) -> bool:
    try:
        CoinURI(uri, coin_type)
    except CoinURIParseError:
        return False
    return True
