# Error taxonomy for payment URI parsing and building.
# Every class derives from ValueError so callers that only care about
# "bad input" can catch that.


class CoinURIError(ValueError):
    pass


class CoinURIParseError(CoinURIError):
    """The input is not a usable payment URI. The message is meant to be
    shown to the user as is.
    """
    pass


class URISyntaxError(CoinURIParseError):
    pass


class UnsupportedSchemeError(CoinURIParseError):
    pass


class InvalidAddressError(CoinURIParseError):

    def __init__(self, msg, token=None):
        super().__init__(msg)
        self.token = token


class DuplicateFieldError(CoinURIParseError):

    def __init__(self, msg, field=None):
        super().__init__(msg)
        self.field = field


class RequiredFieldUnknownError(CoinURIParseError):

    def __init__(self, msg, field=None):
        super().__init__(msg)
        self.field = field


class MissingDestinationError(CoinURIParseError):
    pass


class OptionalFieldValidationError(CoinURIParseError):

    def __init__(self, msg, token=None):
        super().__init__(msg)
        self.token = token


class InvalidAmountError(OptionalFieldValidationError):
    pass


class PrecisionError(OptionalFieldValidationError):
    pass


class NegativeAmountError(OptionalFieldValidationError):
    pass


class AmbiguousCurrencyError(OptionalFieldValidationError):
    pass


class InvalidArgumentError(CoinURIError):
    pass


class CoinNotFoundError(ValueError):
    pass


class AddressFormatError(ValueError):
    pass
