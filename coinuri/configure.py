import io
import os

from configparser import ConfigParser, NoOptionError

from coinuri.coins import CoinType, get_coin, register_coin
from coinuri.errors import CoinNotFoundError
from coinuri.support import get_log, set_logging_level, set_logging_color

log = get_log()

COIN_SECTION_PREFIX = "COIN:"

defaultconfig = \
"""
[LOGGING]
# Set the log level for the output to the terminal/console
# Possible choices: DEBUG / INFO / WARNING / ERROR
console_log_level = INFO

# Use color-coded log messages to help distinguish log levels?:
color = true

# Additional currencies can be registered with one section each, named
# COIN:<id>. Currencies are tried in the order they were registered when
# they share a uri_scheme; built-in currencies always come first.
# Example:
#
# [COIN:bitcoin.regtest]
# name = Bitcoin Regtest
# symbol = BTCREG
# uri_scheme = bitcoin
# unit_exponent = 8
# address_header = 111
# p2sh_header = 196
"""

required_coin_options = ["name", "symbol", "uri_scheme", "unit_exponent",
                         "address_header", "p2sh_header"]

_config = ConfigParser(strict=False)


def get_config():
    return _config


def coin_from_config_section(config, section):
    """ Build a CoinType from a COIN:<id> section.
    """
    coin_id = section[len(COIN_SECTION_PREFIX):]
    if not coin_id:
        raise ValueError("Config section '" + section + "' has no coin id")
    for o in required_coin_options:
        if not config.has_option(section, o):
            raise ValueError("Config file does not contain the required "
                             "option '{}' in section '{}'.".format(o, section))
    try:
        return CoinType(coin_id,
                        config.get(section, "name"),
                        config.get(section, "symbol"),
                        config.get(section, "uri_scheme"),
                        config.getint(section, "unit_exponent"),
                        config.getint(section, "address_header"),
                        config.getint(section, "p2sh_header"))
    except ValueError as e:
        raise ValueError("Invalid currency in section '" + section + "': " +
                         str(e))


def register_config_coins(config):
    registered = []
    for section in config.sections():
        if not section.startswith(COIN_SECTION_PREFIX):
            continue
        coin = coin_from_config_section(config, section)
        try:
            get_coin(coin.id)
        except CoinNotFoundError:
            registered.append(register_coin(coin))
            continue
        log.warning("Currency " + coin.id + " is already registered, "
                    "ignoring section " + section)
    return registered


def load_program_config(config_path=""):
    """ Loads the default settings, overlaid with the settings in the
    file at config_path if one is given, then applies them.
    """
    global _config
    _config = ConfigParser(strict=False)
    _config.read_file(io.StringIO(defaultconfig))
    if config_path:
        if not os.path.exists(config_path):
            raise FileNotFoundError("Config file not found: " + config_path)
        _config.read([config_path])
        log.debug("Loaded config file " + config_path)

    loglevel = _config.get("LOGGING", "console_log_level")
    try:
        set_logging_level(loglevel)
    except ValueError:
        log.error("Failed to set logging level, must be DEBUG, INFO, "
                  "WARNING, ERROR")

    try:
        set_logging_color(_config.getboolean("LOGGING", "color"))
    except (NoOptionError, ValueError):
        set_logging_color(False)

    register_config_coins(_config)
    return _config
