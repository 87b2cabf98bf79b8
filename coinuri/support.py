import logging

from chromalog.log import (
    ColorizingStreamHandler,
    ColorizingFormatter,
)
from chromalog.colorizer import GenericColorizer, MonochromaticColorizer
from colorama import Fore, Back, Style

COINURI_APP_NAME = "coinuri"

# our chosen colorings for log messages:
coinuri_color_map = {
    'debug': (Style.DIM + Fore.LIGHTBLUE_EX, Style.RESET_ALL),
    'info': (Style.BRIGHT + Fore.BLUE, Style.RESET_ALL),
    'warning': (Fore.YELLOW, Style.RESET_ALL),
    'error': (Fore.RED, Style.RESET_ALL),
    'critical': (Back.RED, Style.RESET_ALL),
}

class CoinURIColorizer(GenericColorizer):
    default_color_map = coinuri_color_map

coinuri_colorizer = CoinURIColorizer()

log_formatter = ColorizingFormatter(
    "%(asctime)s [%(levelname)s]  %(message)s")
log = logging.getLogger(COINURI_APP_NAME)
log.setLevel(logging.DEBUG)

handler = ColorizingStreamHandler(colorizer=coinuri_colorizer)
handler.setFormatter(log_formatter)
handler.setLevel(logging.INFO)
log.addHandler(handler)


def get_log():
    """
    provides coinuri logging instance
    :return: log instance
    """
    return log

def set_logging_level(level):
    handler.setLevel(level)

def set_logging_color(colored=False):
    if colored:
        handler.colorizer = coinuri_colorizer
    else:
        handler.colorizer = MonochromaticColorizer()
