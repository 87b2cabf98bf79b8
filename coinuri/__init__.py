from coinuri.support import (get_log, set_logging_level, set_logging_color,
                             COINURI_APP_NAME)
from coinuri.errors import *
from coinuri.amount import *
from coinuri.coins import *
from coinuri.address import *
from coinuri.uri import *
from coinuri.configure import (load_program_config, get_config,
                               register_config_coins)
