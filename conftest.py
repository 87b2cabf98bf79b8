from typing import List

import pytest

from coinuri import coins
from coinuri.coins import CoinType


@pytest.fixture
def registry():
    """
    Snapshot the currency registry and restore it after the test, so
    tests can register their own currencies.
    """
    saved: List[CoinType] = coins.get_coins()
    yield coins
    coins._registry[:] = saved


@pytest.fixture
def shared_scheme_coins(registry):
    """
    Two currencies sharing the 'sharecoin' scheme, registered in the
    order [A, B], with disjoint address version bytes.
    """
    coin_a = registry.register_coin(CoinType(
        "sharecoin.a", "Sharecoin A", "SHA", "sharecoin", 8, 63, 64))
    coin_b = registry.register_coin(CoinType(
        "sharecoin.b", "Sharecoin B", "SHB", "sharecoin", 4, 65, 66))
    return coin_a, coin_b
