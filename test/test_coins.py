import coinuri as cu
import pytest


def test_builtin_coins():
    assert cu.get_coin("bitcoin.main") is cu.BITCOIN_MAIN
    assert cu.BITCOIN_MAIN.uri_scheme == "bitcoin"
    assert cu.BITCOIN_MAIN.unit_exponent == 8
    assert cu.BITCOIN_MAIN.one_coin == 100000000
    assert cu.BITCOIN_MAIN.acceptable_address_codes == (0, 5)
    assert cu.PEERCOIN_MAIN.one_coin == 1000000
    assert str(cu.BITCOIN_MAIN) == "Bitcoin"
    assert repr(cu.BITCOIN_TEST) == "CoinType(bitcoin.test)"


def test_types_from_scheme_order():
    assert cu.types_from_scheme("bitcoin") == [cu.BITCOIN_MAIN,
                                               cu.BITCOIN_TEST]
    assert cu.types_from_scheme("litecoin") == [cu.LITECOIN_MAIN,
                                                cu.LITECOIN_TEST]
    assert cu.types_from_scheme("dogecoin") == [cu.DOGECOIN_MAIN]
    # the registry itself does not care about scheme case
    assert cu.types_from_scheme("BitCoin") == [cu.BITCOIN_MAIN,
                                               cu.BITCOIN_TEST]


def test_types_from_uri():
    assert cu.types_from_uri("parkbyte:abc") == [cu.PARKBYTE_TEST]
    assert cu.types_from_uri("bitcoin://abc?amount=1")[0] == cu.BITCOIN_MAIN
    with pytest.raises(cu.CoinNotFoundError):
        cu.types_from_uri("abc")
    with pytest.raises(cu.CoinNotFoundError):
        cu.types_from_uri("foocoin:abc")


def test_unknown_coin():
    with pytest.raises(cu.CoinNotFoundError):
        cu.get_coin("foocoin.main")
    with pytest.raises(cu.CoinNotFoundError):
        cu.types_from_scheme("foocoin")
    with pytest.raises(cu.CoinNotFoundError):
        cu.unregister_coin("foocoin.main")


def test_register_and_unregister(registry):
    foo = cu.CoinType("foocoin.main", "Foocoin", "FOO", "foocoin", 2, 1, 2)
    assert registry.register_coin(foo) is foo
    assert cu.get_coin("foocoin.main") == foo
    assert cu.types_from_scheme("foocoin") == [foo]
    assert foo in cu.get_coins()
    with pytest.raises(ValueError):
        registry.register_coin(cu.CoinType(
            "foocoin.main", "Foocoin 2", "FOO", "foocoin", 2, 1, 2))
    assert registry.unregister_coin("foocoin.main") is foo
    with pytest.raises(cu.CoinNotFoundError):
        cu.get_coin("foocoin.main")


def test_registration_order_is_candidate_order(registry):
    later = registry.register_coin(cu.CoinType(
        "bitcoin.other", "Bitcoin Other", "BTCO", "bitcoin", 8, 1, 2))
    assert cu.types_from_scheme("bitcoin") == [cu.BITCOIN_MAIN,
                                               cu.BITCOIN_TEST, later]


@pytest.mark.parametrize(
    "args",
    [
        ("x", "X", "X", "x", -1, 0, 5),
        ("x", "X", "X", "x", 8, 256, 5),
        ("x", "X", "X", "x", 8, 0, -1),
    ])
def test_invalid_coin_type(args):
    with pytest.raises(ValueError):
        cu.CoinType(*args)


def test_coin_type_equality():
    same = cu.CoinType("bitcoin.main", "Other", "BTC", "bitcoin", 8, 0, 5)
    assert same == cu.BITCOIN_MAIN
    assert hash(same) == hash(cu.BITCOIN_MAIN)
    assert cu.BITCOIN_MAIN != cu.BITCOIN_TEST
    assert cu.BITCOIN_MAIN != "bitcoin.main"
