import coinuri as cu
import pytest

# the genesis block coinbase address
GENESIS_ADDRESS = '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa'
GENESIS_HASH160 = bytes.fromhex('62e907b15cbf27d5425399ebf6f0fb50ebb88f18')


def test_decode_address():
    addr = cu.decode_address(cu.BITCOIN_MAIN, GENESIS_ADDRESS)
    assert addr.type == cu.BITCOIN_MAIN
    assert addr.version == 0
    assert addr.hash160 == GENESIS_HASH160
    assert not addr.is_p2sh()
    assert str(addr) == GENESIS_ADDRESS


def test_b58check_to_bin():
    version, payload = cu.b58check_to_bin(GENESIS_ADDRESS)
    assert version == 0
    assert payload == GENESIS_HASH160
    assert cu.bin_to_b58check(GENESIS_HASH160, 0) == GENESIS_ADDRESS


def test_from_hash():
    assert str(cu.CoinAddress.from_hash(
        cu.BITCOIN_MAIN, GENESIS_HASH160)) == GENESIS_ADDRESS
    p2sh = cu.CoinAddress.from_hash(cu.BITCOIN_MAIN, GENESIS_HASH160,
                                    p2sh=True)
    assert p2sh.is_p2sh()
    assert str(p2sh).startswith('3')
    assert cu.decode_address(cu.BITCOIN_MAIN, str(p2sh)) == p2sh
    testnet = cu.CoinAddress.from_hash(cu.BITCOIN_TEST, GENESIS_HASH160)
    assert str(testnet)[0] in 'mn'
    assert cu.decode_address(cu.BITCOIN_TEST, str(testnet)) == testnet
    doge = cu.CoinAddress.from_hash(cu.DOGECOIN_MAIN, GENESIS_HASH160)
    assert str(doge).startswith('D')


def test_address_equality():
    a = cu.decode_address(cu.BITCOIN_MAIN, GENESIS_ADDRESS)
    assert a == cu.CoinAddress.from_hash(cu.BITCOIN_MAIN, GENESIS_HASH160)
    # same string, different currency
    b = cu.CoinAddress.from_hash(cu.BITCOIN_TEST, GENESIS_HASH160)
    c = cu.CoinAddress.from_hash(cu.LITECOIN_TEST, GENESIS_HASH160)
    assert str(b) == str(c)
    assert b != c
    assert len({a, b, c}) == 3


@pytest.mark.parametrize(
    "addr",
    [
        '',
        '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNb',
        '1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfN',
        '0A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa',
        '111',
        str(cu.CoinAddress.from_hash(cu.BITCOIN_TEST, GENESIS_HASH160)),
        cu.bin_to_b58check(GENESIS_HASH160 + b'\x00', 0),
        cu.bin_to_b58check(GENESIS_HASH160[:19], 0),
    ])
def test_invalid_addresses(addr):
    with pytest.raises(cu.AddressFormatError):
        cu.decode_address(cu.BITCOIN_MAIN, addr)
    assert not cu.is_valid_address(cu.BITCOIN_MAIN, addr)


def test_is_valid_address():
    assert cu.is_valid_address(cu.BITCOIN_MAIN, GENESIS_ADDRESS)
    assert not cu.is_valid_address(cu.LITECOIN_MAIN, GENESIS_ADDRESS)


def test_bad_construction():
    with pytest.raises(cu.AddressFormatError):
        cu.CoinAddress(cu.BITCOIN_MAIN, 111, GENESIS_HASH160)
    with pytest.raises(cu.AddressFormatError):
        cu.CoinAddress(cu.BITCOIN_MAIN, 0, GENESIS_HASH160[:10])
