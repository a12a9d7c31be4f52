import random

import pytest

from rc5lab.cipher.modes import (
    CBC,
    CTR,
    ECB,
    cbc_decrypt,
    cbc_encrypt,
    counter_block,
    ctr_apply,
    split_blocks,
)
from rc5lab.cipher.padding import pkcs7_pad
from rc5lab.cipher.rc5 import RC5Cipher
from rc5lab.cipher.words import xor_bytes
from rc5lab.errors import ConfigError, LengthError, PaddingError


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _modes(rng: random.Random, bs: int):
    return [ECB(), CBC(iv=_rand_bytes(rng, bs)), CTR(nonce_and_counter=_rand_bytes(rng, bs))]


@pytest.mark.parametrize("w", [16, 32, 64, 128])
def test_roundtrip_all_modes_and_lengths(w):
    rng = random.Random(1337)
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=w)
    bs = cipher.block_size
    for mode in _modes(rng, bs):
        for n in (0, 1, bs - 1, bs, bs + 1, 3 * bs + 5):
            pt = _rand_bytes(rng, n)
            ct = cipher.encrypt(pt, mode)
            assert cipher.decrypt(ct, mode) == pt, (mode.kind, n)


@pytest.mark.parametrize("rounds", [0, 1, 255])
def test_roundtrip_round_extremes(rounds):
    rng = random.Random(rounds)
    cipher = RC5Cipher(b"edge", rounds=rounds, word_size=16)
    for mode in _modes(rng, cipher.block_size):
        pt = _rand_bytes(rng, 23)
        assert cipher.decrypt(cipher.encrypt(pt, mode), mode) == pt


def test_default_mode_is_ecb():
    cipher = RC5Cipher(b"key", rounds=12)
    assert cipher.encrypt(b"hello") == cipher.encrypt(b"hello", ECB())
    assert cipher.decrypt(cipher.encrypt(b"hello")) == b"hello"


# ---------------------------------------------------------------------------
# ECB
# ---------------------------------------------------------------------------

def test_ecb_pads_and_encrypts_blocks_independently():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    pt = b"ABCDEFGH" * 2 + b"xyz"
    ct = cipher.encrypt(pt, ECB())
    assert len(ct) == 24
    assert ct[:8] == ct[8:16]
    assert ct[:8] == cipher.encrypt_block(b"ABCDEFGH")
    assert ct[16:] == cipher.encrypt_block(pkcs7_pad(b"xyz", 8))


def test_ecb_aligned_plaintext_gets_extra_block():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    ct = cipher.encrypt(b"8 bytes!", ECB())
    assert len(ct) == 16
    assert ct[8:] == cipher.encrypt_block(b"\x08" * 8)


def test_ecb_invalid_padding_rejected():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    ct = cipher.encrypt_block(b"AAAAAAA\x00")
    with pytest.raises(PaddingError):
        cipher.decrypt(ct, ECB())
    ct = cipher.encrypt_block(b"AAAAAA\x03\x02")
    with pytest.raises(PaddingError):
        cipher.decrypt(ct, ECB())


# ---------------------------------------------------------------------------
# CBC
# ---------------------------------------------------------------------------

def test_cbc_chaining_structure():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    iv = bytes(range(8))
    pt = b"ABCDEFGH" * 2
    ct = cipher.encrypt(pt, CBC(iv=iv))
    c0 = cipher.encrypt_block(xor_bytes(b"ABCDEFGH", iv))
    c1 = cipher.encrypt_block(xor_bytes(b"ABCDEFGH", c0))
    assert ct[:8] == c0
    assert ct[8:16] == c1
    assert c0 != c1
    assert len(ct) == 24


def test_cbc_iv_changes_ciphertext():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    a = cipher.encrypt(b"same message", CBC(iv=b"\x00" * 8))
    b = cipher.encrypt(b"same message", CBC(iv=b"\x01" + b"\x00" * 7))
    assert a != b


def test_cbc_block_helpers_roundtrip():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=64)
    iv = b"\xAA" * 16
    data = bytes(range(48))
    block = cipher._block
    assert cbc_decrypt(block, iv, cbc_encrypt(block, iv, data)) == data


@pytest.mark.parametrize("w", [16, 32, 64, 128])
def test_cbc_tampered_padding_rejected(w):
    cipher = RC5Cipher(b"tamper", rounds=12, word_size=w)
    bs = cipher.block_size
    pt = b"x" * (2 * bs)          # padding is one full block of value bs
    ct = bytearray(cipher.encrypt(pt, CBC(iv=b"\x00" * bs)))
    # altering the previous block's last byte alters the final pad byte
    ct[-bs - 1] ^= 0x01
    with pytest.raises(PaddingError):
        cipher.decrypt(bytes(ct), CBC(iv=b"\x00" * bs))


def test_cbc_tampered_iv_rejected_for_single_block():
    cipher = RC5Cipher(b"tamper", rounds=12, word_size=32)
    ct = cipher.encrypt(b"", CBC(iv=b"\x00" * 8))
    bad_iv = b"\x00" * 7 + b"\x01"
    with pytest.raises(PaddingError):
        cipher.decrypt(ct, CBC(iv=bad_iv))


@pytest.mark.parametrize("iv_len", [0, 7, 9, 16])
def test_cbc_iv_size_validated(iv_len):
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    with pytest.raises(ConfigError):
        cipher.encrypt(b"data", CBC(iv=b"\x00" * iv_len))
    with pytest.raises(ConfigError):
        cipher.decrypt(b"\x00" * 8, CBC(iv=b"\x00" * iv_len))


def test_mode_payload_must_be_bytes():
    with pytest.raises(ConfigError):
        CBC(iv="0011223344556677")
    with pytest.raises(ConfigError):
        CTR(nonce_and_counter=12345)
    assert CBC(iv=bytearray(8)).iv == bytes(8)


# ---------------------------------------------------------------------------
# Length validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("length", [1, 7, 9, 15, 17])
def test_ecb_cbc_reject_unaligned_ciphertext(length):
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    with pytest.raises(LengthError):
        cipher.decrypt(b"\x00" * length, ECB())
    with pytest.raises(LengthError):
        cipher.decrypt(b"\x00" * length, CBC(iv=b"\x00" * 8))


def test_empty_ciphertext_has_no_padding():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    with pytest.raises(PaddingError):
        cipher.decrypt(b"", ECB())
    with pytest.raises(PaddingError):
        cipher.decrypt(b"", CBC(iv=b"\x00" * 8))


def test_split_blocks():
    assert split_blocks(b"abcdefgh", 4) == [b"abcd", b"efgh"]
    assert split_blocks(b"", 4) == []
    with pytest.raises(LengthError):
        split_blocks(b"abcde", 4)


def test_unknown_mode_rejected():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    with pytest.raises(ConfigError):
        cipher.encrypt(b"data", "ECB")
    with pytest.raises(ConfigError):
        cipher.decrypt(b"\x00" * 8, object())


# ---------------------------------------------------------------------------
# CTR
# ---------------------------------------------------------------------------

def test_ctr_keystream_structure():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    seed = bytes(range(8))
    pt = bytes(30)
    ct = cipher.encrypt(pt, CTR(nonce_and_counter=seed))
    assert len(ct) == 30
    expected = b"".join(cipher.encrypt_block(counter_block(seed, i)) for i in range(4))[:30]
    assert xor_bytes(ct, pt) == expected


def test_ctr_is_symmetric_and_deterministic():
    rng = random.Random(1337)
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=64)
    mode = CTR(nonce_and_counter=_rand_bytes(rng, 16))
    data = _rand_bytes(rng, 77)
    once = cipher.encrypt(data, mode)
    assert cipher.encrypt(data, mode) == once
    assert cipher.decrypt(once, mode) == data
    assert cipher.encrypt(once, mode) == data
    assert xor_bytes(once, data) == xor_bytes(cipher.encrypt(bytes(77), mode), bytes(77))


def test_ctr_different_seeds_different_keystreams():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    zeros = bytes(64)
    a = cipher.encrypt(zeros, CTR(nonce_and_counter=b"\x00" * 8))
    b = cipher.encrypt(zeros, CTR(nonce_and_counter=b"\x01" + b"\x00" * 7))
    assert a != b


def test_ctr_empty_input():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=16)
    assert cipher.encrypt(b"", CTR(nonce_and_counter=b"\x00" * 4)) == b""


@pytest.mark.parametrize("seed_len", [0, 4, 7, 9])
def test_ctr_seed_size_validated(seed_len):
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    with pytest.raises(ConfigError):
        cipher.encrypt(b"data", CTR(nonce_and_counter=b"\x00" * seed_len))
    with pytest.raises(ConfigError):
        ctr_apply(cipher._block, b"\x00" * seed_len, b"data")


def test_counter_block_increments_low_word():
    seed = (0x11223344).to_bytes(4, "little") + (5).to_bytes(4, "little")
    nxt = counter_block(seed, 1)
    assert nxt[:4] == seed[:4]
    assert int.from_bytes(nxt[4:], "little") == 6
    assert counter_block(seed, 0) == seed


def test_counter_block_carries_into_high_word():
    seed = (7).to_bytes(4, "little") + b"\xff" * 4
    nxt = counter_block(seed, 1)
    assert int.from_bytes(nxt[:4], "little") == 8
    assert nxt[4:] == b"\x00" * 4


def test_counter_block_wraps_modulo_block():
    assert counter_block(b"\xff" * 8, 1) == b"\x00" * 8
    assert counter_block(b"\xff" * 4, 3) == (0).to_bytes(2, "little") + (2).to_bytes(2, "little")


def test_ctr_stream_across_wrap_roundtrips():
    cipher = RC5Cipher(b"wrap", rounds=12, word_size=16)
    mode = CTR(nonce_and_counter=b"\xff" * 4)
    data = bytes(range(40))
    ct = cipher.encrypt(data, mode)
    assert cipher.decrypt(ct, mode) == data
    assert ct[4:8] == xor_bytes(data[4:8], cipher.encrypt_block(b"\x00" * 4))


def test_cbc_helpers_validate_iv_size():
    cipher = RC5Cipher(b"K" * 16, rounds=12, word_size=32)
    with pytest.raises(ConfigError):
        cbc_encrypt(cipher._block, b"\x00" * 4, bytes(8))
    with pytest.raises(ConfigError):
        cbc_decrypt(cipher._block, b"\x00" * 12, bytes(8))
