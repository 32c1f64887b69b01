"""Unit tests for X25519 key agreement."""

import dataclasses

import pytest

from keyseal.core.exceptions import (
    ErrorKind,
    InvalidInputError,
    InvalidPeerKeyError,
    RandomnessUnavailableError,
)
from keyseal.security.agreement import (
    KeyPair,
    compute_shared_secret,
    generate_keypair,
    public_key_from_private,
)
from keyseal.security.entropy import DeterministicRandom

# RFC 7748 section 6.1
ALICE_PRIVATE = bytes.fromhex("77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a")
ALICE_PUBLIC = bytes.fromhex("8520f0098930a754748b7ddcb43ef75a0dbf3a0d26381af4eba4a98eaa9b4e6a")
BOB_PRIVATE = bytes.fromhex("5dab087e624a8a4b79e17f8b83800ee66f3bb1292618b6fd1c2f8b27ff88e0eb")
BOB_PUBLIC = bytes.fromhex("de9edb7d7b7dc1b4d35b61c2ece435373f8343c85b78674dadfc7e146f882b4f")
SHARED = bytes.fromhex("4a5d9d5ba4ce2de1728e3bf480350f25e07e21c947d19e3376f09b3c1e161742")

# u = 0 and u = 1 both have small order on Curve25519
LOW_ORDER_POINTS = [bytes(32), b"\x01" + bytes(31)]


def test_generate_keypair_sizes():
    pair = generate_keypair()
    assert len(pair.private_key) == 32
    assert len(pair.public_key) == 32
    assert pair.public_key == public_key_from_private(pair.private_key)


def test_generate_keypair_fresh_each_time():
    assert generate_keypair().private_key != generate_keypair().private_key


def test_generate_keypair_deterministic_source():
    a = generate_keypair(DeterministicRandom(b"alice"))
    b = generate_keypair(DeterministicRandom(b"alice"))
    assert a == b


def test_generate_keypair_entropy_failure():
    def broken(n):
        raise OSError("no entropy")

    with pytest.raises(RandomnessUnavailableError):
        generate_keypair(broken)


def test_private_key_not_in_repr():
    pair = generate_keypair()
    text = repr(pair)
    assert pair.private_key.hex() not in text
    assert "private_key" not in text
    assert "public_key" in text


def test_rfc7748_public_keys():
    assert public_key_from_private(ALICE_PRIVATE) == ALICE_PUBLIC
    assert public_key_from_private(BOB_PRIVATE) == BOB_PUBLIC


def test_rfc7748_shared_secret():
    assert compute_shared_secret(ALICE_PRIVATE, BOB_PUBLIC) == SHARED
    assert compute_shared_secret(BOB_PRIVATE, ALICE_PUBLIC) == SHARED


def test_agreement_is_commutative():
    for _ in range(5):
        a = generate_keypair()
        b = generate_keypair()
        assert compute_shared_secret(a.private_key, b.public_key) == compute_shared_secret(
            b.private_key, a.public_key
        )


def test_different_peers_give_different_secrets():
    a, b, c = generate_keypair(), generate_keypair(), generate_keypair()
    assert compute_shared_secret(a.private_key, b.public_key) != compute_shared_secret(
        a.private_key, c.public_key
    )


@pytest.mark.parametrize("peer_public", LOW_ORDER_POINTS)
def test_low_order_peer_key_rejected(peer_public):
    pair = generate_keypair()
    with pytest.raises(InvalidPeerKeyError) as exc_info:
        compute_shared_secret(pair.private_key, peer_public)
    assert exc_info.value.kind is ErrorKind.INVALID_PEER_KEY


@pytest.mark.parametrize("length", [0, 31, 33, 64])
def test_wrong_length_peer_key_rejected(length):
    pair = generate_keypair()
    with pytest.raises(InvalidPeerKeyError, match="must be 32 bytes"):
        compute_shared_secret(pair.private_key, b"\x09" * length)


def test_keypair_is_immutable():
    pair = KeyPair(private_key=ALICE_PRIVATE, public_key=ALICE_PUBLIC)
    with pytest.raises(dataclasses.FrozenInstanceError):
        pair.public_key = BOB_PUBLIC


@pytest.mark.parametrize("length", [0, 16, 31, 33])
def test_wrong_length_private_key_rejected(length):
    with pytest.raises(InvalidInputError, match="private key must be 32 bytes") as exc_info:
        compute_shared_secret(b"\x05" * length, BOB_PUBLIC)
    assert exc_info.value.kind is ErrorKind.INVALID_INPUT
    with pytest.raises(InvalidInputError):
        public_key_from_private(b"\x05" * length)
