"""Tests for content hashing."""

from minigit.hashing import DIGEST_HEX_LENGTH, hash_bytes, is_digest

from conftest import HELLO_DIGEST


def test_known_digest_of_hello():
    assert hash_bytes(b"hello") == HELLO_DIGEST


def test_empty_input_has_a_digest():
    assert hash_bytes(b"") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_digest_is_deterministic():
    data = bytes(range(256)) * 4
    assert hash_bytes(data) == hash_bytes(bytes(data))


def test_digest_format():
    digest = hash_bytes(b"\x00\xff binary \n")
    assert len(digest) == DIGEST_HEX_LENGTH
    assert digest == digest.lower()
    assert is_digest(digest)


def test_different_content_different_digest():
    assert hash_bytes(b"Content A") != hash_bytes(b"Content B")


def test_is_digest_rejects_malformed_values():
    assert not is_digest(HELLO_DIGEST.upper())
    assert not is_digest(HELLO_DIGEST[:-1])
    assert not is_digest(HELLO_DIGEST + ".tmp.123")
    assert not is_digest("g" * 40)
