import pytest

from src.conference_system.conference_system.participants.credentials import CredentialService


def test_hash_and_verify():
    creds = CredentialService("k")
    opaque = creds.hash("pw")

    assert opaque != "pw"
    assert creds.verify("pw", opaque)
    assert not creds.verify("nope", opaque)


def test_verify_tolerates_garbage_hashes():
    assert not CredentialService("k").verify("pw", "CHANGE_ME")


def test_token_is_deterministic_per_key_name_and_email():
    creds = CredentialService("k")

    token = creds.mint_token("Ann", "ann@x.com")

    assert token == creds.mint_token("Ann", "ANN@x.com ")
    assert token.startswith("CONF-") and len(token) == len("CONF-") + 40
    assert token != creds.mint_token("Ann", "ann2@x.com")
    assert token != CredentialService("other").mint_token("Ann", "ann@x.com")


def test_secret_key_is_required():
    with pytest.raises(ValueError):
        CredentialService("")
