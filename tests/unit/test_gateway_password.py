"""Unit tests for admin password hashing utilities."""

from unittest.mock import patch

from src.cf_gateway.auth import password
from src.cf_gateway.auth.password import hash_password, verify_password


def test_hash_is_not_plain():
    hashed = hash_password("MySecret1")
    assert hashed != "MySecret1"
    assert hashed.startswith("$2")


def test_verify_correct_password():
    hashed = hash_password("MySecret1")
    assert verify_password("MySecret1", hashed) is True


def test_verify_wrong_password():
    hashed = hash_password("MySecret1")
    assert verify_password("WrongPass9", hashed) is False


def test_malformed_hash_is_a_mismatch():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_cli_prints_verifiable_hash(capsys):
    with patch.object(password.getpass, "getpass", side_effect=["pw-123", "pw-123"]):
        assert password.main() == 0
    printed = capsys.readouterr().out.strip()
    assert verify_password("pw-123", printed)


def test_cli_rejects_mismatch(capsys):
    with patch.object(password.getpass, "getpass", side_effect=["a", "b"]):
        assert password.main() == 1
    assert "do not match" in capsys.readouterr().err
