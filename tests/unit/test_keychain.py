"""Tests for login keychain lookup and insertion."""

from pathlib import Path

import pytest

from kctrust.errors import CertificateNotFoundError, CommandError, SubjectFormatError
from kctrust.keychain import (
    NOT_FOUND_MESSAGE,
    SecurityTrustStore,
    find_trusted_cert,
    insert_trusted_cert,
    login_keychain_path,
    parse_common_name,
)

from .test_utils import FakeRun

KEYCHAIN = "/Users/dev/Library/Keychains/login.keychain-db"


def test_login_keychain_path() -> None:
    assert login_keychain_path("/Users/dev") == Path(KEYCHAIN)


def test_parse_common_name() -> None:
    assert parse_common_name("subject= /CN=dev.example.local\n") == "dev.example.local"


def test_parse_common_name_without_newline() -> None:
    assert parse_common_name("subject= /CN=localhost") == "localhost"


@pytest.mark.parametrize(
    "text",
    [
        "subject=CN = dev.example.local\n",
        "subject= /O=Acme/CN=dev\n",
        "unable to load certificate\n",
        "",
    ],
)
def test_parse_common_name_rejects_unexpected_format(text: str) -> None:
    with pytest.raises(SubjectFormatError):
        parse_common_name(text)


def test_parse_common_name_rejects_empty_name() -> None:
    with pytest.raises(SubjectFormatError):
        parse_common_name("subject= /CN=\n")


def test_find_trusted_cert_present(fake_run: FakeRun) -> None:
    fake_run.results.extend([(0, "subject= /CN=dev.local\n"), (0, "keychain: ...\n")])

    assert find_trusted_cert("/tmp/cert.pem", "/Users/dev") is None

    assert fake_run.calls == [
        ["/usr/bin/openssl", "x509", "-noout", "-subject", "-in", "/tmp/cert.pem"],
        ["/usr/bin/security", "find-certificate", "-c", "dev.local", "-m", KEYCHAIN],
    ]


def test_find_trusted_cert_not_found(fake_run: FakeRun) -> None:
    output = f"security: SecKeychainSearchCopyNext: {NOT_FOUND_MESSAGE}\n"
    fake_run.results.extend([(0, "subject= /CN=dev.local\n"), (44, output)])

    with pytest.raises(CertificateNotFoundError) as excinfo:
        find_trusted_cert("/tmp/cert.pem", "/Users/dev")
    assert excinfo.value.output == output


def test_find_trusted_cert_other_failure_is_not_not_found(fake_run: FakeRun) -> None:
    fake_run.results.extend([(0, "subject= /CN=dev.local\n"), (1, "keychain is locked\n")])

    with pytest.raises(CommandError) as excinfo:
        find_trusted_cert("/tmp/cert.pem", "/Users/dev")
    assert not isinstance(excinfo.value, CertificateNotFoundError)
    assert excinfo.value.output == "keychain is locked\n"


def test_find_trusted_cert_inspection_failure_stops_early(fake_run: FakeRun) -> None:
    fake_run.results.append((1, "unable to load certificate\n"))

    with pytest.raises(CommandError) as excinfo:
        find_trusted_cert("/tmp/cert.pem", "/Users/dev")
    assert excinfo.value.output == "unable to load certificate\n"
    assert len(fake_run.calls) == 1


def test_find_trusted_cert_bad_subject_skips_lookup(fake_run: FakeRun) -> None:
    fake_run.results.append((0, "subject=CN = dev.local\n"))

    with pytest.raises(SubjectFormatError):
        find_trusted_cert("/tmp/cert.pem", "/Users/dev")
    assert len(fake_run.calls) == 1


def test_find_trusted_cert_uses_configured_openssl(
    fake_run: FakeRun, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("KCTRUST_OPENSSL_BIN", "/opt/homebrew/bin/openssl")
    fake_run.results.append((0, "subject= /CN=dev.local\n"))

    find_trusted_cert("/tmp/cert.pem", "/Users/dev")
    assert fake_run.calls[0][0] == "/opt/homebrew/bin/openssl"


def test_insert_trusted_cert_fixed_arguments(fake_run: FakeRun) -> None:
    insert_trusted_cert("/tmp/cert.pem", "/Users/dev")

    assert fake_run.calls == [
        [
            "/usr/bin/security",
            "add-trusted-cert",
            "-p",
            "ssl",
            "-e",
            "hostnameMismatch",
            "-k",
            KEYCHAIN,
            "/tmp/cert.pem",
        ]
    ]


def test_insert_trusted_cert_failure(fake_run: FakeRun) -> None:
    fake_run.results.append((1, "SecTrustSettingsSetTrustSettings: denied\n"))

    with pytest.raises(CommandError) as excinfo:
        insert_trusted_cert("/tmp/cert.pem", "/Users/dev")
    assert "denied" in excinfo.value.output


def test_security_trust_store_delegates(fake_run: FakeRun) -> None:
    fake_run.results.extend([(0, "subject= /CN=dev.local\n"), (0, ""), (0, "added\n")])
    store = SecurityTrustStore()

    store.lookup("/tmp/cert.pem", "/Users/dev")
    assert store.insert("/tmp/cert.pem", "/Users/dev") == "added\n"
    assert [call[1] for call in fake_run.calls] == ["x509", "find-certificate", "add-trusted-cert"]
