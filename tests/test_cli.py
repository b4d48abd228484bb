import pytest

from totp_backend import cli
from totp_core import secret_codec
from totp_core.errors import NetworkError

DEMO_SECRET = "JBSWY3DPEHPK3PXP"


def test_secret(capsys):
    assert cli.main(["secret"]) == cli.EXIT_OK
    out = capsys.readouterr().out.strip()
    assert len(secret_codec.decode(out)) == 20


def test_secret_bad_length(capsys):
    assert cli.main(["secret", "--bytes", "4"]) == cli.EXIT_BAD_PARAMS
    assert "secret length" in capsys.readouterr().err


def test_code_at_time(capsys):
    assert cli.main(["code", "--secret", DEMO_SECRET, "--time", "59"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "996554"


def test_code_at_counter(capsys):
    assert cli.main(["code", "--secret", DEMO_SECRET, "--counter", "1", "--algorithm", "sha256",
                     "--digits", "10"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "0436344551"


def test_code_now(capsys, frozen_time):
    frozen_time(59)
    assert cli.main(["code", "--secret", DEMO_SECRET]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "996554"


@pytest.mark.parametrize("argv", [
    ["code", "--secret", DEMO_SECRET, "--step", "4"],
    ["code", "--secret", DEMO_SECRET, "--algorithm", "md5"],
    ["code", "--secret", "NOT*BASE32"],
    ["code", "--secret", DEMO_SECRET, "--counter", "-1"],
])
def test_code_bad_parameters(argv, capsys):
    assert cli.main(argv) == cli.EXIT_BAD_PARAMS
    assert capsys.readouterr().err.startswith("[!]")


def test_uri(capsys):
    assert cli.main(["uri", "--secret", DEMO_SECRET, "--account", "bob", "--issuer", "Acme"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == (
        "otpauth://totp/Acme:bob?secret=JBSWY3DPEHPK3PXP&issuer=Acme&algorithm=SHA1&digits=6&period=30"
    )


def test_verify_local(capsys, frozen_time):
    frozen_time(59)
    assert cli.main(["verify", "--secret", DEMO_SECRET, "--code", "996554"]) == cli.EXIT_OK
    assert "VALID" in capsys.readouterr().out
    assert cli.main(["verify", "--secret", DEMO_SECRET, "--code", "282760"]) == cli.EXIT_INVALID
    assert cli.main(["verify", "--secret", DEMO_SECRET, "--code", "282760", "--window", "1"]) == cli.EXIT_OK


def test_verify_reports_every_bad_field(capsys):
    assert cli.main(["verify", "--secret", " ", "--code", "12", "--step", "301"]) == cli.EXIT_BAD_PARAMS
    err = capsys.readouterr().err
    assert "token must be exactly 6 digits" in err
    assert "secret must not be empty" in err
    assert "step must be an integer between 5 and 300" in err


def test_verify_remote_unreachable(monkeypatch, capsys):
    class _Unreachable:
        def __init__(self, base_url, timeout):
            self.timeout = timeout

        def check(self, token, secret, configuration):
            raise NetworkError(f"verification timed out after {self.timeout}s")

    monkeypatch.setattr(cli, "VerifyClient", _Unreachable)
    argv = ["verify", "--secret", DEMO_SECRET, "--code", "123456", "--url", "http://localhost:1", "--timeout", "0.5"]
    assert cli.main(argv) == cli.EXIT_NETWORK
    assert "timed out after 0.5s" in capsys.readouterr().err


def test_no_command(capsys):
    assert cli.main([]) == cli.EXIT_OK
    assert "-h" in capsys.readouterr().out
