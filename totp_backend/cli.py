#!/usr/bin/env python3
"""
cli.py — totp-lab command line tool

Subcommands:
- secret : generate a random Base32 secret
- code   : print the TOTP code for a secret (now, a given time or a counter)
- watch  : show the live code, refreshed every second
- uri    : print the otpauth:// provisioning URI
- verify : verify a code locally, or against a running server with --url

eg..:
    totp-lab secret --bytes 32
    totp-lab code --secret JBSWY3DPEHPK3PXP --time 59
    totp-lab watch --secret JBSWY3DPEHPK3PXP --digits 8 --step 60
    totp-lab uri --secret JBSWY3DPEHPK3PXP --account alice@example.com --issuer MyService
    totp-lab verify --secret JBSWY3DPEHPK3PXP --code 123456 --url http://localhost:3001

Exit codes: 0 ok / valid, 1 code invalid, 2 bad parameters, 3 server unreachable.
"""

import argparse
import sys
import time

from totp_core import counter_clock, secret_codec
from totp_core.configuration import Configuration
from totp_core.display import DisplayClock
from totp_core.errors import FormatError, GenerationError, NetworkError, ValidationError
from totp_core.generator import generate
from totp_core.provisioning import DEFAULT_ACCOUNT, DEFAULT_ISSUER, format_otpauth_uri
from totp_core.session import TotpSession
from totp_core.validator import validate
from totp_backend.client import DEFAULT_TIMEOUT, VerifyClient

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_PARAMS = 2
EXIT_NETWORK = 3


def _print_errors(errors):
    for error in errors:
        print(f"[!] {error}", file=sys.stderr)


def _load(args):
    """(key, configuration) from the shared options; raises on bad input."""
    configuration = Configuration.from_params(args.step, args.algorithm, args.digits)
    key = secret_codec.decode(args.secret)
    return key, configuration


# --- CLI command handlers ---
def cmd_help(args):
    print("'totp-lab -h' for help.")
    return EXIT_OK


def cmd_secret(args):
    try:
        print(secret_codec.generate_base32_secret(args.bytes))
    except ValueError as e:
        _print_errors([str(e)])
        return EXIT_BAD_PARAMS
    return EXIT_OK


def cmd_code(args):
    key, configuration = _load(args)
    if args.counter is not None:
        counter = args.counter
    else:
        counter = counter_clock.now(configuration.step, args.time)
    code = generate(key, counter, configuration.algorithm, configuration.digits)
    print(code)
    return EXIT_OK


def cmd_watch(args):
    key, configuration = _load(args)
    state = {"last_code": None}

    def render(frame):
        if frame.code != state["last_code"]:
            print(f"\nTOTP ({configuration.digits}d): {frame.code}  (valid ~{frame.remaining:2d}s)")
            state["last_code"] = frame.code
        else:
            print(f".. {frame.remaining:2d}s left", end='\r', flush=True)

    print(f"Press Ctrl+C to quit. Generating {configuration.digits}-digit TOTP every {configuration.step}s...")
    try:
        with DisplayClock(lambda: (key, configuration), render):
            while True:
                time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return EXIT_OK


def cmd_uri(args):
    key, configuration = _load(args)
    print(format_otpauth_uri(key, args.account, args.issuer, configuration))
    return EXIT_OK


def cmd_verify(args):
    errors = validate(args.code, args.secret, args.step, args.algorithm, args.digits)
    if errors:
        _print_errors(errors)
        return EXIT_BAD_PARAMS
    key, configuration = _load(args)
    session = TotpSession(key, configuration)

    checker = None
    if args.url:
        checker = VerifyClient(args.url, timeout=args.timeout).check
    try:
        ok = session.verify(args.code, window_radius=args.window, checker=checker)
    except NetworkError as e:
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_NETWORK

    if ok:
        print("[+] TOTP code is VALID")
        return EXIT_OK
    print("[-] TOTP code is INVALID")
    return EXIT_INVALID


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totp-lab", description="TOTP (RFC 6238) generator / verifier")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    params = argparse.ArgumentParser(add_help=False)
    params.add_argument("--secret", required=True, help="Base32 shared secret")
    params.add_argument("--step", type=int, help="Time step in seconds (5-300, default 30)")
    params.add_argument("--algorithm", help="sha1 | sha256 | sha512 (default sha1)")
    params.add_argument("--digits", type=int, help="Code length (6-10, default 6)")

    # secret
    ps = sub.add_parser("secret", help="Generate a random Base32 secret")
    ps.add_argument("--bytes", type=int, default=secret_codec.SECRET_BYTES, help="Secret length in bytes")
    ps.set_defaults(func=cmd_secret)

    # code
    pc = sub.add_parser("code", parents=[params], help="Print the code for now / a time / a counter")
    when = pc.add_mutually_exclusive_group()
    when.add_argument("--time", type=int, help="Unix time to compute the code for")
    when.add_argument("--counter", type=int, help="Raw HOTP counter")
    pc.set_defaults(func=cmd_code)

    # watch
    pw = sub.add_parser("watch", parents=[params], help="Show the TOTP code in real time")
    pw.set_defaults(func=cmd_watch)

    # uri
    pu = sub.add_parser("uri", parents=[params], help="Print the otpauth:// provisioning URI")
    pu.add_argument("--account", default=DEFAULT_ACCOUNT, help="Account label")
    pu.add_argument("--issuer", default=DEFAULT_ISSUER, help="Issuer label")
    pu.set_defaults(func=cmd_uri)

    # verify
    pv = sub.add_parser("verify", parents=[params], help="Verify a TOTP code")
    pv.add_argument("--code", required=True, help="Code to verify")
    pv.add_argument("--window", type=int, default=0, help="Allowed +/- step window (default 0)")
    pv.add_argument("--url", help="Verify against a running server instead of locally")
    pv.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Server timeout in seconds")
    pv.set_defaults(func=cmd_verify)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except ValidationError as e:
        _print_errors(e.errors)
    except (FormatError, GenerationError) as e:
        _print_errors([str(e)])
    return EXIT_BAD_PARAMS


if __name__ == "__main__":
    sys.exit(main())
