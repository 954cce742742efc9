#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper cho otp_core.py

Cung cấp các subcommand:
- secret : sinh secret Base32 mới
- hotp   : sinh mã HOTP cho một counter
- totp   : hiển thị mã TOTP hiện tại (hoặc tại --timestamp)
- uri    : in ra otpauth URI (hotp / totp)
- verify : xác minh mã OTP (hotp / totp, có --grace cho TOTP)

Secret luôn truyền qua --secret dưới dạng Base32; CLI không lưu gì xuống đĩa.
Exit status: 0 = OK / mã hợp lệ, 1 = mã không hợp lệ, 2 = tham số sai.
"""

import argparse
import logging
import sys

from . import keyuri, otp_core
from .exceptions import OTPError

log = logging.getLogger(__name__)


# --- CLI command handlers ---
def cmd_secret(args):
    secret = keyuri.encode_base32(keyuri.generate_secret(args.bytes))
    print(secret)
    return 0


def cmd_hotp(args):
    key = keyuri.decode_base32(args.secret)
    code = otp_core.generate_hotp(key, args.counter, args.digits)
    print(code)
    return 0


def cmd_totp(args):
    key = keyuri.decode_base32(args.secret)
    timestamp_ms = args.timestamp * 1000 if args.timestamp is not None else None
    code = otp_core.generate_totp(key, args.period, args.digits, timestamp_ms=timestamp_ms)
    remaining = otp_core.seconds_remaining(args.period, timestamp_ms)
    print(f"{code}  (valid ~{remaining:2d}s)")
    return 0


def cmd_uri_hotp(args):
    key = keyuri.decode_base32(args.secret)
    print(keyuri.create_hotp_key_uri(args.issuer, args.account, key, args.counter, args.digits))
    return 0


def cmd_uri_totp(args):
    key = keyuri.decode_base32(args.secret)
    print(keyuri.create_totp_key_uri(args.issuer, args.account, key, args.period, args.digits))
    return 0


def _report(kind, ok):
    if ok:
        print(f"[+] {kind} code is VALID")
        return 0
    print(f"[-] {kind} code is INVALID")
    return 1


def cmd_verify_hotp(args):
    key = keyuri.decode_base32(args.secret)
    return _report("HOTP", otp_core.verify_hotp(key, args.counter, args.digits, args.code))


def cmd_verify_totp(args):
    key = keyuri.decode_base32(args.secret)
    timestamp_ms = args.timestamp * 1000 if args.timestamp is not None else None
    ok = otp_core.verify_totp_with_grace_period(
        key,
        args.period,
        args.digits,
        args.code,
        args.grace,
        timestamp_ms=timestamp_ms,
    )
    return _report("TOTP", ok)


# --- Argparse builder ---
def _add_secret(p):
    p.add_argument("--secret", required=True, help="Base32 secret")


def _add_digits(p):
    p.add_argument("--digits", type=int, default=otp_core.DEFAULT_DIGITS, help="Number of OTP digits (6-8)")


def _add_period(p):
    p.add_argument("--period", type=int, default=otp_core.DEFAULT_TIME_STEP, help="TOTP time step (seconds)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otpkit", description="HOTP/TOTP generator and verifier")
    p.add_argument("--verbose", action="store_true", help="Verbose (debug) logging")
    sub = p.add_subparsers(dest="cmd")

    # secret
    ps = sub.add_parser("secret", help="Generate a random Base32 secret")
    ps.add_argument("--bytes", type=int, default=otp_core.SECRET_BYTES, help="Secret length in bytes")
    ps.set_defaults(func=cmd_secret)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_secret(ph)
    ph.add_argument("--counter", type=int, required=True)
    _add_digits(ph)
    ph.set_defaults(func=cmd_hotp)

    # totp
    pt = sub.add_parser("totp", help="Show the current TOTP code")
    _add_secret(pt)
    _add_period(pt)
    _add_digits(pt)
    pt.add_argument("--timestamp", type=int, help="Unix time (seconds) instead of the wall clock")
    pt.set_defaults(func=cmd_totp)

    # uri
    pu = sub.add_parser("uri", help="Print an otpauth URI")
    sub_u = pu.add_subparsers(dest="uri_type")

    puh = sub_u.add_parser("hotp", help="otpauth://hotp URI")
    _add_secret(puh)
    puh.add_argument("--account", default="user@example")
    puh.add_argument("--issuer", default="otpkit")
    puh.add_argument("--counter", type=int, default=0)
    _add_digits(puh)
    puh.set_defaults(func=cmd_uri_hotp)

    put = sub_u.add_parser("totp", help="otpauth://totp URI")
    _add_secret(put)
    put.add_argument("--account", default="user@example")
    put.add_argument("--issuer", default="otpkit")
    _add_period(put)
    _add_digits(put)
    put.set_defaults(func=cmd_uri_totp)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type")

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code")
    _add_secret(pvt)
    pvt.add_argument("--code", required=True, help="OTP code to verify")
    _add_period(pvt)
    _add_digits(pvt)
    pvt.add_argument("--grace", type=int, default=0, help="Grace period in seconds (0..period)")
    pvt.add_argument("--timestamp", type=int, help="Unix time (seconds) instead of the wall clock")
    pvt.set_defaults(func=cmd_verify_totp)

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    _add_secret(pvh)
    pvh.add_argument("--code", required=True, help="OTP code to verify")
    pvh.add_argument("--counter", type=int, required=True, help="Current HOTP counter")
    _add_digits(pvh)
    pvh.set_defaults(func=cmd_verify_hotp)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    try:
        return args.func(args)
    except OTPError as e:
        log.debug("command %s failed validation", args.cmd)
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
