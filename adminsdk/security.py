"""Random keys, password hashing and request assertions."""

from __future__ import annotations

import hashlib
import logging
import secrets

import bcrypt

SYMBOL = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!@#$%^&*()-_=+,.?/:;{}[]`~"
LETTER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

_log = logging.getLogger(__name__)


class PasswordMismatchError(ValueError):
    """Raised when a password does not match its bcrypt hash."""


class CustomError(Exception):
    """An error that ends the current request with a status code and message."""

    def __init__(self, msg: str, status_code: int = 200) -> None:
        super().__init__(msg)
        self.msg = msg
        self.status_code = status_code

    def __str__(self) -> str:
        return f"CustomError#{self.status_code}#{self.msg}"


def _generate_rand_string(length: int, charset: str) -> str:
    size = len(charset)
    if size < 2 or size > 256:
        raise ValueError("wrong charset length")
    max_byte = 255 - (256 % size)
    chars: list[str] = []
    while len(chars) < length:
        for byte in secrets.token_bytes(length + length // 4):
            if byte > max_byte:
                continue  # avoids modulo bias
            chars.append(charset[byte % size])
            if len(chars) == length:
                break
    return "".join(chars)


def generate_random_key20() -> str:
    return _generate_rand_string(20, SYMBOL)


def generate_random_key16() -> str:
    return _generate_rand_string(16, SYMBOL)


def generate_random_key6() -> str:
    return _generate_rand_string(6, LETTER)


def set_password(password: str, salt: str) -> str:
    """Derive a hex scrypt digest from a plain password and a salt."""
    digest = hashlib.scrypt(
        password.encode(), salt=salt.encode(), n=16384, r=8, p=1, dklen=32
    )
    return digest.hex()


def compare_hash_and_password(hashed: str, password: str) -> bool:
    """Return True when password matches the bcrypt hash; raise otherwise."""
    try:
        matched = bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError as exc:
        raise PasswordMismatchError(str(exc)) from exc
    if not matched:
        raise PasswordMismatchError("hashedPassword is not the hash of the given password")
    return True


def assert_that(condition: bool, msg: str, *args: int) -> None:
    """Raise CustomError when condition is false; the first extra argument is the status."""
    if not condition:
        raise CustomError(msg, args[0] if args else 200)


def has_error(err: BaseException | None, msg: str, *args: int) -> None:
    """Raise CustomError when err is set; an empty msg falls back to the error text."""
    if err is None:
        return
    status = args[0] if args else 200
    _log.error("error: %r", err, stacklevel=2)
    raise CustomError(msg or str(err), status) from err