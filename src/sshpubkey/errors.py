# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Exceptions raised while decoding SSH public keys.

All exceptions derive from [`PublicKeyError`][], which is
a [`ValueError`][].  Failures of the collaborators (reading files,
base64 decoding) are not wrapped: they surface as [`OSError`][] and
[`binascii.Error`][], respectively.

"""

from __future__ import annotations

__all__ = (
    'InvalidFormatError',
    'KeyTypeMismatchError',
    'PublicKeyError',
    'TrailingDataError',
    'TruncatedDataError',
    'UnknownCurveError',
    'UnknownKeyTypeError',
)


class PublicKeyError(ValueError):
    """The public key could not be decoded."""


class InvalidFormatError(PublicKeyError):
    """The public key data is not in the expected format."""


class TruncatedDataError(PublicKeyError, EOFError):
    """The public key data ended in the middle of a field."""

    def __init__(self, wanted: int, available: int) -> None:
        self.wanted = wanted
        self.available = available
        super().__init__(
            f'truncated SSH key data: wanted {wanted:d} bytes, '
            f'only {available:d} available'
        )


class TrailingDataError(PublicKeyError):
    """The public key data contained trailing data."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f'{count:d} bytes of trailing data after SSH key')


class KeyTypeMismatchError(PublicKeyError):
    """The key type label disagrees with the embedded key type."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'key type mismatch: labelled {expected!r}, '
            f'but key data is {actual!r}'
        )


class UnknownKeyTypeError(PublicKeyError):
    """The key type is not supported."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'unknown SSH key type: {name!r}')


class UnknownCurveError(PublicKeyError):
    """The ECDSA curve is not supported."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f'unknown ECDSA curve: {identifier!r}')
