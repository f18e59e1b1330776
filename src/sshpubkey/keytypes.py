# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Registries of supported SSH key types and ECDSA curves."""

from __future__ import annotations

import types
from typing import TYPE_CHECKING

from sshpubkey import _types, errors

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = (
    'CURVES',
    'CURVE_BITS',
    'KEY_TYPES',
    'curve_from_identifier',
    'from_name',
)

CERT_SUFFIX = '-cert-v01@openssh.com'


def _key_types() -> Mapping[str, _types.KeyType]:
    plain_types = [
        ('ssh-rsa', _types.KeyFamily.RSA, 'RSA'),
        ('ssh-dss', _types.KeyFamily.DSA, 'DSA'),
        ('ecdsa-sha2-nistp256', _types.KeyFamily.ECDSA, 'ECDSA'),
        ('ecdsa-sha2-nistp384', _types.KeyFamily.ECDSA, 'ECDSA'),
        ('ecdsa-sha2-nistp521', _types.KeyFamily.ECDSA, 'ECDSA'),
        ('ssh-ed25519', _types.KeyFamily.ED25519, 'ED25519'),
    ]
    table: dict[str, _types.KeyType] = {}
    for plain_name, family, label in plain_types:
        table[plain_name] = _types.KeyType(
            name=plain_name,
            plain_name=plain_name,
            family=family,
            is_certificate=False,
            short_label=label,
        )
        table[plain_name + CERT_SUFFIX] = _types.KeyType(
            name=plain_name + CERT_SUFFIX,
            plain_name=plain_name,
            family=family,
            is_certificate=True,
            short_label=f'{label}-CERT',
        )
    return types.MappingProxyType(table)


KEY_TYPES: Mapping[str, _types.KeyType] = _key_types()
"""All supported key types, by wire identifier."""

CURVES: Mapping[str, _types.Curve] = types.MappingProxyType({
    kind.value: _types.Curve(kind=kind, identifier=kind.value)
    for kind in _types.CurveKind
})
"""All supported ECDSA curves, by SSH curve identifier."""

CURVE_BITS: Mapping[_types.CurveKind, int] = types.MappingProxyType({
    _types.CurveKind.NISTP256: 256,
    _types.CurveKind.NISTP384: 384,
    _types.CurveKind.NISTP521: 521,
})
"""The declared key size of each ECDSA curve."""


def from_name(name: str, /) -> _types.KeyType:
    """Look up a key type by its wire identifier.

    Args:
        name: The exact wire identifier, e.g. `ssh-ed25519`.

    Returns:
        The key type.

    Raises:
        errors.UnknownKeyTypeError:
            The name is not a supported key type.

    Examples:
        >>> kt = from_name('ecdsa-sha2-nistp384-cert-v01@openssh.com')
        >>> kt.plain_name, kt.family.value, kt.short_label
        ('ecdsa-sha2-nistp384', 'ecdsa', 'ECDSA-CERT')

    """
    try:
        return KEY_TYPES[name]
    except KeyError:
        raise errors.UnknownKeyTypeError(name) from None


def curve_from_identifier(identifier: str, /) -> _types.Curve:
    """Look up an ECDSA curve by its SSH curve identifier.

    Args:
        identifier: The exact curve identifier, e.g. `nistp256`.

    Returns:
        The curve.

    Raises:
        errors.UnknownCurveError:
            The identifier is not a supported curve.

    """
    try:
        return CURVES[identifier]
    except KeyError:
        raise errors.UnknownCurveError(identifier) from None
