# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Types used by sshpubkey."""

from __future__ import annotations

import enum

from typing_extensions import NamedTuple, TypeAlias

__all__ = (
    'Curve',
    'CurveKind',
    'DsaPublicKey',
    'EcdsaPublicKey',
    'Ed25519PublicKey',
    'Fingerprint',
    'FingerprintAlgorithm',
    'KeyFamily',
    'KeyType',
    'PublicKeyKind',
    'RsaPublicKey',
)


class KeyFamily(str, enum.Enum):
    """Algorithm families of SSH public keys.

    Certificate key types belong to the same family as the bare key
    type they certify.

    Attributes:
        RSA: RSA keys (RFC 4253, section 6.6).
        DSA: DSA keys (RFC 4253, section 6.6).
        ECDSA: ECDSA keys over the NIST curves (RFC 5656, section 3.1).
        ED25519: Ed25519 keys (RFC 8709).

    """

    RSA: str = 'rsa'
    """"""
    DSA: str = 'dsa'
    """"""
    ECDSA: str = 'ecdsa'
    """"""
    ED25519: str = 'ed25519'
    """"""


class CurveKind(str, enum.Enum):
    """Elliptic curves supported for ECDSA keys.

    The value of each member is its SSH curve identifier.

    Attributes:
        NISTP256: NIST P-256, a.k.a. secp256r1.
        NISTP384: NIST P-384, a.k.a. secp384r1.
        NISTP521: NIST P-521, a.k.a. secp521r1.

    """

    NISTP256: str = 'nistp256'
    """"""
    NISTP384: str = 'nistp384'
    """"""
    NISTP521: str = 'nistp521'
    """"""


class FingerprintAlgorithm(str, enum.Enum):
    """Hash functions for key fingerprints.

    The value of each member is the label used in the textual
    fingerprint, as emitted by `ssh-keygen -l`.

    Attributes:
        SHA256: SHA-256.  The OpenSSH default.
        SHA384: SHA-384.
        SHA512: SHA-512.

    """

    SHA256: str = 'SHA256'
    """"""
    SHA384: str = 'SHA384'
    """"""
    SHA512: str = 'SHA512'
    """"""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str, /) -> FingerprintAlgorithm:
        """Look up a fingerprint algorithm by name, case-insensitively.

        Args:
            name: The algorithm name, e.g. `sha256` or `SHA512`.

        Returns:
            The matching algorithm.

        Raises:
            ValueError: The name is not a known algorithm.

        Examples:
            >>> FingerprintAlgorithm.from_name('sha384')
            <FingerprintAlgorithm.SHA384: 'SHA384'>

        """
        try:
            return cls(name.upper())
        except ValueError:
            msg = f'unknown fingerprint algorithm: {name!r}'
            raise ValueError(msg) from None


class KeyType(NamedTuple):
    """An SSH public key type, as named on the wire.

    Attributes:
        name:
            The wire identifier, e.g. `ssh-rsa` or
            `ssh-rsa-cert-v01@openssh.com`.
        plain_name:
            The identifier of the bare (non-certificate) key type.  Used
            when re-encoding the public key.
        family:
            The algorithm family, determining the wire fields.
        is_certificate:
            True for the OpenSSH certificate key types.
        short_label:
            A short uppercase label for display, e.g. `RSA-CERT`.

    """

    name: str
    """"""
    plain_name: str
    """"""
    family: KeyFamily
    """"""
    is_certificate: bool
    """"""
    short_label: str
    """"""


class Curve(NamedTuple):
    """An elliptic curve used by an ECDSA key.

    Attributes:
        kind: The curve.
        identifier: The SSH curve identifier, e.g. `nistp256`.

    """

    kind: CurveKind
    """"""
    identifier: str
    """"""


class RsaPublicKey(NamedTuple):
    """RSA public key material.

    Attributes:
        e: The public exponent, as an unpadded big endian magnitude.
        n: The modulus, as an unpadded big endian magnitude.

    """

    e: bytes
    """"""
    n: bytes
    """"""


class DsaPublicKey(NamedTuple):
    """DSA public key material.

    All parameters are unpadded big endian magnitudes.

    Attributes:
        p: The prime modulus.
        q: The subgroup order.
        g: The subgroup generator.
        y: The public value.

    """

    p: bytes
    """"""
    q: bytes
    """"""
    g: bytes
    """"""
    y: bytes
    """"""


class EcdsaPublicKey(NamedTuple):
    """ECDSA public key material.

    Attributes:
        curve: The curve the point lies on.
        key: The encoded curve point, as opaque bytes.

    """

    curve: Curve
    """"""
    key: bytes
    """"""


class Ed25519PublicKey(NamedTuple):
    """Ed25519 public key material.

    Attributes:
        key: The 32-byte public key, as opaque bytes.

    """

    key: bytes
    """"""


PublicKeyKind: TypeAlias = (
    RsaPublicKey | DsaPublicKey | EcdsaPublicKey | Ed25519PublicKey
)
"""The key material of any supported public key."""


class Fingerprint(NamedTuple):
    """A public key fingerprint.

    Attributes:
        algorithm: The hash function used.
        hash: The unpadded base64 encoding of the digest.

    """

    algorithm: FingerprintAlgorithm
    """"""
    hash: str
    """"""

    def __str__(self) -> str:
        return f'{self.algorithm.value}:{self.hash}'
