# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Fingerprints of SSH public keys.

A fingerprint is the unpadded base64 encoding of a SHA-2 digest of the
key's wire encoding, as displayed by `ssh-keygen -l`.

"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives import hashes

from sshpubkey import _types

if TYPE_CHECKING:
    from typing_extensions import Buffer

__all__ = ('compute', 'digest')


def _hash_algorithm(
    algorithm: _types.FingerprintAlgorithm, /
) -> hashes.HashAlgorithm:
    match algorithm:
        case _types.FingerprintAlgorithm.SHA256:
            return hashes.SHA256()
        case _types.FingerprintAlgorithm.SHA384:
            return hashes.SHA384()
        case _types.FingerprintAlgorithm.SHA512:
            return hashes.SHA512()
        case _:  # pragma: no cover
            msg = f'unsupported fingerprint algorithm: {algorithm!r}'
            raise AssertionError(msg)


def digest(algorithm: _types.FingerprintAlgorithm, data: Buffer, /) -> bytes:
    """Hash the data with the fingerprint algorithm's hash function.

    Returns:
        The raw digest: 32, 48 or 64 bytes.

    """
    hasher = hashes.Hash(_hash_algorithm(algorithm))
    hasher.update(bytes(memoryview(data)))
    return hasher.finalize()


def compute(
    algorithm: _types.FingerprintAlgorithm, data: Buffer, /
) -> _types.Fingerprint:
    """Compute the fingerprint of an encoded public key.

    Args:
        algorithm:
            The hash function to use.
        data:
            The public key in SSH wire format, i.e. the base64-decoded
            body of an authorized-keys line.

    Returns:
        The fingerprint.  Its hash is base64-encoded without the
        trailing `=` padding.

    Examples:
        >>> str(compute(_types.FingerprintAlgorithm.SHA256, b''))
        'SHA256:47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU'

    """
    encoded = base64.standard_b64encode(digest(algorithm, data))
    return _types.Fingerprint(
        algorithm=algorithm,
        hash=encoded.decode('ASCII').rstrip('='),
    )
