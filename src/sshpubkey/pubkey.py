# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""OpenSSH public keys.

The main API is the [`PublicKey`][] class, which decodes public keys
from authorized-keys lines or from their SSH wire format, re-encodes
them and computes their fingerprints.  The wire format of each key
family is described in [RFC 4253, section 6.6][RFC4253_6_6] (RSA, DSA),
[RFC 5656, section 3.1][RFC5656_3_1] (ECDSA) and [RFC 8709, section
4][RFC8709_4] (Ed25519).

[RFC4253_6_6]: https://www.rfc-editor.org/rfc/rfc4253#section-6.6
[RFC5656_3_1]: https://www.rfc-editor.org/rfc/rfc5656#section-3.1
[RFC8709_4]: https://www.rfc-editor.org/rfc/rfc8709#section-4

"""

from __future__ import annotations

import base64
import logging
import os
import types
from typing import TYPE_CHECKING

from typing_extensions import assert_never

from sshpubkey import _internals, _types, errors, fingerprint, keytypes, wire

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typing_extensions import Buffer

__all__ = ('PublicKey',)

logger = logging.getLogger(_internals.PROG_NAME)


class PublicKey:
    """An immutable OpenSSH public key.

    Attributes:
        key_type:
            The key type the key was decoded as.  May be a certificate
            key type, if the key was extracted from a certificate.
        kind:
            The key material.  Its type always matches the family of
            `key_type`.
        comment:
            The comment of the authorized-keys line, if any.

    Examples:
        >>> key = PublicKey.from_string(
        ...     'ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIIF4gWgm1gJIXw//Mkhv5'
        ...     'MEwidwcakUGCekJD/vCEml2 test key'
        ... )
        >>> key.bits()
        256
        >>> print(key)
        256 SHA256:0h+WAokssfhzfzVyuMLJlIcWyCtk5WiXI8BHyhXYxC0 test key (ED25519)

    """  # noqa: E501

    __slots__ = ('_comment', '_key_type', '_kind')

    _FAMILY_KINDS: Mapping[_types.KeyFamily, type] = types.MappingProxyType({
        _types.KeyFamily.RSA: _types.RsaPublicKey,
        _types.KeyFamily.DSA: _types.DsaPublicKey,
        _types.KeyFamily.ECDSA: _types.EcdsaPublicKey,
        _types.KeyFamily.ED25519: _types.Ed25519PublicKey,
    })

    def __init__(
        self,
        key_type: _types.KeyType,
        kind: _types.PublicKeyKind,
        comment: str | None = None,
    ) -> None:
        """Initialize the public key.

        Args:
            key_type: The key type.
            kind: The key material, matching the key type's family.
            comment: An optional comment.

        Raises:
            TypeError:
                The key material does not belong to the key type's
                family.

        """
        expected = self._FAMILY_KINDS[key_type.family]
        if not isinstance(kind, expected):
            msg = (
                f'key material {type(kind).__name__} does not match '
                f'key type {key_type.name!r}'
            )
            raise TypeError(msg)
        self._key_type = key_type
        self._kind = kind
        self._comment = comment

    @property
    def key_type(self) -> _types.KeyType:
        """The key type."""
        return self._key_type

    @property
    def kind(self) -> _types.PublicKeyKind:
        """The key material."""
        return self._kind

    @property
    def comment(self) -> str | None:
        """The comment, or `None`."""
        return self._comment

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return (self._key_type, self._kind, self._comment) == (
            other._key_type,
            other._kind,
            other._comment,
        )

    def __hash__(self) -> int:
        return hash((self._key_type, self._kind, self._comment))

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}({self._key_type!r}, '
            f'{self._kind!r}, {self._comment!r})'
        )

    def __str__(self) -> str:
        return self.describe()

    @classmethod
    def from_path(
        cls,
        path: str | bytes | os.PathLike,
        /,
        *,
        strict: bool = False,
    ) -> PublicKey:
        """Read a public key from a `.pub` file.

        Args:
            path:
                The file to read.  It must contain a single
                authorized-keys line, in UTF-8.
            strict:
                As per [`from_string`][].

        Raises:
            OSError:
                The file could not be read.

        See [`from_string`][] for other exceptions raised.

        """
        with open(os.fspath(path), 'rb') as infile:
            contents = infile.read()
        return cls.from_string(contents, strict=strict)

    @classmethod
    def from_string(
        cls,
        text: str | Buffer,
        /,
        *,
        strict: bool = False,
    ) -> PublicKey:
        """Decode a public key from an authorized-keys line.

        The line consists of the key type name, the base64-encoded key
        data and an optional comment, separated by whitespace.  The
        comment is the remainder of the line.  Blank lines around the
        line are ignored, but there must be only one non-blank line.

        Args:
            text:
                The line, as text or as UTF-8 bytes.
            strict:
                If true, reject key data with trailing bytes after the
                last key field, or with an ECDSA curve that differs from
                the key type.  Otherwise, ignore trailing bytes, and
                take the curve as given.

        Returns:
            The public key, with the line's comment.

        Raises:
            binascii.Error:
                The key data is not valid base64.
            errors.InvalidFormatError:
                The line has fewer than two tokens, there is more than
                one non-blank line, the text is not UTF-8, or the key
                data is malformed.
            errors.KeyTypeMismatchError:
                The key type name disagrees with the key data.
            errors.TrailingDataError:
                `strict` is true, and the key data has trailing bytes.
            errors.TruncatedDataError:
                The key data is truncated.
            errors.UnknownCurveError:
                The ECDSA curve is not supported.
            errors.UnknownKeyTypeError:
                The key type is not supported.

        """
        if not isinstance(text, str):
            try:
                text = bytes(memoryview(text)).decode('UTF-8')
            except UnicodeDecodeError as exc:
                msg = 'public key line is not valid UTF-8'
                raise errors.InvalidFormatError(msg) from exc
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) > 1:
            msg = f'expected a single public key line, got {len(lines):d}'
            raise errors.InvalidFormatError(msg)
        tokens = lines[0].split(None, 2) if lines else []
        if len(tokens) < 2:  # noqa: PLR2004
            msg = 'public key line needs a key type and key data'
            raise errors.InvalidFormatError(msg)
        type_name, body = tokens[:2]
        comment = tokens[2].strip() if len(tokens) > 2 else ''  # noqa: PLR2004
        key_type = keytypes.from_name(type_name)
        reader = wire.Reader(base64.b64decode(body, validate=True))
        embedded_name = reader.read_string()
        if embedded_name != type_name:
            raise errors.KeyTypeMismatchError(type_name, embedded_name)
        key = cls.from_reader(key_type, reader, strict=strict)
        cls._check_trailing_data(reader, strict=strict)
        return cls(key.key_type, key.kind, comment or None)

    @classmethod
    def from_bytes(
        cls,
        data: Buffer,
        /,
        *,
        strict: bool = False,
    ) -> PublicKey:
        r"""Decode a public key from its SSH wire format.

        Args:
            data:
                The key data, i.e. the base64-decoded body of an
                authorized-keys line, or a public key blob extracted
                from elsewhere.
            strict:
                As per [`from_string`][].

        Returns:
            The public key, without comment.

        Raises:
            errors.InvalidFormatError:
                The key data is malformed.
            errors.TrailingDataError:
                `strict` is true, and the key data has trailing bytes.
            errors.TruncatedDataError:
                The key data is truncated.
            errors.UnknownCurveError:
                The ECDSA curve is not supported.
            errors.UnknownKeyTypeError:
                The key type is not supported.

        Examples:
            >>> key = PublicKey.from_bytes(
            ...     b'\x00\x00\x00\x07ssh-rsa'
            ...     b'\x00\x00\x00\x03\x01\x00\x01'
            ...     b'\x00\x00\x00\x02\x00\xc1'
            ... )
            >>> key.kind
            RsaPublicKey(e=b'\x01\x00\x01', n=b'\xc1')
            >>> key.bits()
            8

        """
        reader = wire.Reader(data)
        key_type = keytypes.from_name(reader.read_string())
        key = cls.from_reader(key_type, reader, strict=strict)
        cls._check_trailing_data(reader, strict=strict)
        return key

    @classmethod
    def from_reader(
        cls,
        key_type: _types.KeyType,
        reader: wire.Reader,
        /,
        *,
        strict: bool = False,
    ) -> PublicKey:
        """Decode the key fields of the given key type.

        This is the common decoding step for bare keys and for the
        public key part of certificates: the certificate key types read
        the same fields as their bare counterparts.

        Args:
            key_type:
                The key type whose fields to decode.
            reader:
                A reader positioned just after the key type name.  Only
                the key fields are consumed.
            strict:
                If true, reject ECDSA keys whose curve does not match
                the curve named by the key type.

        Returns:
            The public key, without comment.

        Raises:
            errors.InvalidFormatError:
                The key data is malformed.  If `strict` is true,
                this includes an ECDSA curve that differs from the key
                type's curve.
            errors.TruncatedDataError:
                The key data is truncated.
            errors.UnknownCurveError:
                The ECDSA curve is not supported.

        """
        kind: _types.PublicKeyKind
        match key_type.family:
            case _types.KeyFamily.RSA:
                e = reader.read_mpint()
                n = reader.read_mpint()
                kind = _types.RsaPublicKey(e=e, n=n)
            case _types.KeyFamily.DSA:
                p = reader.read_mpint()
                q = reader.read_mpint()
                g = reader.read_mpint()
                y = reader.read_mpint()
                kind = _types.DsaPublicKey(p=p, q=q, g=g, y=y)
            case _types.KeyFamily.ECDSA:
                curve = keytypes.curve_from_identifier(reader.read_string())
                if strict and key_type.plain_name != (
                    f'ecdsa-sha2-{curve.identifier}'
                ):
                    msg = (
                        f'curve {curve.identifier!r} does not match '
                        f'key type {key_type.name!r}'
                    )
                    raise errors.InvalidFormatError(msg)
                kind = _types.EcdsaPublicKey(
                    curve=curve, key=reader.read_bytes()
                )
            case _types.KeyFamily.ED25519:
                kind = _types.Ed25519PublicKey(key=reader.read_bytes())
            case _:  # pragma: no cover
                assert_never(key_type.family)
        return cls(key_type, kind)

    @staticmethod
    def _check_trailing_data(reader: wire.Reader, /, *, strict: bool) -> None:
        if strict:
            reader.ensure_at_end()
        elif not reader.at_end():
            logger.debug(
                'ignoring %d bytes of trailing data after SSH key',
                reader.remaining,
            )

    def bits(self) -> int:
        """Return the declared size of the key, in bits.

        For RSA and DSA keys, this is the byte length of the modulus
        (`n` or `p`, respectively) in bits.  For ECDSA keys, it is the
        size of the curve.  Ed25519 keys are always 256 bits.

        """
        match self._kind:
            case _types.RsaPublicKey(n=n):
                return 8 * len(n)
            case _types.DsaPublicKey(p=p):
                return 8 * len(p)
            case _types.EcdsaPublicKey(curve=curve):
                return keytypes.CURVE_BITS[curve.kind]
            case _types.Ed25519PublicKey():
                return 256
            case _:  # pragma: no cover
                assert_never(self._kind)

    def encode(self) -> bytes:
        """Encode the public key in SSH wire format.

        The key is always encoded under its bare key type name, even if
        it was extracted from a certificate.

        Returns:
            The key data, suitable for base64 encoding into an
            authorized-keys line.

        """
        writer = wire.Writer()
        writer.write_string(self._key_type.plain_name)
        match self._kind:
            case _types.RsaPublicKey(e=e, n=n):
                writer.write_mpint(e)
                writer.write_mpint(n)
            case _types.DsaPublicKey(p=p, q=q, g=g, y=y):
                writer.write_mpint(p)
                writer.write_mpint(q)
                writer.write_mpint(g)
                writer.write_mpint(y)
            case _types.EcdsaPublicKey(curve=curve, key=key):
                writer.write_string(curve.identifier)
                writer.write_bytes(key)
            case _types.Ed25519PublicKey(key=key):
                writer.write_bytes(key)
            case _:  # pragma: no cover
                assert_never(self._kind)
        return writer.into_bytes()

    def fingerprint(
        self,
        algorithm: _types.FingerprintAlgorithm = (
            _types.FingerprintAlgorithm.SHA256
        ),
        /,
    ) -> _types.Fingerprint:
        """Compute the fingerprint of the public key.

        Args:
            algorithm:
                The hash function to use.  OpenSSH defaults to SHA-256.

        Returns:
            The fingerprint of the key's [wire encoding][encode].

        """
        return fingerprint.compute(algorithm, self.encode())

    def describe(
        self,
        algorithm: _types.FingerprintAlgorithm = (
            _types.FingerprintAlgorithm.SHA256
        ),
        /,
    ) -> str:
        """Return a one-line summary of the key, like `ssh-keygen -l`.

        The summary is `"<bits> <fingerprint> <comment> (<label>)"`; an
        absent comment is rendered as the empty string.

        Args:
            algorithm: The hash function for the fingerprint.

        """
        return (
            f'{self.bits():d} {self.fingerprint(algorithm)} '
            f'{self._comment or ""} ({self._key_type.short_label})'
        )
