# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Readers and writers for the SSH wire format data types.

Implements the `uint32`, `string` and `mpint` data types of [RFC 4251,
section 5][RFC4251_5].  The `string` type is exposed twice: as opaque
bytes ([`Reader.read_bytes`][], [`Writer.write_bytes`][]) and as
textual identifiers ([`Reader.read_string`][],
[`Writer.write_string`][]).

[RFC4251_5]: https://www.rfc-editor.org/rfc/rfc4251#section-5

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sshpubkey import errors

if TYPE_CHECKING:
    from typing_extensions import Buffer

__all__ = ('Reader', 'Writer')

# In SSH bytestrings, the "length" of the byte string is stored as
# a 4-byte/32-bit unsigned integer at the beginning.
HEAD_LEN = 4


class Reader:
    """A sequential reader of SSH wire format data.

    The read position only ever advances.  Every read either consumes
    a complete field or raises, without consuming anything.

    Examples:
        >>> reader = Reader(
        ...     b'\\x00\\x00\\x00\\x07ssh-rsa'
        ...     b'\\x00\\x00\\x00\\x01\\x2a'
        ... )
        >>> reader.read_string()
        'ssh-rsa'
        >>> reader.read_mpint()
        b'*'
        >>> reader.at_end()
        True

    """

    def __init__(self, data: Buffer, /) -> None:
        """Initialize the reader.

        Args:
            data: A bytes-like object.  It is copied.

        """
        self._data = bytes(memoryview(data))
        self._offset = 0

    @property
    def offset(self) -> int:
        """The number of bytes consumed so far."""
        return self._offset

    @property
    def remaining(self) -> int:
        """The number of bytes not yet consumed."""
        return len(self._data) - self._offset

    def at_end(self) -> bool:
        """Return true if all data has been consumed."""
        return self._offset >= len(self._data)

    def ensure_at_end(self) -> None:
        """Assert that all data has been consumed.

        Raises:
            errors.TrailingDataError:
                There is unconsumed data left.

        """
        if not self.at_end():
            raise errors.TrailingDataError(self.remaining)

    def _take(self, count: int, /) -> bytes:
        if count > self.remaining:
            raise errors.TruncatedDataError(count, self.remaining)
        chunk = self._data[self._offset : self._offset + count]
        self._offset += count
        return chunk

    def read_u32(self) -> int:
        r"""Read a `uint32`.

        Returns:
            The number, decoded from 4 bytes in big endian order.

        Raises:
            errors.TruncatedDataError:
                Fewer than 4 bytes are left.

        Examples:
            >>> Reader(b'\x01\x00\x00\x00').read_u32()
            16777216

        """
        return int.from_bytes(self._take(HEAD_LEN), 'big', signed=False)

    def _read_length(self) -> int:
        # Peek, so that an overlong length leaves the reader untouched.
        length = self.read_u32()
        self._offset -= HEAD_LEN
        return length

    def read_bytes(self) -> bytes:
        r"""Read an SSH string as an opaque byte string.

        Returns:
            The payload, without the length header.

        Raises:
            errors.TruncatedDataError:
                The length header, or the payload it announces, runs
                past the end of the data.

        Examples:
            >>> Reader(b'\x00\x00\x00\x03abc').read_bytes()
            b'abc'

        """
        length = self._read_length()
        if HEAD_LEN + length > self.remaining:
            raise errors.TruncatedDataError(
                HEAD_LEN + length, self.remaining
            )
        self._offset += HEAD_LEN
        return self._take(length)

    def read_string(self) -> str:
        r"""Read an SSH string as a textual identifier.

        Identifiers (key type names, curve names) are plain ASCII.

        Returns:
            The payload, decoded as text.

        Raises:
            errors.TruncatedDataError:
                The length header runs past the end of the data.
            errors.InvalidFormatError:
                The payload runs past the end of the data, or is not
                ASCII text.

        Examples:
            >>> Reader(b'\x00\x00\x00\x0bssh-ed25519').read_string()
            'ssh-ed25519'

        """
        length = self._read_length()
        if HEAD_LEN + length > self.remaining:
            msg = (
                f'malformed SSH string: length {length:d} exceeds '
                f'the {self.remaining - HEAD_LEN:d} remaining bytes'
            )
            raise errors.InvalidFormatError(msg)
        payload = self._data[
            self._offset + HEAD_LEN : self._offset + HEAD_LEN + length
        ]
        try:
            text = payload.decode('ascii')
        except UnicodeDecodeError as exc:
            msg = f'malformed SSH string: not ASCII text: {payload!r}'
            raise errors.InvalidFormatError(msg) from exc
        self._offset += HEAD_LEN + length
        return text

    def read_mpint(self) -> bytes:
        r"""Read an SSH `mpint` as a non-negative magnitude.

        The producer is trusted to have encoded the number minimally.
        A single leading zero byte (the sign padding of a number whose
        top bit is set) is removed.

        Returns:
            The big endian magnitude, without sign padding.

        Raises:
            errors.TruncatedDataError:
                The length header, or the payload it announces, runs
                past the end of the data.

        Examples:
            >>> Reader(b'\x00\x00\x00\x02\x00\x80').read_mpint()
            b'\x80'
            >>> Reader(b'\x00\x00\x00\x03\x01\x00\x01').read_mpint()
            b'\x01\x00\x01'
            >>> Reader(b'\x00\x00\x00\x00').read_mpint()
            b''

        """
        payload = self.read_bytes()
        if payload[:1] == b'\x00':
            return payload[1:]
        return payload


class Writer:
    """An append-only writer of SSH wire format data.

    Once [`into_bytes`][] has been called, the writer is spent.

    Examples:
        >>> writer = Writer()
        >>> writer.write_string('ssh-ed25519')
        >>> writer.write_bytes(b'\\x01\\x02')
        >>> writer.into_bytes()
        b'\\x00\\x00\\x00\\x0bssh-ed25519\\x00\\x00\\x00\\x02\\x01\\x02'

    """

    def __init__(self) -> None:
        self._buffer: bytearray | None = bytearray()

    def _sink(self) -> bytearray:
        if self._buffer is None:
            msg = 'writer has already been finalized'
            raise RuntimeError(msg)
        return self._buffer

    def write_u32(self, num: int, /) -> None:
        r"""Write a `uint32`.

        Args:
            num: A number.

        Raises:
            OverflowError:
                As per [`int.to_bytes`][].

        Examples:
            >>> writer = Writer()
            >>> writer.write_u32(16777216)
            >>> writer.into_bytes()
            b'\x01\x00\x00\x00'

        """
        self._sink().extend(int.to_bytes(num, HEAD_LEN, 'big', signed=False))

    def write_bytes(self, payload: Buffer, /) -> None:
        r"""Write the payload as an SSH string.

        Args:
            payload: A bytes-like object, written verbatim.

        Examples:
            >>> writer = Writer()
            >>> writer.write_bytes(b'ssh-rsa')
            >>> writer.into_bytes()
            b'\x00\x00\x00\x07ssh-rsa'

        """
        payload = memoryview(payload)
        sink = self._sink()
        sink.extend(int.to_bytes(len(payload), HEAD_LEN, 'big', signed=False))
        sink.extend(payload)

    def write_string(self, text: str, /) -> None:
        """Write the text, encoded as UTF-8, as an SSH string.

        Args:
            text: A text string.

        """
        self.write_bytes(text.encode('UTF-8'))

    def write_mpint(self, magnitude: Buffer, /) -> None:
        r"""Write a non-negative magnitude as an SSH `mpint`.

        Prepends a zero byte if the top bit of the magnitude is set, so
        that the two's complement reading stays non-negative.

        Args:
            magnitude:
                A big endian magnitude without superfluous leading zero
                bytes.  May be empty, for the number zero.

        Examples:
            >>> writer = Writer()
            >>> writer.write_mpint(b'\x80')
            >>> writer.write_mpint(b'\x7f')
            >>> writer.into_bytes()
            b'\x00\x00\x00\x02\x00\x80\x00\x00\x00\x01\x7f'

        """
        magnitude = bytes(memoryview(magnitude))
        if magnitude and magnitude[0] & 0x80:
            magnitude = b'\x00' + magnitude
        self.write_bytes(magnitude)

    def into_bytes(self) -> bytes:
        """Return the written data, and finalize the writer.

        Returns:
            The accumulated SSH wire format data.

        Raises:
            RuntimeError:
                The writer has already been finalized.

        """
        data = bytes(self._sink())
        self._buffer = None
        return data
