# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import base64
import sys
from typing import TYPE_CHECKING

import hypothesis
from typing_extensions import NamedTuple, Self

__all__ = ()

if TYPE_CHECKING:
    from collections.abc import Mapping

    import click.testing


class SSHTestKey(NamedTuple):
    """A public test key, with its expected decoding results.

    Attributes:
        public_key:
            The public key, as an authorized-keys line.
        key_type:
            The expected key type name.
        bits:
            The expected key size.
        short_label:
            The expected short label of the key type.
        fingerprints:
            The expected fingerprint hashes, by algorithm name.

    """

    public_key: bytes
    """"""
    key_type: str
    """"""
    bits: int
    """"""
    short_label: str
    """"""
    fingerprints: Mapping[str, str]
    """"""

    def public_key_data(self) -> bytes:
        """Return the key data, i.e. the base64-decoded body."""
        return base64.standard_b64decode(self.public_key.split()[1])


SUPPORTED_KEYS: Mapping[str, SSHTestKey] = {
    'ed25519': SSHTestKey(
        public_key=rb"""ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIIF4gWgm1gJIXw//Mkhv5MEwidwcakUGCekJD/vCEml2 test key without passphrase
""",  # noqa: E501
        key_type='ssh-ed25519',
        bits=256,
        short_label='ED25519',
        fingerprints={
            'SHA256': '0h+WAokssfhzfzVyuMLJlIcWyCtk5WiXI8BHyhXYxC0',
            'SHA384': (
                'wTiY/09FgHQNCRgFtSIy9nIGwztp6Ui7RZa7/H7XbNef6+'
                'WKrlWUx3cDDNOtJ5aJ'
            ),
            'SHA512': (
                'rYVIhxAevaW9deX5wKP/svLUwylEHKcmmhzq4stPqaFL6R6Cn1noFZV0vJFS'
                '883MH3SLMdaMnEQiMSjVEqlnng'
            ),
        },
    ),
    'rsa': SSHTestKey(
        public_key=rb"""ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABgQCxoe7pezhxWy4NI0mUwKqg9WCYOAS+IjxN9eYcqpfcmQiojcuy9XsiN/xYJ1O94SrsKS5mEia2xHnYA4RUChTyYNcM2v6cnnBQ/N/VQhpGMN7SVxdbhKUXTWFCwbjBgO6rGyHB6WtoH8vd7TOEPt+NgcXwhsWyoaUUdYTA62V+GF9vEmxMaC4ubgDz+B0QkPnauSoNxmkhcIe0lsLNb1pClZyz88PDnKXCX/d0HuN/HJ+sbPg7dCvOyqFYSyKn3uY6bCXqoIdurxXzH3O7z0P8f5sbmKOrGGKNuNxVRbeVl/D/3uDL0nqsbfUc1qvkfwbJwtMXC4IV6kOZMSk2BAsqh7x48gQ+rhYeEVSi8F3CWs4HJQoqrGt7K9a3mCSlMBHP70u3w6ME7eumoryxlUofewTd17ZEkzdX08l2ZlKzZvwQUrc+xQZ2Uw8z2mfW6Ti4gi0pYGaig7Ke4PwuXpo/C5YAWfeXycsvJZ2uaYRjMdZeJGNAnHLUGLkBscw5aI8= test key without passphrase
""",  # noqa: E501
        key_type='ssh-rsa',
        bits=3072,
        short_label='RSA',
        fingerprints={
            'SHA256': '1OHE0HrVlaSzJn2aQXQIKRu0tfO1CEMefy95K2Bt0xA',
            'SHA512': (
                'mU9Wa5yNo/BxwbBk0a2L/Y6atsxyrxYq1YUPUM9CcttdKDCkQiKyBW3sTwl1'
                'e+Ym9n6+p9hUM8Zc1J3o3fddkQ'
            ),
        },
    ),
    'dsa1024': SSHTestKey(
        public_key=rb"""ssh-dss AAAAB3NzaC1kc3MAAACBALsoBleoEY1UsFA+twxgCg1bngGEPxoiF7sENZjMlyxoy3vZUpKSC5nz5dHudFrQL9mwGL64mnR2nHL1kxM5Zfi7lg8x5BxcR0YTFkh+KYapI4CzLp8KV3Yh8lklkTFwKaF71KyOx3dhIA8lGW45cVBz3kxmhHmEzCUgMPxDOsTtAAAAFQD32c5k6B3tocxUahelQQFyfseiywAAAIAuvYCDeHEzesp3HNVTDx9fRVU9c77f4qvyEZ7Qpz/s3BVoFUvUZDx96cG5bKekBRsfTCjeHXCQH/yFfqn5Lxye7msgGVS5U3AvD9shiiEr3wt+pNgr9X6DooP7ybfjC8SJdmarLBjnifZuSxyHU2q+P+02kvMTFLH9dLSRIzVqKAAAAIBtA1E9xUS4YOsRx/7GDm2AB6M9cE9ev8myz4KGTriSbeaKsxiMBbJZi1VyBP7uE5jG1hGKfwvIwuopGaprRDlSu8N8KGAuG+wb1hJv8ynDmqbw+IdJp/CGRrP+17f7yEqiCqh7ux360IXToikmvmTvQAKI21Eaqyw0XwSWuXV59g== test key without passphrase
""",  # noqa: E501
        key_type='ssh-dss',
        bits=1024,
        short_label='DSA',
        fingerprints={
            'SHA256': 'oCzyWGYrVJB8dWKMdTK+WurSyYdB7CvVDeSS0AQ0upk',
            'SHA512': (
                '17zIAYse0NR9JB05oivMEKWzx4VjmBthbujXvo0oHtXZFc3eq3FGWyOwn/kV'
                'qIz1yBEmI6adj3UuVmCFcDIlrQ'
            ),
        },
    ),
    'ecdsa256': SSHTestKey(
        public_key=rb"""ecdsa-sha2-nistp256 AAAAE2VjZHNhLXNoYTItbmlzdHAyNTYAAAAIbmlzdHAyNTYAAABBBMttTTMPCyTYO+n5Vgiuw1V/mBbDPZLdJnxNvGJBGSmcZJWrIigck4lz41Ai0BrvGUn/xnqB/PntndqlSRowmbo= test key without passphrase
""",  # noqa: E501
        key_type='ecdsa-sha2-nistp256',
        bits=256,
        short_label='ECDSA',
        fingerprints={
            'SHA256': 'jDhe2m0icsVDy12Y1DbN5H1k1RqoUUqrPd3lfTiAsRw',
            'SHA512': (
                'zMWEsdj0qvOCUgwlcymBtNiDy0gzMjD+PfNSnx59LeIQZ3azStsyjbBZhMe9'
                'rv0zqzpKD28UZbEix1cpg8AA6w'
            ),
        },
    ),
    'ecdsa384': SSHTestKey(
        public_key=rb"""ecdsa-sha2-nistp384 AAAAE2VjZHNhLXNoYTItbmlzdHAzODQAAAAIbmlzdHAzODQAAABhBKCQ6OQC+ru/m8e6PcoEvj8QBZyfmFkPIpxvJXR4EwYWruEpdCVmohqEtWp4xHRCqaTE0nauXLZUdxed6re9n718ixYI51iTlY/c1k/O/3XVefvBsSQLtCd0PnMqWbikFQ== test key without passphrase
""",  # noqa: E501
        key_type='ecdsa-sha2-nistp384',
        bits=384,
        short_label='ECDSA',
        fingerprints={
            'SHA256': 'n+4hDxAbrG8nqOdpafzXaGQ0i1JHynf5MwKLAZNTu7Q',
            'SHA512': (
                'nHeahtfRCzejnhYZjFqfdbWqaRxwezyCGyOBzcbgHcIVsjxZ3YO5tEHPGXCv'
                'ln6QOEqDiVW5IZJy847jQG+0aw'
            ),
        },
    ),
    'ecdsa521': SSHTestKey(
        public_key=rb"""ecdsa-sha2-nistp521 AAAAE2VjZHNhLXNoYTItbmlzdHA1MjEAAAAIbmlzdHA1MjEAAACFBABJU53APOeaVwaqIu8W1h5W2sASJXOIh+wvuMQzxS27+bxZKQ8VC2PCp0XD5Z9nSaLqoxsQWCL8QvNlIpW14JJtwwCGoCQ4wUqIO7hvG+wzptPTZG7urbJPjXJLIaFQPRDJIGcjoKS3/CdDVMSmPzMMqJESvGz17pAsYSU1GTMs8yz6Yw== test key without passphrase
""",  # noqa: E501
        key_type='ecdsa-sha2-nistp521',
        bits=521,
        short_label='ECDSA',
        fingerprints={
            'SHA256': 'Cm9Q99spFjxOsW7MBjTOvm18uofCauqXRMhqYHnzCno',
            'SHA512': (
                'AbxXBgL5FZZjuguUqtBd3Xr9q+L9xZAmmHqQZil17hXJFcLHTZ2Ys9NloR06'
                'ja6wpfbQzhus/Ext9g3itLBisA'
            ),
        },
    ),
}
"""Real OpenSSH test keys, as written by `ssh-keygen`."""

KEY_COMMENT = 'test key without passphrase'

hypothesis_settings_coverage_compatible = (
    hypothesis.settings(
        # Running under coverage with the Python tracer increases
        # running times 40-fold, on my machines.  Sadly, not every
        # Python version offers the C tracer, so sometimes the Python
        # tracer is used anyway.
        deadline=(
            40 * deadline
            if (deadline := hypothesis.settings().deadline) is not None
            else None
        ),
        suppress_health_check=(hypothesis.HealthCheck.too_slow,),
    )
    if sys.gettrace() is not None
    else hypothesis.settings()
)


def ssh_string(payload: bytes, /) -> bytes:
    """Frame the payload as an SSH string, by hand."""
    return len(payload).to_bytes(4, 'big') + payload


def rsa_key_data(
    e: bytes, n: bytes, /, *, name: bytes = b'ssh-rsa'
) -> bytes:
    """Assemble RSA key data from already padded `mpint` payloads."""
    return ssh_string(name) + ssh_string(e) + ssh_string(n)


def authorized_keys_line(
    name: str, data: bytes, /, comment: str | None = None
) -> str:
    """Assemble an authorized-keys line."""
    parts = [name, base64.standard_b64encode(data).decode('ASCII')]
    if comment is not None:
        parts.append(comment)
    return ' '.join(parts)


class ReadableResult(NamedTuple):
    """Helper class for formatting and testing click.testing.Result objects."""

    exception: BaseException | None
    exit_code: int
    stdout: str
    stderr: str

    @classmethod
    def parse(cls, r: click.testing.Result, /) -> Self:
        return cls(r.exception, r.exit_code, r.stdout or '', r.stderr or '')

    def clean_exit(
        self, *, output: str = '', empty_stderr: bool = False
    ) -> bool:
        """Return whether the invocation exited cleanly.

        Args:
            output:
                An expected output string.
            empty_stderr:
                If true, additionally require that nothing was written
                to standard error.

        """
        return (
            (
                not self.exception
                or (
                    isinstance(self.exception, SystemExit)
                    and self.exit_code == 0
                )
            )
            and (not output or output in self.stdout)
            and (not empty_stderr or not self.stderr)
        )

    def error_exit(
        self, *, error: str | type[BaseException] = BaseException
    ) -> bool:
        """Return whether the invocation exited uncleanly.

        Args:
            error:
                An expected error message, or an expected exception
                type.

        """
        match error:
            case str():
                return (
                    isinstance(self.exception, SystemExit)
                    and self.exit_code > 0
                    and (not error or error in self.stderr)
                )
            case _:
                return isinstance(self.exception, error)
