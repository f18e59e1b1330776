# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

# ruff: noqa: TRY400

"""Command-line interface for sshpubkey."""

from __future__ import annotations

import logging

import click

from sshpubkey import _internals, _types, pubkey
from sshpubkey._internals import cli_machinery

__all__ = ('sshpubkey',)

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION


@click.command(
    context_settings={'help_option_names': ['-h', '--help']},
    cls=cli_machinery.LoggingCommand,
    epilog=(
        'Use "-" as KEYFILE to read a public key from standard input.  '
        'The default fingerprint hash may also be set via the '
        'SSHPUBKEY_FINGERPRINT_HASH environment variable.'
    ),
)
@click.option(
    '-E',
    '--hash',
    'hash_name',
    type=click.Choice(
        [alg.value.lower() for alg in _types.FingerprintAlgorithm],
        case_sensitive=False,
    ),
    default='sha256',
    show_default=True,
    envvar='SSHPUBKEY_FINGERPRINT_HASH',
    help='Hash function for the key fingerprints.',
)
@click.option(
    '--strict',
    is_flag=True,
    help=(
        'Reject key data with trailing bytes, or with an ECDSA curve '
        'that differs from the key type.'
    ),
)
@cli_machinery.version_option
@cli_machinery.color_forcing_pseudo_option
@cli_machinery.standard_logging_options
@click.argument(
    'keyfiles',
    metavar='KEYFILE...',
    nargs=-1,
    required=True,
    type=click.Path(dir_okay=False, allow_dash=True),
)
@click.pass_context
def sshpubkey(
    ctx: click.Context,
    /,
    *,
    keyfiles: tuple[str, ...],
    hash_name: str,
    strict: bool,
) -> None:
    """Show the size, fingerprint and type of OpenSSH public keys.

    Each KEYFILE must contain a single public key in authorized-keys
    format, as written by ssh-keygen(1) into `.pub` files.

    This is a [`click`][CLICK]-powered command-line interface function,
    and not intended for programmatic use.  (See also
    [`click.testing.CliRunner`][] for controlled, programmatic
    invocation.)

    [CLICK]: https://pypi.org/package/click/

    """
    logger = logging.getLogger(PROG_NAME)
    algorithm = _types.FingerprintAlgorithm.from_name(hash_name)
    failures = 0
    for keyfile in keyfiles:
        try:
            with click.open_file(keyfile, 'rb') as infile:
                key = pubkey.PublicKey.from_string(
                    infile.read(), strict=strict
                )
        except OSError as exc:
            logger.error(
                '%s: cannot read public key file: %s',
                keyfile,
                exc.strerror or exc,
                extra={'color': ctx.color},
            )
            failures += 1
        except ValueError as exc:
            logger.error(
                '%s: not a valid public key file: %s',
                keyfile,
                exc,
                extra={'color': ctx.color},
            )
            failures += 1
        else:
            logger.info(
                '%s: loaded %s key',
                keyfile,
                key.key_type.name,
                extra={'color': ctx.color},
            )
            click.echo(key.describe(algorithm), color=ctx.color)
    if failures:
        logger.debug(
            '%d of %d key files failed',
            failures,
            len(keyfiles),
            extra={'color': ctx.color},
        )
        ctx.exit(1)
