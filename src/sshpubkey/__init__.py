# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Decode, encode and fingerprint OpenSSH public keys."""

__author__ = 'Marco Ricci <software@the13thletter.info>'
__distribution_name__ = 'sshpubkey'

# Automatically generated.  DO NOT EDIT! Use importlib.metadata instead
# to query the correct values.
__version__ = '0.1a1.dev1'
# END automatically generated.
