# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""sshpubkey internals.

Warning:
    Non-public package (implementation detail), provided for didactical
    and educational purposes only. Subject to change without notice,
    including removal.

"""

import sshpubkey

__all__ = ()

PROG_NAME = sshpubkey.__distribution_name__
VERSION = sshpubkey.__version__
AUTHOR = sshpubkey.__author__
