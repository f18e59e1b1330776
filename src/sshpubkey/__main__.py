# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib
"""Run [`sshpubkey.cli.sshpubkey`][] on import."""

import sys

if __name__ == '__main__':
    from sshpubkey.cli import sshpubkey

    sys.exit(sshpubkey())
