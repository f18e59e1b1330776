#!/usr/bin/python3
# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

# ruff: noqa: S404,S603,S607

"""Run various quality control checks automatically.

Distinguish between the master branch and other branches: run the full
test suite on the master branch, otherwise use only a reduced set of
test environments.  In both cases, run the linter, the formatter, and
the type checker.

If we are currently in a Stacked Git patch queue, run neither the tests
nor the type checker; stick to formatting and linting only.

"""

import os
import subprocess
import sys

envs = ['3.10', '3.13', 'pypy3.10']
opts = ['-py', ','.join(envs)]

current_branch = (
    os.getenv('GIT_CURRENT_BRANCH')
    or subprocess.run(
        ['git', 'branch', '--show-current'],
        capture_output=True,
        text=True,
        check=False,
    ).stdout.strip()
)
# We use rev-parse to check for Stacked Git's metadata tracking branch,
# instead of checking `stg top` or similar, because we also want the
# first `stg new` or `stg import` to correctly detect that we are
# working on a patch queue.
is_stgit_patch = bool(
    subprocess.run(
        [
            'git',
            'rev-parse',
            '--verify',
            '--end-of-options',
            f'refs/stacks/{current_branch}',
        ],
        capture_output=True,
        check=False,
    ).stdout
)

try:
    # Ignore E501 (line-too-long) and RUF100 (unused-noqa) in a first
    # run, so that the formatter gets to run at all.
    subprocess.run(
        ['hatch', 'fmt', '-l', '--', '--ignore=E501,RUF100'], check=True
    )
    subprocess.run(['hatch', 'fmt', '-f'], check=True)
    subprocess.run(['hatch', 'fmt', '-l'], check=True)
    if is_stgit_patch:
        pass
    elif current_branch == 'master':
        subprocess.run(
            ['hatch', 'env', 'run', '-e', 'types', '--', 'check'], check=True
        )
        subprocess.run(
            ['hatch', 'test', '-acpqr', '--', '--maxfail', '1'],
            check=True,
        )
    else:
        subprocess.run(
            ['hatch', 'env', 'run', '-e', 'types', '--', 'check'], check=True
        )
        subprocess.run(
            ['hatch', 'test', '-cpqr', *opts, '--', '--maxfail', '1'],
            env={**os.environ} | {'HYPOTHESIS_PROFILE': 'dev'},
            check=True,
        )
except subprocess.CalledProcessError as exc:
    sys.exit(getattr(exc, 'returncode', 1))
except KeyboardInterrupt:
    sys.exit(1)
