#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Look up credentials in a password store file

This keeps secrets off the command line (and out of the process list).
The store is a plain text file with one entry per line:

    <ident>:<password>

A reference to an entry is given as "<ident>:<path to store file>", see
`split_reference`.
"""

from pathlib import Path


class PasswordStoreError(ValueError):
    pass


def split_reference(reference: str) -> tuple[str, Path]:
    """
    >>> split_reference("cm_admin:/omd/sites/x/var/stored_passwords")
    ('cm_admin', PosixPath('/omd/sites/x/var/stored_passwords'))
    """
    ident, sep, file = reference.partition(":")
    if not sep or not ident or not file:
        raise PasswordStoreError(f"invalid password reference '{reference}', expected ID:FILE")
    return ident, Path(file)


def load(pw_file: Path) -> dict[str, str]:
    try:
        content = pw_file.read_text(encoding="utf-8")
    except OSError as e:
        raise PasswordStoreError(f"cannot read password store {pw_file}: {e}") from e

    passwords = {}
    for line in content.splitlines():
        if not line.strip():
            continue
        ident, sep, password = line.partition(":")
        if not sep:
            continue
        passwords[ident] = password
    return passwords


def lookup(pw_file: Path, pw_id: str) -> str:
    try:
        return load(pw_file)[pw_id]
    except KeyError:
        raise PasswordStoreError(f"password '{pw_id}' does not exist in {pw_file}") from None
