"""
Identifier renamer for pulled declaration files.

drizzle-kit names objects of a non-public schema like ``usersInBillingSchema``.
The renamer folds the ``InBillingSchema`` tail into a short suffix
(``usersBillingS``) without touching text where the tail is not preceded by
a bare identifier.
"""

from __future__ import annotations

import re

_IDENTIFIER_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")
_IDENTIFIER_TOKEN = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


def rename_identifiers(text: str, search_pattern: str, suffix: str) -> str:
    """
    Replace ``<identifier><search_pattern>`` with ``<identifier><suffix>``.

    Text without any occurrence of ``search_pattern`` is returned unchanged.
    Otherwise every line is rewritten and the result always ends with a
    newline.

    Args:
        text: Declaration file content
        search_pattern: Identifier tail to replace (e.g. ``InPublicSchema``)
        suffix: Replacement tail (e.g. ``PublicS``)

    Returns:
        The rewritten text
    """
    if not search_pattern or search_pattern not in text:
        return text

    renamed = "\n".join(
        _rename_line(line, search_pattern, suffix) for line in text.split("\n")
    )
    if not renamed.endswith("\n"):
        renamed += "\n"
    return renamed


def _rename_line(line: str, search_pattern: str, suffix: str) -> str:
    parts: list[str] = []
    index = 0

    while index < len(line):
        match_index = line.find(search_pattern, index)
        if match_index == -1:
            break

        start = match_index
        while start > 0 and line[start - 1] in _IDENTIFIER_CHARS:
            start -= 1

        # The whole fragment must be an identifier; "9InPublicSchema" is skipped.
        fragment = line[start:match_index]
        if fragment and _IDENTIFIER_TOKEN.fullmatch(fragment):
            # Text before the cursor has already been emitted.
            parts.append(line[max(start, index) : match_index] + suffix)
            index = match_index + len(search_pattern)
        else:
            parts.append(line[index : match_index + 1])
            index = match_index + 1

    parts.append(line[index:])
    return "".join(parts)
