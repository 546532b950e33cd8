"""Parsers for version-control text output (name-status diff, clean dry-run)."""

from __future__ import annotations

import logging
import re

from .actions import ChangeKind
from .change_set import ChangeEntry

logger = logging.getLogger(__name__)

# name-status letters -> kind. R and C are handled separately.
_STATUS_KINDS: dict[str, ChangeKind] = {
    "A": ChangeKind.ADD,
    "M": ChangeKind.MODIFY,
    "T": ChangeKind.MODIFY,
    "U": ChangeKind.MODIFY,
    "D": ChangeKind.DELETE,
}

_WOULD_REMOVE_PREFIX = "Would remove "

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")
_SIMPLE_ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


def unquote_path(value: str) -> str:
    """
    Undo git's C-style path quoting.

    Paths with special or non-ASCII characters are printed as "..." with
    backslash escapes; non-ASCII bytes come out as octal triplets of the
    UTF-8 encoding. Unquoted input is returned unchanged.
    """
    if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
        return value

    body = value[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 >= len(body):
            out.extend(ch.encode("utf-8"))
            i += 1
            continue
        m = _OCTAL_ESCAPE.match(body, i)
        if m:
            out.append(int(m.group(1), 8))
            i = m.end()
            continue
        nxt = body[i + 1]
        out.extend(_SIMPLE_ESCAPES.get(nxt, nxt).encode("utf-8"))
        i += 2
    return out.decode("utf-8", errors="replace")


def _split_fields(line: str) -> list[str]:
    # Porcelain output is tab separated; the prefix grammar ("M path") is
    # whitespace separated with a single path.
    if "\t" in line:
        return line.split("\t")
    return line.split(None, 1)


def parse_name_status(output: str) -> list[ChangeEntry]:
    """
    Parse `diff --name-status` output into change entries.

    Grammar (one entry per line):
        <A|M|D|T|U>\\t<path>
        <R|C><score>\\t<old>\\t<new>
    Fallback: "<letter> <path>" separated by whitespace.

    Renames become DELETE old + ADD new; copies become ADD new.
    Unknown status letters are skipped with a warning.
    """
    entries: list[ChangeEntry] = []
    for raw in output.splitlines():
        line = raw.rstrip("\r")
        if not line.strip():
            continue

        fields = _split_fields(line)
        if len(fields) < 2:
            logger.warning("Unparseable diff line: %r", line)
            continue

        status = fields[0].strip()
        letter = status[:1].upper()
        paths = [unquote_path(p) for p in fields[1:]]

        if letter in ("R", "C"):
            if len(paths) < 2:
                logger.warning("Rename/copy line without target: %r", line)
                continue
            old, new = paths[0], paths[1]
            if letter == "R":
                entries.append(ChangeEntry(kind=ChangeKind.DELETE, path=old))
            entries.append(ChangeEntry(kind=ChangeKind.ADD, path=new))
            continue

        kind = _STATUS_KINDS.get(letter)
        if kind is None:
            logger.warning("Unknown diff status %r for %s", status, paths[0])
            continue
        entries.append(ChangeEntry(kind=kind, path=paths[0]))

    return entries


def parse_clean_dry_run(output: str) -> list[ChangeEntry]:
    """
    Parse `clean -fd --dry-run` output.

    Only "Would remove <path>" lines are candidates; everything else
    (e.g. "Would skip repository ...") is ignored.
    """
    entries: list[ChangeEntry] = []
    for raw in output.splitlines():
        line = raw.rstrip("\r")
        if not line.startswith(_WOULD_REMOVE_PREFIX):
            continue
        path = unquote_path(line[len(_WOULD_REMOVE_PREFIX):].strip())
        if path:
            entries.append(ChangeEntry(kind=ChangeKind.UNTRACKED, path=path))
    return entries
