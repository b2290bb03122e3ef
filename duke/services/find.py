"""File search with glob or regex path matchers.

Patterns carry their syntax as a prefix, ``glob:`` or ``regex:``; a bare
pattern is a glob. Globs follow the usual path-matcher rules: ``*`` and
``?`` stay within one path segment, ``**`` crosses segments, ``[...]`` is
a character class and ``{a,b}`` an alternation.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from duke.services.modules import find_paths

__all__ = ["DEFAULT_PATTERN", "find_files", "glob_to_regex", "path_matcher"]

DEFAULT_PATTERN = "glob:**/*"
EXCLUDE_PATTERN = "glob:.git/**"
MAX_DEPTH = 99


def glob_to_regex(glob: str) -> str:
    """Translate a glob into an anchored regular expression."""
    out: list[str] = []
    i = 0
    in_group = False
    while i < len(glob):
        c = glob[i]
        if c == "*":
            if glob.startswith("**", i):
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = glob.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = glob[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append(f"[{body}]")
                i = end + 1
                continue
        elif c == "{" and not in_group:
            in_group = True
            out.append("(?:")
        elif c == "}" and in_group:
            in_group = False
            out.append(")")
        elif c == "," and in_group:
            out.append("|")
        elif c == "\\" and i + 1 < len(glob):
            out.append(re.escape(glob[i + 1]))
            i += 2
            continue
        else:
            out.append(re.escape(c))
        i += 1
    if in_group:
        raise ValueError(f"Missing '}}' in glob: {glob!r}")
    return "".join(out)


def path_matcher(syntax_and_pattern: str) -> Callable[[Path], bool]:
    """Build a matcher for relative paths from ``glob:...`` or ``regex:...``.

    Raises:
        ValueError: If the pattern is invalid.
    """
    syntax, sep, pattern = syntax_and_pattern.partition(":")
    if not sep:
        syntax, pattern = "glob", syntax_and_pattern
    match syntax:
        case "glob":
            regex = glob_to_regex(pattern)
        case "regex":
            regex = pattern
        case _:
            raise ValueError(f"Syntax '{syntax}' not recognized")
    try:
        compiled = re.compile(regex)
    except re.error as e:
        raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
    return lambda path: compiled.fullmatch(path.as_posix()) is not None


def find_files(start: Path, syntax_and_pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """Paths below start matching the pattern, ``.git`` content excluded, sorted."""
    include = path_matcher(syntax_and_pattern)
    exclude = path_matcher(EXCLUDE_PATTERN)
    return find_paths(start, MAX_DEPTH, lambda path: include(path) and not exclude(path))
