"""Less compilation through lesscpy.

Overrides replace the page's own top-level declarations of the same
variables, so ``@c: blue; body{color:@c}`` compiled with ``{"c": "green"}``
yields ``body{color:green}``. Minified output drops the last semicolon of
each block, which lesscpy keeps.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from io import StringIO

import lesscpy

from coatings.compiler.base import CompileError

logger = logging.getLogger(__name__)

# A variable declaration: @name: value;
_DECLARATION_RE = re.compile(r"@(?P<name>[\w-]+)\s*:[^;{}]*;[ \t]*\n?")
_TRAILING_SEMICOLON_RE = re.compile(r";\s*\}")


def strip_declarations(source: str, names: set[str]) -> str:
    """Remove top-level declarations of *names* from *source*.

    Declarations nested inside blocks are scoped to that block and are left
    alone.
    """
    if not names:
        return source
    out: list[str] = []
    depth = 0
    i = 0
    while i < len(source):
        ch = source[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
        elif ch == "@" and depth == 0:
            match = _DECLARATION_RE.match(source, i)
            if match and match.group("name") in names:
                i = match.end()
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def check_braces(source: str) -> None:
    """Raise CompileError unless every block in *source* is closed.

    lesscpy returns empty output for an unterminated block instead of failing.
    Braces inside strings, comments and parentheses do not count.
    """
    depth = 0
    parens = 0
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch in "\"'":
            j = i + 1
            while j < n and source[j] != ch:
                j += 2 if source[j] == "\\" else 1
            i = j + 1
            continue
        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        if parens == 0 and source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end == -1 else end + 1
            continue
        if ch == "(":
            parens += 1
        elif ch == ")":
            parens = max(parens - 1, 0)
        elif ch == "{" and parens == 0:
            depth += 1
        elif ch == "}" and parens == 0:
            depth -= 1
            if depth < 0:
                raise CompileError("Unbalanced braces: unexpected '}'")
        i += 1
    if depth:
        raise CompileError(f"Unbalanced braces: {depth} block(s) not closed")


def apply_overrides(source: str, variables: Mapping[str, str]) -> str:
    """Return *source* with *variables* declared ahead of it."""
    if not variables:
        return source
    header = "".join(f"@{name}: {value};\n" for name, value in variables.items())
    return header + strip_declarations(source, set(variables))


class LessCompiler:
    """Compile Less source to minified CSS.

    ``lesscpy.compile`` builds a fresh parser per call, so nothing leaks
    between compilations.
    """

    def __init__(self, minify: bool = True) -> None:
        self.minify = minify

    def compile(self, source: str, variables: Mapping[str, str]) -> str:
        prepared = apply_overrides(source, variables)
        check_braces(prepared)
        try:
            css = lesscpy.compile(StringIO(prepared), minify=self.minify)
        except Exception as exc:  # lesscpy raises assorted types on bad input
            logger.debug("Less compilation failed: %s", exc)
            raise CompileError(f"Less compilation failed: {exc}", cause=exc) from exc
        css = css.strip()
        if self.minify:
            css = _TRAILING_SEMICOLON_RE.sub("}", css)
        return css
