"""
WWW-Authenticate challenge parsing.

Decodes ``WWW-Authenticate`` header values into :class:`AuthChallenge` records
following the RFC 7235 grammar: a scheme token followed by comma-separated
``name=value`` parameters, where a value is a token or a quoted-string with
backslash escapes.

Parsing is lenient. A value without a scheme yields no challenge, and a broken
parameter list keeps whatever parameters were read before the break.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

import httpx

from .models import AuthChallenge

__all__ = ["parse_challenges", "parse_www_authenticate", "parse_value_and_params"]

# Octet classes (RFC 2616 section 2.2)
IS_TOKEN = 1 << 0
IS_SPACE = 1 << 1

_SEPARATORS = " \t\"(),/:;<=>?@[]\\{}"
_WHITESPACE = " \t\r\n"


def _build_octet_table() -> Tuple[int, ...]:
    # token = 1*<any CHAR except CTLs or separators>
    table = []
    for c in range(256):
        kind = 0
        is_ctl = c <= 31 or c == 127
        is_char = c <= 127
        if chr(c) in _WHITESPACE:
            kind |= IS_SPACE
        if is_char and not is_ctl and chr(c) not in _SEPARATORS:
            kind |= IS_TOKEN
        table.append(kind)
    return tuple(table)


OCTET_TYPES: Tuple[int, ...] = _build_octet_table()


def _octet_type(ch: str) -> int:
    code = ord(ch)
    return OCTET_TYPES[code] if code < 256 else 0


def skip_space(s: str) -> str:
    """Return ``s`` with leading whitespace (space, tab, CR, LF) removed."""
    i = 0
    while i < len(s) and _octet_type(s[i]) & IS_SPACE:
        i += 1
    return s[i:]


def expect_token(s: str) -> Tuple[str, str]:
    """Split ``s`` into a leading token and the rest."""
    i = 0
    while i < len(s) and _octet_type(s[i]) & IS_TOKEN:
        i += 1
    return s[:i], s[i:]


def expect_token_or_quoted(s: str) -> Tuple[str, str]:
    """
    Split ``s`` into an optionally quoted token and the rest.

    Inside a quoted-string a backslash escapes the next character, whatever
    it is. An unterminated quoted-string returns ``("", "")``.
    """
    if not s.startswith('"'):
        return expect_token(s)

    value: List[str] = []
    escape = False
    for i in range(1, len(s)):
        ch = s[i]
        if escape:
            value.append(ch)
            escape = False
        elif ch == "\\":
            escape = True
        elif ch == '"':
            return "".join(value), s[i + 1:]
        else:
            value.append(ch)
    return "", ""


def parse_value_and_params(header: str) -> Tuple[str, Dict[str, str]]:
    """
    Parse one header value into a lowercased scheme and its parameters.

    Args:
        header: A single ``WWW-Authenticate`` value, e.g.
            ``Bearer realm="https://auth.example/token",service="registry"``

    Returns:
        ``(scheme, params)``. ``scheme`` is empty when no leading token was
        found, in which case ``params`` is empty too.
    """
    params: Dict[str, str] = {}
    scheme, rest = expect_token(header)
    if not scheme:
        return "", params
    scheme = scheme.lower()

    rest = "," + skip_space(rest)
    while rest.startswith(","):
        key, rest = expect_token(skip_space(rest[1:]))
        if not key:
            break
        if not rest.startswith("="):
            break
        value, rest = expect_token_or_quoted(rest[1:])
        if not value:
            break
        params[key.lower()] = value
        rest = skip_space(rest)
    return scheme, params


def parse_challenges(values: Iterable[str]) -> List[AuthChallenge]:
    """Parse header values in order, dropping the ones without a scheme."""
    challenges = []
    for value in values:
        scheme, params = parse_value_and_params(value)
        if scheme:
            challenges.append(AuthChallenge(scheme=scheme, parameters=params))
    return challenges


def parse_www_authenticate(headers: httpx.Headers) -> List[AuthChallenge]:
    """Parse every ``WWW-Authenticate`` line of a response."""
    return parse_challenges(headers.get_list("WWW-Authenticate"))
