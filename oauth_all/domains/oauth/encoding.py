"""Percent-encoding and parameter normalization.

OAuth encodes with the RFC 3986 unreserved set: letters, digits and ``-._~``
pass through, everything else (``/`` and space included) becomes ``%XX`` over
the UTF-8 bytes. This is stricter than form encoding, so ``urlencode`` is
never used for anything that gets signed.
"""

import re
from typing import Any, Mapping
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from oauth_all.domains.oauth.exceptions import MalformedResponseError

_WHITESPACE_RE = re.compile(r"\s")


def percent_encode(value: Any) -> str:
    """Percent-encode a value according to RFC 3986. ``None`` encodes as ``""``."""
    if value is None:
        return ""
    return quote(str(value), safe="")


def percent_decode(value: str) -> str:
    # '+' is left alone: OAuth bodies never use form-style spaces.
    return unquote(value)


def render_parameters(params: Mapping[str, Any], quote_char: str = "") -> list[str]:
    """Render ``name=value`` pairs, both sides encoded, sorted by the rendered text."""
    return sorted(
        f"{percent_encode(name)}={quote_char}{percent_encode(value)}{quote_char}"
        for name, value in params.items()
    )


def normalize_parameters(params: Mapping[str, Any]) -> str:
    """Join the rendered pairs with ``&``."""
    return "&".join(render_parameters(params))


def parse_parameter_string(body: str) -> dict[str, str]:
    """Parse ``a=1&b="2"`` into a dict, decoding names and values.

    One surrounding double quote is stripped from each side before decoding.
    A pair without ``=`` maps to an empty value.
    """
    params: dict[str, str] = {}
    for pair in body.split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        params[percent_decode(_unquote(name))] = percent_decode(_unquote(value))
    return params


def strip_query(url: str) -> str:
    """Drop the query string and fragment, keeping scheme, host and path."""
    parts = urlsplit(url)
    return urlunsplit(parts._replace(query="", fragment=""))


def parse_post_body(body: str) -> dict[str, str]:
    """Parse a provider's ``name=value&...`` response body.

    Raises:
        MalformedResponseError: If the body contains whitespace, which means
            the provider sent an error page rather than parameters.
    """
    if _WHITESPACE_RE.search(body):
        raise MalformedResponseError(body)
    return parse_parameter_string(body)


def _unquote(text: str) -> str:
    return text.removeprefix('"').removesuffix('"')
