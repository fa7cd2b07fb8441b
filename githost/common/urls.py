"""URL component encoding shared by the provider adapters."""

from __future__ import annotations

import urllib.parse

# Characters left untouched by JavaScript's encodeURIComponent in addition to
# the alphanumerics and ``-_.~`` that urllib already treats as safe.
_COMPONENT_SAFE = "!*'()"


def encode_component(value: str) -> str:
    """Percent-encode a value for use as a single URL path or query segment.

    Slashes, spaces, and reserved characters are all escaped, so a branch
    name such as ``feat/a b`` becomes ``feat%2Fa%20b``.

    Examples
    --------
    >>> encode_component("feat/a b")
    'feat%2Fa%20b'

    """
    return urllib.parse.quote(value, safe=_COMPONENT_SAFE)
