"""Turn the ``href`` of an anchor into an absolute URL."""

from __future__ import annotations

_ABSOLUTE_PREFIXES = ("http://", "https://")
_SCHEME_SEP = "://"


def _split_base(base_url: str) -> tuple[str, str, str]:
    """Split *base_url* into ``(scheme, authority, rest)`` without validation.

    ``scheme`` is empty when the base has no ``://``; ``rest`` keeps the
    leading slash, query or fragment (whatever follows the authority).
    """
    sep = base_url.find(_SCHEME_SEP)
    if sep < 0:
        return "", "", base_url
    scheme = base_url[:sep]
    after = base_url[sep + len(_SCHEME_SEP):]
    end = len(after)
    for delim in "/?#":
        idx = after.find(delim)
        if 0 <= idx < end:
            end = idx
    return scheme, after[:end], after[end:]


def resolve(href: str, base_url: str) -> str:
    """Return *href* as an absolute URL relative to *base_url*.

    Never raises: when the base gives nothing to anchor on, the result is a
    plain concatenation.
    """
    if href.startswith(_ABSOLUTE_PREFIXES):
        return href

    scheme, authority, rest = _split_base(base_url)

    if href.startswith("//") and scheme:
        return f"{scheme}:{href}"

    if href.startswith("/") and scheme and authority:
        return f"{scheme}://{authority}{href}"

    # Relative path: drop the query and fragment of the base first.
    for delim in "?#":
        idx = rest.find(delim)
        if idx >= 0:
            rest = rest[:idx]
    if scheme:
        base = f"{scheme}://{authority}{rest}"
        authority_start = len(scheme) + len(_SCHEME_SEP)
    else:
        base = rest
        authority_start = 0

    if base.endswith("/"):
        return base + href

    last_slash = base.rfind("/")
    if last_slash >= authority_start:
        return base[: last_slash + 1] + href

    # Bare authority such as ``https://example.com``.
    return base + "/" + href
