"""
Syntactic validation of user-supplied URLs.
"""

from urllib.parse import urlsplit

from pydantic import AnyUrl, TypeAdapter, ValidationError

from mijikaku.errors import InvalidURL


_any_url = TypeAdapter(AnyUrl)


def validate_url(raw: str) -> str:
    """
    Validate and normalize an absolute URL.

    The string must carry both a scheme and an authority
    ("scheme://host..."), so "ftp:/bad" or "mailto:a@b" are rejected
    even though some parsers accept them. Accepted input is parsed with
    pydantic and returned in its serialized form (lower-cased scheme
    and host, "/" for an empty path, percent-encoding applied).

    No network access happens here.

    Raises:
        InvalidURL: if the string is not a well-formed absolute URL
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidURL("empty URL")

    try:
        parts = urlsplit(raw)
    except ValueError as e:
        raise InvalidURL(str(e)) from e

    if not parts.scheme:
        raise InvalidURL("missing scheme")
    if not parts.netloc:
        raise InvalidURL("missing host")

    try:
        parsed = _any_url.validate_python(raw)
    except ValidationError as e:
        raise InvalidURL(e.errors()[0]["msg"]) from e

    if not parsed.host:
        raise InvalidURL("missing host")

    return str(parsed)
