"""Percent-encoding for the provider's signed query strings.

The provider canonicalises with RFC 3986 unreserved characters only, which
differs from form encoding in exactly three places: a space is `%20` rather
than `+`, `*` is escaped, and `~` is left alone. A value must be encoded
exactly once; encoding it twice changes the signature.
"""

from urllib.parse import quote_plus

from aliquery.domain.errors import EncodingError

# Applied in order to the form-encoded output.
_SUBSTITUTIONS = (
    ("+", "%20"),
    ("*", "%2A"),
    ("%7E", "~"),
)


def percent_encode(value: str) -> str:
    """Encodes a single name or value for use in a canonical query string.

    Args:
        value: The string to encode.

    Returns:
        The encoded string, e.g. `"a b"` -> `"a%20b"`, `"a*b"` -> `"a%2Ab"`,
        `"a~b"` -> `"a~b"`.

    Raises:
        EncodingError: If `value` is not a string or is not UTF-8 encodable.
    """
    if not isinstance(value, str):
        raise EncodingError(f"Expected str for percent-encoding, got {type(value).__name__}")
    try:
        encoded = quote_plus(value, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Value cannot be encoded as UTF-8: {e}") from e
    for old, new in _SUBSTITUTIONS:
        encoded = encoded.replace(old, new)
    return encoded
