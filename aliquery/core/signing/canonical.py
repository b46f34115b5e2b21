"""Builds the canonical query string that is both sent and signed."""

from typing import Dict, List
from urllib.parse import unquote

from aliquery.core.signing.encoder import percent_encode
from aliquery.domain.errors import EncodingError
from aliquery.domain.models.common import ParameterSet, ParameterValue


def stringify(value: ParameterValue) -> str:
    """Converts a scalar parameter value to the string that gets encoded.

    Booleans become `true`/`false`. Structured values must be serialized
    (e.g. to JSON) by the caller before they get here.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise EncodingError(f"Unsupported parameter value type: {type(value).__name__}")


def build_canonical_query(params: ParameterSet) -> str:
    """Serializes parameters into the deterministic, sorted query string.

    Keys are sorted by code point (equivalently, by UTF-8 bytes) and each pair
    is emitted as `encode(key)=encode(value)`. Parameters whose value is None
    are left out entirely; the provider rejects signatures over empty
    placeholder parameters.

    Args:
        params: The merged action and common parameters.

    Returns:
        The canonical query string, without a leading `?`.
    """
    bad_keys = [key for key in params if not isinstance(key, str)]
    if bad_keys:
        raise EncodingError(f"Parameter names must be str, got {type(bad_keys[0]).__name__}")

    pairs: List[str] = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            continue
        pairs.append(f"{percent_encode(key)}={percent_encode(stringify(value))}")
    return "&".join(pairs)


def parse_query(query: str) -> Dict[str, str]:
    """Decodes a query string produced by `build_canonical_query`.

    Used to re-derive the signed parameters from a finished URI.
    """
    params: Dict[str, str] = {}
    if not query:
        return params
    for pair in query.split("&"):
        key, _, value = pair.partition("=")
        params[unquote(key)] = unquote(value)
    return params
