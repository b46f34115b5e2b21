"""Defines common Value Objects used across the signing core and façades.

These objects represent the credential pair, parameter sets and the
JSON values returned by the provider.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, NewType, Optional, Union

# === Request Parameters ===

ParameterValue = Optional[Union[str, int, float, bool]]
ParameterSet = Mapping[str, ParameterValue]  # Unordered; None values are omitted when signing

SignedUri = NewType("SignedUri", str)            # '{base_url}/?Signature=...&...'

# === Responses ===

JsonValue = Any
JsonObject = Dict[str, Any]


@dataclass(frozen=True)
class Credential:
    """Access key pair used to sign every request.

    The secret is kept out of `repr` so a credential can be logged safely.
    """
    access_key_id: str
    access_secret: str = field(repr=False)

    def __post_init__(self):
        if not self.access_key_id or not self.access_secret:
            raise ValueError("Credential requires both access_key_id and access_secret.")
