"""Request Assembler: turns action parameters into a signed request URI.

Merges the action's parameters over freshly generated common parameters
(key id, timestamp, nonce, signature settings, API version), builds the
canonical query, signs it and produces the final URI. Every call gets its
own timestamp and nonce; nothing is cached between calls.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from aliquery.core.signing.canonical import build_canonical_query
from aliquery.core.signing.encoder import percent_encode
from aliquery.core.signing.signer import (
    SIGNATURE_METHOD,
    SIGNATURE_PARAM,
    SIGNATURE_VERSION,
    sign,
)
from aliquery.domain.interfaces.diagnostics import DiagnosticSink, NullDiagnosticSink
from aliquery.domain.models.common import Credential, ParameterSet, ParameterValue, SignedUri

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
RESPONSE_FORMAT = "JSON"
HTTP_METHOD = "GET"

Clock = Callable[[], datetime]
NonceFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_nonce() -> str:
    return str(uuid.uuid4())


def format_timestamp(moment: datetime) -> str:
    """Formats an instant as `yyyy-MM-ddTHH:mm:ssZ` in UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def common_parameters(
    credential: Credential,
    version: str,
    timestamp: str,
    nonce: str,
    region_id: Optional[str] = None,
) -> Dict[str, ParameterValue]:
    """Returns the authentication and protocol parameters shared by every action."""
    params: Dict[str, ParameterValue] = {
        "AccessKeyId": credential.access_key_id,
        "Timestamp": timestamp,
        "SignatureMethod": SIGNATURE_METHOD,
        "SignatureVersion": SIGNATURE_VERSION,
        "SignatureNonce": nonce,
        "Format": RESPONSE_FORMAT,
        "Version": version,
    }
    if region_id:
        params["RegionId"] = region_id
    return params


def assemble(
    base_url: str,
    credential: Credential,
    version: str,
    action_params: ParameterSet,
    *,
    timestamp: Optional[str] = None,
    nonce: Optional[str] = None,
    region_id: Optional[str] = None,
    method: str = HTTP_METHOD,
) -> SignedUri:
    """Builds the signed URI for one request.

    Args:
        base_url: Endpoint root, e.g. 'http://dysmsapi.aliyuncs.com'.
        credential: Key pair to sign with.
        version: The API version of the service being called.
        action_params: Action-specific parameters. On a key collision with a
            common parameter the action parameter wins.
        timestamp: Pre-formatted timestamp; the current UTC time if None.
        nonce: Signature nonce; a fresh uuid4 if None.
        region_id: Adds a `RegionId` common parameter when given.
        method: HTTP method included in the string to sign.

    Returns:
        `{base_url}/?Signature={encoded signature}&{canonical query}`.
    """
    params = common_parameters(
        credential,
        version,
        timestamp if timestamp is not None else format_timestamp(utc_now()),
        nonce if nonce is not None else new_nonce(),
        region_id,
    )
    params.update(action_params)
    # The signature never signs itself.
    params.pop(SIGNATURE_PARAM, None)

    canonical_query = build_canonical_query(params)
    signature = sign(credential.access_secret, method, canonical_query)
    return SignedUri(f"{base_url.rstrip('/')}/?{SIGNATURE_PARAM}={percent_encode(signature)}&{canonical_query}")


class RequestAssembler:
    """Signs requests for one API family.

    Holds the endpoint, API version, credential and optional region; façades
    for each API family own their own instance.
    """

    def __init__(
        self,
        base_url: str,
        version: str,
        credential: Credential,
        region_id: Optional[str] = None,
        clock: Optional[Clock] = None,
        nonce_factory: Optional[NonceFactory] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        """Initializes the assembler.

        Args:
            base_url: Endpoint root for the API family.
            version: API version string sent with every request.
            credential: Key pair used for signing.
            region_id: Optional `RegionId` common parameter.
            clock: Returns the current instant; defaults to UTC now.
            nonce_factory: Returns a fresh nonce; defaults to uuid4.
            diagnostics: Where to record signed URIs; discarded if None.
        """
        self.base_url = base_url
        self.version = version
        self.credential = credential
        self.region_id = region_id
        self.clock = clock or utc_now
        self.nonce_factory = nonce_factory or new_nonce
        self.diagnostics = diagnostics or NullDiagnosticSink()

    def assemble(self, action_params: ParameterSet) -> SignedUri:
        """Signs `action_params` with a fresh timestamp and nonce."""
        uri = assemble(
            self.base_url,
            self.credential,
            self.version,
            action_params,
            timestamp=format_timestamp(self.clock()),
            nonce=self.nonce_factory(),
            region_id=self.region_id,
        )
        self.diagnostics.record(logging.DEBUG, f"Signed {action_params.get('Action', 'request')}: {uri}")
        return uri

    def __repr__(self) -> str:
        return f"RequestAssembler(base_url={self.base_url!r}, version={self.version!r}, credential={self.credential!r})"
