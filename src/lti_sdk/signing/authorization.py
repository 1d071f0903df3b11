"""
OAuth ``Authorization`` header support

Builds the ``Authorization: OAuth ...`` header carrying the protocol fields of
a signed message and parses such headers back into parameters.
"""

import re
from typing import Optional
from urllib.parse import unquote_plus

from ..exceptions import ValidationError
from .types import OAUTH_PREFIX, ErrorCodes, ParameterInput, ParameterSet
from .utils import normalize_parameters, percent_encode

AUTH_SCHEME = "OAuth"

_HEADER_PAIR = re.compile(r'^\s*([^=\s]+)\s*=\s*"([^"]*)"\s*$')


def build_authorization_header(parameters: ParameterInput, realm: Optional[str] = None) -> str:
    """
    Build an ``Authorization`` header value from signed parameters.
    
    Only ``oauth_*`` parameters are included, sorted by key.
    
    Args:
        parameters: Signed parameters
        realm: Optional realm, emitted first and unencoded
        
    Returns:
        str: Header value such as ``OAuth oauth_consumer_key="key", ...``
    """
    oauth_parameters = sorted(
        (key, value) for key, value in normalize_parameters(parameters)
        if key.startswith(OAUTH_PREFIX)
    )
    
    pairs = []
    if realm is not None:
        pairs.append(f'realm="{realm}"')
    for key, value in oauth_parameters:
        pairs.append(f'{percent_encode(key)}="{percent_encode(value)}"')
    
    return f"{AUTH_SCHEME} " + ", ".join(pairs)


def parse_authorization_header(header: str) -> ParameterSet:
    """
    Parse an ``Authorization: OAuth ...`` header value.
    
    Args:
        header: Header value
        
    Returns:
        ParameterSet: Decoded parameters, ``realm`` excluded
        
    Raises:
        ValidationError: If the scheme is not OAuth or a pair is malformed
    """
    if not header:
        raise ValidationError("Authorization header is empty", ErrorCodes.INVALID_HEADER)
    
    scheme, _, rest = header.strip().partition(" ")
    if scheme.lower() != AUTH_SCHEME.lower():
        raise ValidationError(
            f"Unsupported authorization scheme: {scheme}",
            ErrorCodes.INVALID_HEADER,
            {"scheme": scheme}
        )
    
    parameters = ParameterSet()
    for chunk in rest.split(","):
        if not chunk.strip():
            continue
        match = _HEADER_PAIR.match(chunk)
        if not match:
            raise ValidationError(
                f"Malformed authorization parameter: {chunk.strip()}",
                ErrorCodes.INVALID_HEADER,
                {"parameter": chunk.strip()}
            )
        key, value = unquote_plus(match.group(1)), unquote_plus(match.group(2))
        if key == "realm":
            continue
        parameters.add(key, value)
    
    return parameters
