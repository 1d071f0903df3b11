"""
LTI Python SDK - Message Signing Module

OAuth 1.0 signing and verification of LTI launch messages with HMAC-SHA1 and
RSA-SHA1 signers. This module provides the base-string construction, the
signers, nonce generation and the sign/verify protocol.
"""

from .types import (
    Parameter,
    ParameterSet,
    SigningRequest,
    SignatureMethod,
    ErrorCodes,
    OAUTH_VERSION,
    OAUTH_CONSUMER_KEY,
    OAUTH_NONCE,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD,
    OAUTH_TIMESTAMP,
    OAUTH_VERSION_FIELD,
)

from .utils import (
    percent_encode,
    generate_timestamp,
    normalize_parameters,
)

from .base_string import (
    ParameterCanonicalizer,
    BaseStringBuilder,
    build_base_string,
)

from .signers import (
    OAuthSigner,
    HMACSHA1Signer,
    RSASHA1Signer,
    create_signer,
)

from .nonce import (
    NonceSource,
    get_default_nonce_source,
    generate_nonce,
)

from .protocol import (
    SigningProtocol,
    sign_request,
    verify_request,
)

from .authorization import (
    build_authorization_header,
    parse_authorization_header,
)

from .integration import (
    OAuth1Auth,
    create_signing_session,
    submit_launch,
)

# Public API exports
__all__ = [
    # Types
    'Parameter',
    'ParameterSet',
    'SigningRequest',
    'SignatureMethod',
    'ErrorCodes',
    'OAUTH_VERSION',
    'OAUTH_CONSUMER_KEY',
    'OAUTH_NONCE',
    'OAUTH_SIGNATURE',
    'OAUTH_SIGNATURE_METHOD',
    'OAUTH_TIMESTAMP',
    'OAUTH_VERSION_FIELD',
    # Utilities
    'percent_encode',
    'generate_timestamp',
    'normalize_parameters',
    # Base string
    'ParameterCanonicalizer',
    'BaseStringBuilder',
    'build_base_string',
    # Signers
    'OAuthSigner',
    'HMACSHA1Signer',
    'RSASHA1Signer',
    'create_signer',
    # Nonces
    'NonceSource',
    'get_default_nonce_source',
    'generate_nonce',
    # Protocol
    'SigningProtocol',
    'sign_request',
    'verify_request',
    # Authorization header
    'build_authorization_header',
    'parse_authorization_header',
    # HTTP Integration
    'OAuth1Auth',
    'create_signing_session',
    'submit_launch',
]
