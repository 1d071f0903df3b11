"""
LTI Python SDK
OAuth 1.0 message signing and validation for LTI launches
"""

from .version import __version__
from .exceptions import (
    LTISDKError,
    EncodingError,
    SigningError,
    VerificationError,
    ConsumerKeyMismatch,
    SignatureMismatch,
    ValidationError,
    ConfigurationError,
    ServerCommunicationError,
)
from .signing import (
    # Types
    Parameter,
    ParameterSet,
    SigningRequest,
    SignatureMethod,
    # Base string
    ParameterCanonicalizer,
    BaseStringBuilder,
    build_base_string,
    percent_encode,
    # Signers
    OAuthSigner,
    HMACSHA1Signer,
    RSASHA1Signer,
    create_signer,
    # Nonces
    NonceSource,
    generate_nonce,
    # Protocol
    SigningProtocol,
    sign_request,
    verify_request,
    # Authorization header
    build_authorization_header,
    parse_authorization_header,
    # HTTP Integration
    OAuth1Auth,
    create_signing_session,
    submit_launch,
)
from .provider import LTIProvider
from .config import ProviderConfig


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'LTISDKError',
    'EncodingError',
    'SigningError',
    'VerificationError',
    'ConsumerKeyMismatch',
    'SignatureMismatch',
    'ValidationError',
    'ConfigurationError',
    'ServerCommunicationError',
    # Signing - Types
    'Parameter',
    'ParameterSet',
    'SigningRequest',
    'SignatureMethod',
    # Signing - Base string
    'ParameterCanonicalizer',
    'BaseStringBuilder',
    'build_base_string',
    'percent_encode',
    # Signing - Signers
    'OAuthSigner',
    'HMACSHA1Signer',
    'RSASHA1Signer',
    'create_signer',
    # Signing - Nonces
    'NonceSource',
    'generate_nonce',
    # Signing - Protocol
    'SigningProtocol',
    'sign_request',
    'verify_request',
    # Signing - Authorization header
    'build_authorization_header',
    'parse_authorization_header',
    # Signing - HTTP Integration
    'OAuth1Auth',
    'create_signing_session',
    'submit_launch',
    # Provider
    'LTIProvider',
    # Configuration
    'ProviderConfig',
]
