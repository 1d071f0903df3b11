"""
OAuth 1.0 signing protocol for LTI messages

This module provides the orchestration around the base-string builder and the
signers: filling protocol defaults and attaching the signature when signing,
and gating on the consumer key before recomputing and comparing the signature
when verifying.

Verification always recomputes with the signer configured by the caller.
The ``oauth_signature_method`` advertised by the incoming message is signed
like any other parameter but never selects the algorithm, so a sender cannot
downgrade the check to a weaker or keyless method.
"""

import hmac
import logging
from typing import Optional

from ..exceptions import ConsumerKeyMismatch, EncodingError, SignatureMismatch
from .base_string import BaseStringBuilder
from .nonce import NonceSource, get_default_nonce_source
from .signers import OAuthSigner
from .types import (
    OAUTH_CONSUMER_KEY,
    OAUTH_NONCE,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD,
    OAUTH_TIMESTAMP,
    OAUTH_VERSION,
    OAUTH_VERSION_FIELD,
    ErrorCodes,
    ParameterInput,
    SigningRequest,
    TimestampGenerator,
)
from .utils import generate_timestamp, normalize_parameters

logger = logging.getLogger(__name__)


def _constant_time_equals(left: str, right: str) -> bool:
    try:
        return hmac.compare_digest(left.encode('utf-8'), right.encode('utf-8'))
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Value is not representable as UTF-8: {e}",
            ErrorCodes.ENCODING_FAILED,
            {"original_error": str(e)}
        ) from e


class SigningProtocol:
    """
    Sign and verify OAuth 1.0 parameter sets
    
    Instances hold no per-message state and can be shared between threads as
    long as every call gets its own request or parameter collection.
    """
    
    def __init__(
        self,
        nonce_source: Optional[NonceSource] = None,
        timestamp_generator: Optional[TimestampGenerator] = None,
        builder: Optional[BaseStringBuilder] = None
    ):
        """
        Initialize the protocol.
        
        Args:
            nonce_source: Nonce source (process-wide source if None)
            timestamp_generator: Callable returning the Unix time as a string
            builder: Base string builder
        """
        self.nonce_source = nonce_source or get_default_nonce_source()
        self.timestamp_generator = timestamp_generator or generate_timestamp
        self.builder = builder or BaseStringBuilder()
    
    def sign(self, request: SigningRequest, consumer_key: str, signer: OAuthSigner) -> str:
        """
        Sign a request in place.
        
        Missing or empty ``oauth_version``, ``oauth_timestamp``, ``oauth_nonce``
        and ``oauth_signature_method`` get defaults, ``oauth_consumer_key`` is
        always overwritten, and the signature is stored under
        ``oauth_signature`` once it has been computed.
        
        Args:
            request: Request whose parameters receive the protocol fields
            consumer_key: Consumer key of the sender
            signer: Signer wrapping the sender's credential
            
        Returns:
            str: Base64 signature
            
        Raises:
            EncodingError: If the base string cannot be built
            SigningError: If the signer fails
        """
        parameters = request.parameters
        
        if parameters.is_empty(OAUTH_VERSION_FIELD):
            parameters.set(OAUTH_VERSION_FIELD, OAUTH_VERSION)
        if parameters.is_empty(OAUTH_TIMESTAMP):
            parameters.set(OAUTH_TIMESTAMP, self.timestamp_generator())
        if parameters.is_empty(OAUTH_NONCE):
            parameters.set(OAUTH_NONCE, self.nonce_source.next())
        if parameters.is_empty(OAUTH_SIGNATURE_METHOD):
            parameters.set(OAUTH_SIGNATURE_METHOD, signer.method_name())
        parameters.set(OAUTH_CONSUMER_KEY, consumer_key)
        
        base_string = self.builder.build(request.method, request.url, parameters)
        signature = signer.compute_signature(base_string)
        
        parameters.set(OAUTH_SIGNATURE, signature)
        logger.debug(f"Signed {request.method} request to {request.url} with {signer.method_name()}")
        return signature
    
    def verify(
        self,
        parameters: ParameterInput,
        method: str,
        url: str,
        expected_consumer_key: str,
        signer: OAuthSigner
    ) -> bool:
        """
        Verify the signature carried by incoming parameters.
        
        Args:
            parameters: Incoming parameters including ``oauth_signature``
            method: HTTP method the message arrived with
            url: URL the message was addressed to
            expected_consumer_key: Consumer key configured for the sender
            signer: Signer built from the configured credential
            
        Returns:
            bool: True when the signature matches
            
        Raises:
            ConsumerKeyMismatch: If the consumer key is not the expected one
            SignatureMismatch: If the recomputed signature differs
            EncodingError: If the base string cannot be built or a compared value is not UTF-8
            SigningError: If the signer fails
        """
        incoming = normalize_parameters(parameters)
        
        consumer_key = incoming.get(OAUTH_CONSUMER_KEY)
        if not _constant_time_equals(consumer_key, expected_consumer_key):
            raise ConsumerKeyMismatch(consumer_key, expected_consumer_key)
        
        claimed = incoming.get(OAUTH_SIGNATURE)
        base_string = self.builder.build(method, url, incoming)
        computed = signer.compute_signature(base_string)
        
        if not _constant_time_equals(computed, claimed):
            raise SignatureMismatch(computed, claimed)
        
        logger.debug(f"Verified {method.upper()} request to {url} for consumer key {consumer_key}")
        return True


def sign_request(request: SigningRequest, consumer_key: str, signer: OAuthSigner) -> str:
    """
    Sign a request with a default-configured protocol.
    
    Args:
        request: Request to sign
        consumer_key: Consumer key of the sender
        signer: Signer wrapping the sender's credential
        
    Returns:
        str: Base64 signature
    """
    return SigningProtocol().sign(request, consumer_key, signer)


def verify_request(
    parameters: ParameterInput,
    method: str,
    url: str,
    expected_consumer_key: str,
    signer: OAuthSigner
) -> bool:
    """
    Verify incoming parameters with a default-configured protocol.
    
    Returns:
        bool: True when valid
    """
    return SigningProtocol().verify(parameters, method, url, expected_consumer_key, signer)
