"""
Signature method implementations

This module provides the pluggable signers used by the signing protocol. Each
signer wraps immutable key material captured at construction and exposes two
operations: computing the base64 signature of a base string and reporting its
``oauth_signature_method`` name.
"""

import base64
import hashlib
import hmac
from abc import ABC, abstractmethod
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed

from ..exceptions import SigningError, ValidationError
from .types import ErrorCodes, SignatureMethod
from .utils import percent_encode


class OAuthSigner(ABC):
    """Signature capability consumed by the signing protocol"""
    
    @abstractmethod
    def compute_signature(self, base_string: str) -> str:
        """Return the base64 signature of base_string"""
        ...
    
    @abstractmethod
    def method_name(self) -> str:
        """Return the oauth_signature_method value for this signer"""
        ...


class HMACSHA1Signer(OAuthSigner):
    """
    HMAC-SHA1 signer for shared-secret credentials.
    
    The key is ``encode(client_secret) & encode(token_secret)``; LTI launches
    use an empty token secret.
    """
    
    def __init__(self, client_secret: str, token_secret: str = ""):
        self._key = f"{percent_encode(client_secret)}&{percent_encode(token_secret)}".encode('utf-8')
    
    def compute_signature(self, base_string: str) -> str:
        mac = hmac.new(self._key, base_string.encode('utf-8'), hashlib.sha1)
        return base64.b64encode(mac.digest()).decode('ascii')
    
    def method_name(self) -> str:
        return SignatureMethod.HMAC_SHA1.value
    
    def __repr__(self) -> str:
        return "HMACSHA1Signer(key=<redacted>)"


class RSASHA1Signer(OAuthSigner):
    """
    RSA-SHA1 signer for private-key credentials.
    
    Signs the SHA-1 digest of the base string with PKCS#1 v1.5 padding.
    """
    
    def __init__(self, private_key: rsa.RSAPrivateKey):
        """
        Initialize the signer.
        
        Args:
            private_key: Loaded RSA private key
            
        Raises:
            SigningError: If the key is not an RSA private key
        """
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise SigningError(
                "RSA-SHA1 requires an RSA private key",
                ErrorCodes.INVALID_PRIVATE_KEY,
                {"key_type": type(private_key).__name__}
            )
        self._private_key = private_key
    
    @classmethod
    def from_pem(cls, data: Union[str, bytes], password: Optional[bytes] = None) -> 'RSASHA1Signer':
        """
        Create a signer from a PEM encoded private key (PKCS#1 or PKCS#8).
        
        Args:
            data: PEM text
            password: Optional key password
            
        Returns:
            RSASHA1Signer: Signer wrapping the loaded key
            
        Raises:
            SigningError: If the key cannot be loaded or is not an RSA key
        """
        if isinstance(data, str):
            data = data.encode('ascii')
        
        try:
            private_key = serialization.load_pem_private_key(data, password=password)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(
                f"Failed to load private key: {e}",
                ErrorCodes.INVALID_PRIVATE_KEY,
                {"original_error": str(e)}
            ) from e
        
        return cls(private_key)
    
    def public_key(self) -> rsa.RSAPublicKey:
        """Public half of the wrapped key"""
        return self._private_key.public_key()
    
    def compute_signature(self, base_string: str) -> str:
        """
        Sign the base string.
        
        Raises:
            SigningError: If the cryptographic operation fails
        """
        digest = hashlib.sha1(base_string.encode('utf-8')).digest()
        
        try:
            signature = self._private_key.sign(
                digest,
                padding.PKCS1v15(),
                Prehashed(hashes.SHA1())
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(
                f"RSA-SHA1 signing failed: {e}",
                ErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            ) from e
        
        return base64.b64encode(signature).decode('ascii')
    
    def method_name(self) -> str:
        return SignatureMethod.RSA_SHA1.value
    
    def __repr__(self) -> str:
        return f"RSASHA1Signer(key_size={self._private_key.key_size})"


def create_signer(
    method: Union[str, SignatureMethod],
    *,
    consumer_secret: str = "",
    token_secret: str = "",
    private_key: Optional[rsa.RSAPrivateKey] = None
) -> OAuthSigner:
    """
    Create a signer for a signature method name.
    
    Args:
        method: ``HMAC-SHA1`` or ``RSA-SHA1``
        consumer_secret: Shared secret for HMAC-SHA1
        token_secret: Token secret for HMAC-SHA1 (empty for LTI)
        private_key: Private key for RSA-SHA1
        
    Returns:
        OAuthSigner: Configured signer
        
    Raises:
        ValidationError: If the method is unknown or its credential is missing
    """
    try:
        signature_method = SignatureMethod(method)
    except ValueError:
        raise ValidationError(
            f"Unsupported signature method: {method}",
            ErrorCodes.INVALID_SIGNATURE_METHOD,
            {"method": str(method)}
        )
    
    if signature_method == SignatureMethod.HMAC_SHA1:
        return HMACSHA1Signer(consumer_secret, token_secret)
    
    if private_key is None:
        raise ValidationError(
            "RSA-SHA1 requires a private key",
            ErrorCodes.INVALID_SIGNATURE_METHOD,
            {"method": signature_method.value}
        )
    return RSASHA1Signer(private_key)
