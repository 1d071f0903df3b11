"""
LTI provider for signing and validating launch messages

An LTIProvider keeps the launch parameters of one message together with the
credential and target URL it is signed for. It can build and sign outgoing
launches, and validate incoming ones against the configured consumer key and
signer.

    provider = LTIProvider("secret", "https://tool.example.com/launch")
    provider.consumer_key = "12345"
    provider.add("resource_link_id", "1086").add("roles", "Instructor")
    signature = provider.sign()

Providers own mutable state and are meant to be used by one thread at a time.
"""

import logging
from typing import Dict, Optional

from .exceptions import ConsumerKeyMismatch, SignatureMismatch
from .signing.protocol import SigningProtocol
from .signing.signers import HMACSHA1Signer, OAuthSigner
from .signing.types import OAUTH_SIGNATURE, ParameterInput, ParameterSet, SigningRequest
from .signing.utils import normalize_parameters

logger = logging.getLogger(__name__)

ROLES_FIELD = "roles"


class LTIProvider:
    """
    Launch message holder with signing and validation
    
    Attributes:
        secret: Shared secret for the default HMAC-SHA1 signer
        url: Launch URL messages are signed for
        consumer_key: Consumer key written when signing and expected when validating
        method: HTTP method used when signing
        signer: Signer used for both directions
    """
    
    def __init__(
        self,
        secret: str,
        url: str,
        consumer_key: str = "",
        method: str = "POST",
        signer: Optional[OAuthSigner] = None,
        protocol: Optional[SigningProtocol] = None
    ):
        self.secret = secret
        self.url = url
        self.consumer_key = consumer_key
        self.method = method
        self.signer = signer or HMACSHA1Signer(secret, "")
        self.protocol = protocol or SigningProtocol()
        self._values = ParameterSet()
    
    def add(self, key: str, value: str) -> 'LTIProvider':
        """Set a launch parameter, replacing any previous value"""
        self._values.set(key, value)
        return self
    
    def get(self, key: str) -> str:
        """Value of a launch parameter, empty string when absent"""
        return self._values.get(key)
    
    def params(self) -> ParameterSet:
        """Snapshot of the stored launch parameters"""
        return self._values.copy()
    
    def set_params(self, params: ParameterInput) -> 'LTIProvider':
        """Replace the stored launch parameters"""
        self._values = normalize_parameters(params)
        return self
    
    def empty(self, key: str) -> bool:
        """True when a parameter is absent or empty"""
        return self._values.is_empty(key)
    
    def set_signer(self, signer: OAuthSigner) -> 'LTIProvider':
        """Use a different signer for signing and validation"""
        self.signer = signer
        return self
    
    def has_role(self, role: str) -> bool:
        """
        Check whether the launch carries a role.
        
        Roles are read from the comma-separated ``roles`` parameter and
        compared as whole tokens.
        """
        roles = [r.strip() for r in self.get(ROLES_FIELD).split(",")]
        return role in roles
    
    def sign(self) -> str:
        """
        Sign the stored launch parameters.
        
        Signing runs on a copy; the signed parameters replace the stored ones
        only when signing succeeds.
        
        Returns:
            str: Base64 signature, also stored as ``oauth_signature``
            
        Raises:
            EncodingError: If a parameter cannot be encoded
            SigningError: If the signer fails
        """
        request = SigningRequest(self.method, self.url, self._values)
        signature = self.protocol.sign(request, self.consumer_key, self.signer)
        self._values = request.parameters
        return signature
    
    def verify(self, form: ParameterInput, method: str) -> bool:
        """
        Validate an incoming launch against the configured URL.
        
        The incoming parameters become the stored parameters, so ``get`` and
        ``has_role`` read from the launch afterwards.
        
        Args:
            form: Parsed launch form parameters
            method: HTTP method the launch arrived with
            
        Returns:
            bool: True when valid
            
        Raises:
            ConsumerKeyMismatch: If the consumer key is wrong
            SignatureMismatch: If the signature does not match
        """
        self._values = normalize_parameters(form)
        return self.protocol.verify(self._values, method, self.url, self.consumer_key, self.signer)
    
    def is_valid(self, form: ParameterInput, method: str) -> bool:
        """
        Validate an incoming launch, reporting rejection as False.
        
        Returns:
            bool: True when valid, False on a consumer key or signature mismatch
        """
        try:
            return self.verify(form, method)
        except (ConsumerKeyMismatch, SignatureMismatch) as e:
            logger.warning(f"Rejected launch for {self.url}: {e}")
            return False
    
    def to_form(self) -> Dict[str, str]:
        """Stored parameters as a flat dict, e.g. for rendering a launch form"""
        return self._values.to_dict()
    
    @property
    def signature(self) -> str:
        return self.get(OAUTH_SIGNATURE)
