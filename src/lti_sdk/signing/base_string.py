"""
Signature base string construction

This module builds the exact text that is signed: the upper-cased method, the
encoded target URL and the encoded, sorted parameters, joined by ``&``. The
output must match other OAuth 1.0 / LTI implementations byte for byte.
"""

import logging
from typing import List

from .types import OAUTH_SIGNATURE, ParameterInput, ParameterSet
from .utils import normalize_parameters, percent_encode

logger = logging.getLogger(__name__)

# A space encodes to "+" and then to "%2B" on the second pass, while
# consumers expect the double-encoded space.
COMPAT_SEARCH = "%2B"
COMPAT_REPLACEMENT = "%2520"


class ParameterCanonicalizer:
    """
    Encode and order a parameter set into ``key=value`` strings
    """
    
    def canonicalize(self, parameters: ParameterSet) -> List[str]:
        """
        Build the ordered ``key=value`` strings for a parameter set.
        
        Keys and values are encoded individually, then sorted by encoded key
        and, for equal keys, by encoded value. Comparison is on the encoded
        ASCII text, so it is byte-wise and locale independent.
        
        Args:
            parameters: Parameters with ``oauth_signature`` already removed
            
        Returns:
            list: Sorted ``key=value`` strings
            
        Raises:
            EncodingError: If a key or value cannot be encoded
        """
        encoded = [(percent_encode(key), percent_encode(value)) for key, value in parameters]
        encoded.sort()
        return [f"{key}={value}" for key, value in encoded]
    
    def join(self, parameters: ParameterSet) -> str:
        """Canonical parameter string, pairs joined by ``&``"""
        return "&".join(self.canonicalize(parameters))


class BaseStringBuilder:
    """
    Builder for the OAuth signature base string
    """
    
    def __init__(self, canonicalizer: ParameterCanonicalizer = None):
        self.canonicalizer = canonicalizer or ParameterCanonicalizer()
    
    def build(self, method: str, url: str, parameters: ParameterInput) -> str:
        """
        Build the base string for a message.
        
        Args:
            method: HTTP method, upper-cased here
            url: Target URL, encoded as one token without re-normalization
            parameters: Message parameters; ``oauth_signature`` is ignored
            
        Returns:
            str: Signature base string
            
        Raises:
            EncodingError: If any input cannot be encoded
        """
        signed_parameters = normalize_parameters(parameters).without(OAUTH_SIGNATURE)
        
        parts = [
            percent_encode(method.upper()),
            percent_encode(url),
            percent_encode(self.canonicalizer.join(signed_parameters)),
        ]
        base_string = "&".join(parts)
        
        # Applied once, to the composed string only
        base_string = base_string.replace(COMPAT_SEARCH, COMPAT_REPLACEMENT)
        
        logger.debug(f"Built base string for {method.upper()} {url}: {base_string}")
        return base_string


def build_base_string(method: str, url: str, parameters: ParameterInput) -> str:
    """
    Build the signature base string with the default builder.
    
    Args:
        method: HTTP method
        url: Target URL
        parameters: Message parameters
        
    Returns:
        str: Signature base string
    """
    return BaseStringBuilder().build(method, url, parameters)
