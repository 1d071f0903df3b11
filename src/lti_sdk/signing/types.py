"""
Type definitions for OAuth 1.0 message signing

This module provides the data classes shared by the base-string builder, the
signers and the signing protocol: parameters, the owned parameter set, the
per-call signing request and the protocol field names.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import ValidationError


# Protocol constants
OAUTH_VERSION = "1.0"

OAUTH_CONSUMER_KEY = "oauth_consumer_key"
OAUTH_NONCE = "oauth_nonce"
OAUTH_SIGNATURE = "oauth_signature"
OAUTH_SIGNATURE_METHOD = "oauth_signature_method"
OAUTH_TIMESTAMP = "oauth_timestamp"
OAUTH_VERSION_FIELD = "oauth_version"
OAUTH_PREFIX = "oauth_"


class SignatureMethod(str, Enum):
    """Signature methods supported by the signers"""
    HMAC_SHA1 = "HMAC-SHA1"
    RSA_SHA1 = "RSA-SHA1"


class Parameter(NamedTuple):
    """A single (key, value) request parameter"""
    key: str
    value: str


class ParameterSet:
    """
    Ordered sequence of request parameters.
    
    Keys may repeat. Lookups return the first value for a key, ``set`` collapses
    every occurrence of a key into a single entry.
    """
    
    def __init__(self, parameters: Optional[Iterable[Tuple[str, str]]] = None):
        self._items: List[Parameter] = [Parameter(k, v) for k, v in (parameters or [])]
    
    def get(self, key: str, default: str = "") -> str:
        """Return the first value stored under key, or default"""
        for item in self._items:
            if item.key == key:
                return item.value
        return default
    
    def get_all(self, key: str) -> List[str]:
        """Return every value stored under key in insertion order"""
        return [item.value for item in self._items if item.key == key]
    
    def set(self, key: str, value: str) -> 'ParameterSet':
        """
        Store a single value under key.
        
        The entry keeps the position of the first existing occurrence; further
        occurrences are dropped. New keys are appended.
        """
        replaced = False
        items = []
        for item in self._items:
            if item.key != key:
                items.append(item)
            elif not replaced:
                items.append(Parameter(key, value))
                replaced = True
        if not replaced:
            items.append(Parameter(key, value))
        self._items = items
        return self
    
    def add(self, key: str, value: str) -> 'ParameterSet':
        """Append a value without touching existing entries for key"""
        self._items.append(Parameter(key, value))
        return self
    
    def remove(self, key: str) -> 'ParameterSet':
        """Drop every entry stored under key"""
        self._items = [item for item in self._items if item.key != key]
        return self
    
    def is_empty(self, key: str) -> bool:
        """True when key is absent or its first value is the empty string"""
        return self.get(key) == ""
    
    def without(self, key: str) -> 'ParameterSet':
        """Return a new set with every entry for key left out"""
        return ParameterSet(item for item in self._items if item.key != key)
    
    def copy(self) -> 'ParameterSet':
        return ParameterSet(self._items)
    
    def keys(self) -> List[str]:
        return [item.key for item in self._items]
    
    def to_dict(self) -> Dict[str, str]:
        """First value per key"""
        result: Dict[str, str] = {}
        for item in self._items:
            result.setdefault(item.key, item.value)
        return result
    
    def __iter__(self) -> Iterator[Parameter]:
        return iter(list(self._items))
    
    def __len__(self) -> int:
        return len(self._items)
    
    def __contains__(self, key: object) -> bool:
        return any(item.key == key for item in self._items)
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._items == other._items
    
    def __repr__(self) -> str:
        return f"ParameterSet({self._items!r})"


# Accepted shapes for incoming parameters
ParameterInput = Union[
    ParameterSet,
    Mapping[str, str],
    Mapping[str, Sequence[str]],
    Iterable[Tuple[str, str]],
]


@dataclass
class SigningRequest:
    """
    Message to be signed
    
    Attributes:
        method: HTTP method, upper-cased on construction
        url: Target URL, used verbatim
        parameters: Parameters owned by this request
    """
    method: str
    url: str
    parameters: ParameterInput = field(default_factory=ParameterSet)
    
    def __post_init__(self):
        """Normalize the method and take ownership of the parameters"""
        from .utils import normalize_parameters
        
        if not self.method:
            raise ValidationError("Request method cannot be empty", "INVALID_REQUEST")
        
        if not self.url:
            raise ValidationError("Request URL cannot be empty", "INVALID_REQUEST")
        
        self.method = self.method.upper()
        self.parameters = normalize_parameters(self.parameters)


class ErrorCodes:
    """Standard error codes for signing and verification"""
    
    # Encoding errors
    ENCODING_FAILED = "ENCODING_FAILED"
    
    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"
    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    
    # Verification errors
    CONSUMER_KEY_MISMATCH = "CONSUMER_KEY_MISMATCH"
    SIGNATURE_MISMATCH = "SIGNATURE_MISMATCH"
    
    # Input errors
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_SIGNATURE_METHOD = "INVALID_SIGNATURE_METHOD"
    INVALID_HEADER = "INVALID_HEADER"


# Type aliases for convenience
NonceGenerator = Callable[[], str]
TimestampGenerator = Callable[[], str]
