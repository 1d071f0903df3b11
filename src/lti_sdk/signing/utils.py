"""
Utility functions for message signing

This module provides the percent-encoding shared by every signing step,
timestamp generation and normalization of the parameter shapes that callers
hand to the SDK.
"""

import time
from typing import Mapping, Union
from urllib.parse import quote_plus

from ..exceptions import EncodingError
from .types import ErrorCodes, ParameterInput, ParameterSet


def percent_encode(value: Union[str, bytes]) -> str:
    """
    Percent-encode a value with HTML form escaping.
    
    Every UTF-8 byte outside ``A-Z a-z 0-9 - _ . ~`` becomes ``%XX`` with
    uppercase hex, and a space becomes ``+``.
    
    Args:
        value: String or bytes to encode
        
    Returns:
        str: Encoded value
        
    Raises:
        EncodingError: If the value is not text or cannot be encoded as UTF-8
    """
    if not isinstance(value, (str, bytes)):
        raise EncodingError(
            f"Cannot encode value of type {type(value).__name__}",
            ErrorCodes.ENCODING_FAILED,
            {"value_type": type(value).__name__}
        )
    
    try:
        return quote_plus(value, safe='')
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Value is not representable as UTF-8: {e}",
            ErrorCodes.ENCODING_FAILED,
            {"original_error": str(e)}
        ) from e


def generate_timestamp() -> str:
    """
    Generate current Unix timestamp.
    
    Returns:
        str: Seconds since epoch as a decimal string
    """
    return str(int(time.time()))


def normalize_parameters(parameters: ParameterInput) -> ParameterSet:
    """
    Copy caller-supplied parameters into a new ParameterSet.
    
    Mappings whose values are lists (``parse_qs`` output, multi-value form
    objects) are flattened to the first value per key. Iterables of pairs are
    kept verbatim, duplicate keys included.
    
    Args:
        parameters: ParameterSet, mapping or iterable of (key, value) pairs
        
    Returns:
        ParameterSet: Independent copy owned by the caller of this function
        
    Raises:
        EncodingError: If a key or value is not a string
    """
    if parameters is None:
        return ParameterSet()
    
    if isinstance(parameters, ParameterSet):
        return parameters.copy()
    
    if isinstance(parameters, Mapping):
        pairs = []
        for key, value in parameters.items():
            if isinstance(value, (list, tuple)):
                value = value[0] if value else ""
            pairs.append((key, value))
    else:
        pairs = list(parameters)
    
    result = ParameterSet()
    for key, value in pairs:
        if not isinstance(key, str) or not isinstance(value, str):
            raise EncodingError(
                f"Parameter {key!r} must map a string to a string",
                ErrorCodes.ENCODING_FAILED,
                {"key": repr(key), "value_type": type(value).__name__}
            )
        result.add(key, value)
    
    return result
