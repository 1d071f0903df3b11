"""
Provider configuration management

Loads the credential and launch settings of an LTI provider from JSON text, a
JSON file, or environment variables, and turns them into signers and
providers.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import ConfigurationError
from ..provider import LTIProvider
from ..signing.signers import OAuthSigner, RSASHA1Signer, create_signer
from ..signing.types import SignatureMethod

ENV_PREFIX = "LTI_"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class ProviderConfig:
    """
    Provider configuration
    
    Attributes:
        consumer_key: Consumer key written when signing and expected when validating
        consumer_secret: Shared secret for HMAC-SHA1
        launch_url: URL launches are signed for
        http_method: HTTP method used when signing
        signature_method: ``HMAC-SHA1`` or ``RSA-SHA1``
        private_key_path: PEM private key file for RSA-SHA1
        log_level: Logging level name
    """
    consumer_key: str = ""
    consumer_secret: str = ""
    launch_url: str = ""
    http_method: str = "POST"
    signature_method: str = SignatureMethod.HMAC_SHA1.value
    private_key_path: Optional[str] = None
    log_level: str = "WARNING"
    
    def __post_init__(self):
        """Validate configuration values"""
        try:
            self.signature_method = SignatureMethod(self.signature_method).value
        except ValueError:
            raise ConfigurationError(
                f"Unsupported signature method '{self.signature_method}'",
                "INVALID_SIGNATURE_METHOD"
            )
        
        if self.signature_method == SignatureMethod.RSA_SHA1.value and not self.private_key_path:
            raise ConfigurationError(
                "RSA-SHA1 requires private_key_path",
                "MISSING_PRIVATE_KEY"
            )
        
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.log_level}'", "INVALID_LOG_LEVEL")
        
        self.http_method = self.http_method.upper()
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ProviderConfig':
        """Build configuration from a dictionary, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                "INVALID_FORMAT"
            )
        return cls(**data)
    
    @classmethod
    def from_json(cls, json_string: str) -> 'ProviderConfig':
        """Load configuration from a JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object", "INVALID_FORMAT")
        
        try:
            return cls.from_dict(data)
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid configuration format: {e}", "INVALID_FORMAT")
    
    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'ProviderConfig':
        """Load configuration from a JSON file"""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string)
    
    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> 'ProviderConfig':
        """
        Load configuration from environment variables.
        
        Each field is read from ``<prefix><FIELD NAME IN UPPER CASE>``, e.g.
        ``LTI_CONSUMER_KEY``; unset variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            value = environ.get(f"{prefix}{f.name.upper()}")
            if value is not None:
                data[f.name] = value
        return cls.from_dict(data)
    
    def to_signer(self) -> OAuthSigner:
        """Build the signer this configuration describes"""
        if self.signature_method == SignatureMethod.RSA_SHA1.value:
            try:
                pem = Path(self.private_key_path).read_bytes()
            except OSError as e:
                raise ConfigurationError(f"Failed to read private key: {e}", "FILE_ERROR")
            return RSASHA1Signer.from_pem(pem)
        
        return create_signer(self.signature_method, consumer_secret=self.consumer_secret)
    
    def to_provider(self) -> LTIProvider:
        """Build a provider for the configured launch URL and credential"""
        return LTIProvider(
            self.consumer_secret,
            self.launch_url,
            consumer_key=self.consumer_key,
            method=self.http_method,
            signer=self.to_signer()
        )
    
    def configure_logging(self) -> None:
        """Apply the configured log level to the SDK loggers"""
        logging.getLogger("lti_sdk").setLevel(self.log_level)
