"""
HTTP client integration for message signing

This module connects the signing protocol to the ``requests`` library:
an auth handler that signs outbound requests through the ``Authorization``
header, a session factory, and a helper that posts a signed LTI launch form.
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlsplit, urlunsplit

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from ..exceptions import ServerCommunicationError
from .authorization import build_authorization_header
from .protocol import SigningProtocol
from .signers import OAuthSigner
from .types import ParameterInput, SigningRequest

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def split_signing_url(url: str):
    """
    Split a URL into the URL that is signed and its query parameters.
    
    Args:
        url: Full request URL
        
    Returns:
        tuple: (URL without query or fragment, list of query pairs)
    """
    parts = urlsplit(url)
    base_url = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    return base_url, parse_qsl(parts.query, keep_blank_values=True)


class OAuth1Auth(AuthBase):
    """
    ``requests`` auth handler that signs requests with OAuth 1.0
    
    Query parameters and form-encoded body parameters are signed; the protocol
    fields travel in the ``Authorization`` header.
    """
    
    def __init__(
        self,
        consumer_key: str,
        signer: OAuthSigner,
        protocol: Optional[SigningProtocol] = None,
        realm: Optional[str] = None
    ):
        self.consumer_key = consumer_key
        self.signer = signer
        self.protocol = protocol or SigningProtocol()
        self.realm = realm
    
    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        base_url, parameters = split_signing_url(r.url)
        
        content_type = r.headers.get('Content-Type', '')
        if r.body and content_type.startswith(FORM_CONTENT_TYPE):
            body = r.body.decode('utf-8') if isinstance(r.body, bytes) else r.body
            parameters.extend(parse_qsl(body, keep_blank_values=True))
        
        signing_request = SigningRequest(r.method, base_url, parameters)
        self.protocol.sign(signing_request, self.consumer_key, self.signer)
        
        r.headers['Authorization'] = build_authorization_header(signing_request.parameters, self.realm)
        logger.debug(f"Signed {r.method} request to {base_url}")
        return r


def create_signing_session(
    consumer_key: str,
    signer: OAuthSigner,
    session: Optional[requests.Session] = None
) -> requests.Session:
    """
    Create a requests session that signs every request.
    
    Args:
        consumer_key: Consumer key of the sender
        signer: Signer wrapping the sender's credential
        session: Optional existing session to configure
        
    Returns:
        requests.Session: Session with OAuth1Auth attached
    """
    session = session or requests.Session()
    session.auth = OAuth1Auth(consumer_key, signer)
    return session


def submit_launch(
    url: str,
    parameters: ParameterInput,
    consumer_key: str,
    signer: OAuthSigner,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0
) -> requests.Response:
    """
    Sign an LTI launch form and POST it.
    
    The signature and the protocol fields are carried in the form body.
    
    Args:
        url: Tool launch URL
        parameters: Launch parameters
        consumer_key: Consumer key of the sender
        signer: Signer wrapping the sender's credential
        session: Optional session to send with; a session created here is
            closed before returning
        timeout: Request timeout in seconds
        
    Returns:
        requests.Response: Response from the tool
        
    Raises:
        ServerCommunicationError: If the request cannot be delivered
    """
    signing_request = SigningRequest("POST", url, parameters)
    SigningProtocol().sign(signing_request, consumer_key, signer)
    form = [(key, value) for key, value in signing_request.parameters]
    
    http = session or requests.Session()
    try:
        response = http.post(url, data=form, timeout=timeout)
    except requests.exceptions.Timeout:
        raise ServerCommunicationError(f"Request timeout after {timeout} seconds")
    except requests.exceptions.ConnectionError as e:
        raise ServerCommunicationError(f"Connection error: {e}")
    except requests.exceptions.RequestException as e:
        raise ServerCommunicationError(f"Request failed: {e}")
    finally:
        # Only close sessions created here
        if session is None:
            http.close()
    
    logger.debug(f"Submitted launch to {url}: HTTP {response.status_code}")
    return response
