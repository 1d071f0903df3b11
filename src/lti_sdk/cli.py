"""
Command-line interface for LTI Python SDK
Builds base strings, signs and verifies launch parameters, and issues nonces
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple
from urllib.parse import urlencode

from . import __version__
from .config import ProviderConfig
from .exceptions import LTISDKError, VerificationError
from .signing.authorization import build_authorization_header
from .signing.base_string import build_base_string
from .signing.nonce import NonceSource
from .signing.protocol import SigningProtocol
from .signing.signers import HMACSHA1Signer, OAuthSigner, RSASHA1Signer
from .signing.types import SigningRequest


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='lti-sign',
        description='LTI SDK command-line interface for signing and verifying launch messages'
    )
    
    parser.add_argument(
        '--version',
        action='version',
        version=f'LTI Python SDK {__version__}'
    )
    parser.add_argument('--config', help='JSON provider configuration file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    base_parser = subparsers.add_parser('base-string', help='Print the signature base string')
    add_message_arguments(base_parser)
    
    sign_parser = subparsers.add_parser('sign', help='Sign launch parameters')
    add_message_arguments(sign_parser)
    add_credential_arguments(sign_parser)
    sign_parser.add_argument(
        '--format',
        choices=['form', 'json', 'header'],
        default='form',
        help='Output format for the signed parameters (default: form)'
    )
    
    verify_parser = subparsers.add_parser('verify', help='Verify signed launch parameters')
    add_message_arguments(verify_parser)
    add_credential_arguments(verify_parser)
    
    nonce_parser = subparsers.add_parser('nonce', help='Generate nonces')
    nonce_parser.add_argument(
        '--count',
        type=int,
        default=1,
        help='Number of nonces to generate (default: 1)'
    )
    
    return parser


def add_message_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments describing the message: method, URL and parameters."""
    parser.add_argument('--method', help='HTTP method (default: POST)')
    parser.add_argument('--url', help='Launch URL')
    parser.add_argument(
        '-p', '--param',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Message parameter, may be repeated'
    )
    parser.add_argument('--params-file', help='JSON object or list of [key, value] pairs')


def add_credential_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments describing the credential."""
    parser.add_argument('--consumer-key', help='Consumer key')
    credential = parser.add_mutually_exclusive_group()
    credential.add_argument('--secret', help='Shared secret for HMAC-SHA1')
    credential.add_argument('--rsa-key', help='PEM private key file for RSA-SHA1')


def parse_parameters(args) -> List[Tuple[str, str]]:
    """Collect parameters from --params-file and --param, in that order."""
    pairs: List[Tuple[str, str]] = []
    
    if args.params_file:
        with open(args.params_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, dict):
            pairs.extend((str(k), str(v)) for k, v in data.items())
        else:
            pairs.extend((str(k), str(v)) for k, v in data)
    
    for item in args.param:
        key, sep, value = item.partition('=')
        if not sep:
            raise ValueError(f"Parameter must be KEY=VALUE: {item}")
        pairs.append((key, value))
    
    return pairs


def resolve_message(args, config: Optional[ProviderConfig]) -> Tuple[str, str]:
    """Method and URL from the arguments, falling back to the configuration."""
    method = args.method or (config.http_method if config else 'POST')
    url = args.url or (config.launch_url if config else '')
    if not url:
        raise ValueError("A launch URL is required (--url or launch_url in --config)")
    return method, url


def resolve_credential(args, config: Optional[ProviderConfig]) -> Tuple[str, OAuthSigner]:
    """Consumer key and signer from the arguments, falling back to the configuration."""
    consumer_key = args.consumer_key or (config.consumer_key if config else '')
    
    if args.rsa_key:
        with open(args.rsa_key, 'rb') as f:
            signer: OAuthSigner = RSASHA1Signer.from_pem(f.read())
    elif args.secret is not None:
        signer = HMACSHA1Signer(args.secret, "")
    elif config:
        signer = config.to_signer()
    else:
        raise ValueError("A credential is required (--secret, --rsa-key or --config)")
    
    return consumer_key, signer


def handle_base_string_command(args, config: Optional[ProviderConfig]) -> int:
    """Handle base string command."""
    method, url = resolve_message(args, config)
    print(build_base_string(method, url, parse_parameters(args)))
    return 0


def handle_sign_command(args, config: Optional[ProviderConfig]) -> int:
    """Handle sign command."""
    method, url = resolve_message(args, config)
    consumer_key, signer = resolve_credential(args, config)
    
    request = SigningRequest(method, url, parse_parameters(args))
    SigningProtocol().sign(request, consumer_key, signer)
    pairs = [(key, value) for key, value in request.parameters]
    
    if args.format == 'json':
        print(json.dumps(dict(pairs), indent=2, sort_keys=True))
    elif args.format == 'header':
        print(build_authorization_header(request.parameters))
    else:
        print(urlencode(pairs))
    return 0


def handle_verify_command(args, config: Optional[ProviderConfig]) -> int:
    """Handle verify command."""
    method, url = resolve_message(args, config)
    consumer_key, signer = resolve_credential(args, config)
    
    try:
        SigningProtocol().verify(parse_parameters(args), method, url, consumer_key, signer)
    except VerificationError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    
    print("✓ Signature is valid")
    return 0


def handle_nonce_command(args) -> int:
    """Handle nonce command."""
    if args.count < 1 or args.count > 1000:
        print("Error: Count must be between 1 and 1000", file=sys.stderr)
        return 1
    
    source = NonceSource()
    for _ in range(args.count):
        print(source.next())
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI
    
    Args:
        argv: Command line arguments (None to use sys.argv)
        
    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]
    
    parser = create_parser()
    args = parser.parse_args(argv)
    
    try:
        config = ProviderConfig.from_file(args.config) if args.config else None
        
        logging.basicConfig(
            level='DEBUG' if args.verbose else 'WARNING',
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )
        if config and not args.verbose:
            config.configure_logging()
        
        if args.command == 'base-string':
            return handle_base_string_command(args, config)
        elif args.command == 'sign':
            return handle_sign_command(args, config)
        elif args.command == 'verify':
            return handle_verify_command(args, config)
        elif args.command == 'nonce':
            return handle_nonce_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1
        
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except (LTISDKError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
