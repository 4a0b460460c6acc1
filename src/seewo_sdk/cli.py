"""
Command-line interface for Seewo Python SDK
Provides request signing dry runs and the live streaming operations
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from .version import __version__
from .config import load_client_config
from .exceptions import SeewoSDKError
from .http_client import SeewoClient
from .signing import SeewoRequest, SigningOptions, HttpMethod
from .recording import (
    OtherDeviceV1StreamingStartRequest,
    OtherDeviceV1StreamingStopRequest,
    StreamingVideosRequest,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='seewo-cli',
        description='Seewo open API command-line interface'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Seewo Python SDK {__version__}'
    )

    parser.add_argument(
        '--config',
        help='JSON configuration file (default: read SEEWO_* environment variables)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_sign_parser(subparsers)
    setup_streaming_parser(subparsers)

    return parser


def setup_sign_parser(subparsers):
    """Setup signing dry-run subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Print the signed x-sw-* headers without sending')
    sign_parser.add_argument('method', type=str.upper, choices=[m.value for m in HttpMethod], help='HTTP method')
    sign_parser.add_argument('uri', help='URI template, e.g. /live/resource/v1/videos')
    sign_parser.add_argument('--var', action='append', default=[], metavar='NAME=VALUE', help='URI template variable')
    sign_parser.add_argument('--query', action='append', default=[], metavar='NAME=VALUE', help='Query parameter')
    sign_parser.add_argument('--header', action='append', default=[], metavar='NAME=VALUE', help='Custom header')
    sign_parser.add_argument('--body', help='Raw JSON request body')
    sign_parser.add_argument('--timestamp', type=int, help='Fixed millisecond timestamp to sign')


def setup_streaming_parser(subparsers):
    """Setup live streaming subcommands."""
    streaming_parser = subparsers.add_parser('streaming', help='Live streaming operations')
    streaming_subparsers = streaming_parser.add_subparsers(dest='streaming_command', help='Streaming operations')

    start_parser = streaming_subparsers.add_parser('start', help='Start streaming on a device')
    start_parser.add_argument('--device-sn', required=True, help='Device serial number')
    start_parser.add_argument('--stream-url', help='Custom push URL')
    start_parser.add_argument('--biz-id', help='Business id used to group recordings')

    stop_parser = streaming_subparsers.add_parser('stop', help='Stop streaming on a device')
    stop_parser.add_argument('--device-sn', required=True, help='Device serial number')

    videos_parser = streaming_subparsers.add_parser('videos', help='List recorded videos')
    videos_parser.add_argument('--biz-id', required=True, help='Business id')


def parse_pairs(items: List[str], option: str) -> Dict[str, str]:
    """Parse repeated NAME=VALUE options into an ordered dict."""
    pairs = {}
    for item in items:
        if '=' not in item:
            raise ValueError(f"{option} expects NAME=VALUE, got {item!r}")
        key, value = item.split('=', 1)
        pairs[key] = value
    return pairs


def create_client(args) -> SeewoClient:
    """Create a client from --config or the environment."""
    return SeewoClient(load_client_config(args.config))


def handle_sign_command(args) -> int:
    """Handle signing dry run."""
    request = SeewoRequest(
        method=HttpMethod(args.method),
        uri=args.uri,
        vars=parse_pairs(args.var, '--var'),
        queries=parse_pairs(args.query, '--query'),
        headers=parse_pairs(args.header, '--header'),
        body=args.body.encode('utf-8') if args.body is not None else None
    )

    with create_client(args) as client:
        signed = client.sign_only(request, SigningOptions(timestamp=args.timestamp))
        url = client.build_url(request)

    print(json.dumps({'url': url, 'headers': signed.headers}, indent=2, ensure_ascii=False))
    return 0


def handle_streaming_command(args) -> int:
    """Handle live streaming commands."""
    if args.streaming_command == 'start':
        request = OtherDeviceV1StreamingStartRequest(
            device_sn=args.device_sn,
            stream_url=args.stream_url,
            biz_id=args.biz_id
        )
    elif args.streaming_command == 'stop':
        request = OtherDeviceV1StreamingStopRequest(device_sn=args.device_sn)
    elif args.streaming_command == 'videos':
        request = StreamingVideosRequest(biz_id=args.biz_id)
    else:
        print("Error: No streaming subcommand specified", file=sys.stderr)
        return 1

    with create_client(args) as client:
        response = request.invoke(client)

    output = {
        'request_id': response.request_id,
        'message': response.message,
        'body': response.body.to_dict(),
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))
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

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        if args.command == 'sign':
            return handle_sign_command(args)
        elif args.command == 'streaming':
            return handle_streaming_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except SeewoSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
