#!/usr/bin/env python3
"""Send a manual push test request to the push test endpoint.

Usage:
    PUSH_TEST_API_KEY=... python3 -m push_cli --item-id 123 --title "Saved to Read Later"

Prints the result envelope as JSON: to stdout on success, to stderr with exit
code 1 when the endpoint answers with a non-2xx status.
"""
import re
import sys
import json
from dataclasses import dataclass
from typing import Optional

import push_client
from push_client import (
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    PushTestSuccess,
    UsageError,
)

USAGE = f"""Usage: send-test-push [options]

Options:
  --item-id <id>        Item id to include in payload (required)
  --title <text>        Push alert title
  --subtitle <text>     Push alert subtitle
  --body <text>         Push alert body
  --cover-url <url>     Cover image URL for payload
  --image-url <url>     Alias for --cover-url
  --data-json <json>    Custom data object payload (e.g. '{{"route":"read-later"}}')
  --device-id <id>      Target one registered device id
  --owner-id <id>       Owner id override
  --base-url <url>      API origin (default: {DEFAULT_BASE_URL})
  --help, -h            Show this help

Environment:
  {API_KEY_ENV}     API key sent as x-push-test-key (required)
  {push_client.DEBUG_ENV}       Print request diagnostics to stderr when set to 1
"""


@dataclass(frozen=True)
class PushTestOptions:
    item_id: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body: Optional[str] = None
    device_id: Optional[str] = None
    owner_id: Optional[str] = None
    cover_url: Optional[str] = None
    data_json: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    help: bool = False

    @classmethod
    def from_args(cls, args):
        return cls(
            item_id=args.get('itemId'),
            title=args.get('title'),
            subtitle=args.get('subtitle'),
            body=args.get('body'),
            device_id=args.get('deviceId'),
            owner_id=args.get('ownerId'),
            cover_url=args.get('coverUrl') or args.get('imageUrl'),
            data_json=args.get('dataJson'),
            base_url=args.get('baseUrl') or DEFAULT_BASE_URL,
            help=bool(args.get('help')),
        )


def camel_key(key):
    return re.sub(r'-([a-z])', lambda m: m.group(1).upper(), key)


def parse_args(argv):
    """Turn raw tokens into a dict of camelCase option keys to string values.

    Every flag other than --help/-h takes exactly one value. A value starting
    with '--' counts as missing, so `--title --body x` fails on --title.
    """
    args = {'baseUrl': DEFAULT_BASE_URL}
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in ('--help', '-h'):
            args['help'] = True
            i += 1
            continue
        if not token.startswith('--'):
            raise UsageError(f'Unexpected argument: {token}')
        key = token[2:]
        value = argv[i + 1] if i + 1 < len(argv) else None
        if not value or value.startswith('--'):
            raise UsageError(f'Missing value for --{key}')
        args[camel_key(key)] = value
        i += 2
    return args


def usage():
    print(USAGE)


def report(result):
    """Print the result envelope and return the process exit code."""
    text = json.dumps(push_client.envelope(result), indent=2)
    if isinstance(result, PushTestSuccess):
        print(text)
        return 0
    print(text, file=sys.stderr)
    return 1


def run(argv, session=None):
    # help wins over any other token, even malformed ones
    if '--help' in argv or '-h' in argv:
        usage()
        return 0
    options = PushTestOptions.from_args(parse_args(argv))
    if not options.item_id:
        usage()
        raise UsageError('Missing required --item-id')
    api_key = push_client.require_env(API_KEY_ENV)
    result = push_client.send_test_push(options, api_key, session=session)
    return report(result)


def main(argv=None, session=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        return run(argv, session=session)
    except Exception as e:
        print(str(e) or e.__class__.__name__, file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
