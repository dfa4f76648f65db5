import os
import sys
import json
from dataclasses import dataclass
from typing import Any, Optional

import requests

DEFAULT_BASE_URL = 'https://jeffharr.is'
PUSH_TEST_PATH = '/api/push/test'
API_KEY_ENV = 'PUSH_TEST_API_KEY'
DEBUG_ENV = 'PUSH_TEST_DEBUG'


class PushTestError(Exception):
    """Base class for errors that stop a push test run."""


class UsageError(PushTestError):
    pass


class ConfigError(PushTestError):
    pass


@dataclass(frozen=True)
class PushTestSuccess:
    status: int
    endpoint: str
    response: Any
    ok = True


@dataclass(frozen=True)
class PushTestFailure:
    status: int
    endpoint: str
    response: Any
    ok = False


def envelope(result):
    return {
        'ok': result.ok,
        'status': result.status,
        'endpoint': result.endpoint,
        'response': result.response,
    }


def debug_enabled():
    return os.environ.get(DEBUG_ENV, '').strip().lower() in ('1', 'true', 'yes', 'on')


def debug(*parts):
    # stdout is reserved for the success envelope
    if debug_enabled():
        print(*parts, file=sys.stderr)


def require_env(name):
    value = os.environ.get(name)
    if not value or not value.strip():
        raise ConfigError(f'Missing required env var: {name}')
    return value.strip()


def build_endpoint(base_url):
    return str(base_url).rstrip('/') + PUSH_TEST_PATH


def parse_json_object(value, flag_name):
    """Parse a flag value that must hold a JSON object. Returns None for no value."""
    if not value:
        return None
    try:
        parsed = json.loads(value)
    except ValueError:
        raise UsageError(f'Invalid JSON for {flag_name}')
    if not isinstance(parsed, dict):
        raise UsageError(f'{flag_name} must be a JSON object')
    return parsed


def build_payload(options):
    """Build the request body. Optional fields are left out entirely when unset."""
    payload = {'itemId': options.item_id}
    if options.title:
        payload['title'] = options.title
    if options.subtitle:
        payload['subtitle'] = options.subtitle
    if options.body:
        payload['body'] = options.body
    if options.device_id:
        payload['deviceId'] = options.device_id
    if options.owner_id:
        payload['ownerId'] = options.owner_id
    if options.cover_url:
        payload['coverURL'] = options.cover_url
    data = parse_json_object(options.data_json, '--data-json')
    if data is not None:
        payload['data'] = data
    return payload


def decode_body(text):
    # Upstream errors are often plain text or HTML; keep the raw body then.
    try:
        return json.loads(text)
    except Exception:
        return text


def send_test_push(options, api_key, session: Optional[requests.Session] = None):
    """POST one test push and return a PushTestSuccess or PushTestFailure.

    Transport failures propagate to the caller.
    """
    endpoint = build_endpoint(options.base_url)
    payload = build_payload(options)
    headers = {
        'content-type': 'application/json',
        'x-push-test-key': api_key,
    }
    debug('send_test_push: endpoint=', endpoint)
    debug('send_test_push: api key len=', len(api_key), ' payload keys=', sorted(payload))

    owns_session = session is None
    if owns_session:
        session = requests.Session()
    try:
        r = session.post(endpoint, json=payload, headers=headers)
        text = r.text
    finally:
        if owns_session:
            session.close()

    debug('send_test_push: status=', r.status_code, ' body len=', len(text))
    body = decode_body(text)
    if 200 <= r.status_code < 300:
        return PushTestSuccess(r.status_code, endpoint, body)
    return PushTestFailure(r.status_code, endpoint, body)
