#!/usr/bin/env python3
"""CLI helper to POST a test push to the push test endpoint.

Usage:
    PUSH_TEST_API_KEY=... python3 scripts/send_test_push.py --item-id 123 --title "hello world"

Posts to <base-url>/api/push/test, https://jeffharr.is by default. Pass --base-url to target another origin.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from push_cli import main

if __name__ == '__main__':
    sys.exit(main())
