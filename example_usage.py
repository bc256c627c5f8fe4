#!/usr/bin/env python3
"""
Basic usage examples for the EdgeGrid Python client library.

This script signs requests with credentials from an .edgerc file and,
when asked to, sends them to the API host.
"""

import argparse
import logging
import sys

from edgegrid_client import (
    EdgeGridClient,
    EdgeGridClientError,
    EdgercCredentialProvider,
    SigningContext
)


def main():
    """Run basic usage examples."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--edgerc", default="~/.edgerc")
    parser.add_argument("--section", default="default")
    parser.add_argument("--send", action="store_true", help="dispatch the signed requests")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    print("=== EdgeGrid Python Client Basic Usage Examples ===\n")

    try:
        client = EdgeGridClient(EdgercCredentialProvider(args.edgerc, args.section))
    except EdgeGridClientError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    print(f"1. Client created for: {client.base_url}\n")

    with client:
        # Example 1: pinned timestamp and nonce give a reproducible header
        print("2. Signing with a pinned context...")
        context = SigningContext(
            timestamp="20240101T00:00:00+0000",
            nonce="00000000-0000-4000-8000-000000000000"
        )
        signed = client.auth({"path": "/identity-management/v3/user-profile"}, context=context)
        print(f"   URL: {signed.url}")
        print(f"   Authorization: {signed.authorization}\n")

        # Example 2: query parameters and signed headers, in the order given;
        # signed headers are added to the sent headers when missing there
        print("3. Signing a request with query and signed headers...")
        signed = client.auth({
            "path": "/papi/v1/groups",
            "query": {"contractId": "ctr_1-ABCDE", "groupId": "grp_12345"},
            "headers_to_sign": {"X-Request-Id": "example-1"},
        })
        print(f"   URL: {signed.url}")
        print(f"   Authorization: {signed.authorization}\n")

        # Example 3: JSON body on POST is serialized and covered by the content hash
        print("4. Signing a POST with a JSON body...")
        signed = client.auth({
            "method": "POST",
            "path": "/ccu/v3/invalidate/url/staging",
            "body": {"objects": ["https://www.example.com/index.html"]},
        })
        print(f"   Body: {signed.body}")
        print(f"   Authorization: {signed.authorization}\n")

        if not args.send:
            print("Run with --send to dispatch requests to the API host.")
            return

        print("5. Sending an authenticated GET request...")
        try:
            response = client.get("/identity-management/v3/user-profile")
            print(f"   Status: {response.status_code}")
            print(f"   Response: {response.text[:200]}")
        except EdgeGridClientError as e:
            print(f"   Request error: {e}")


if __name__ == "__main__":
    main()
