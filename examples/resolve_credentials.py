#!/usr/bin/env python3
"""Resolve Cloudant credentials and list databases with whichever one worked.

Usage:
    export CLOUDANT_APIKEY=... CLOUDANT_HOST=acct.cloudantnosqldb.appdomain.cloud
    export CLOUDANT_USERNAME=... CLOUDANT_PASSWORD=...
    python examples/resolve_credentials.py
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from cloudant_auth import AsyncCredentialResolver, resolve_account_config

logger = logging.getLogger("resolve_credentials")


async def main(config_path: str | None) -> int:
    config = resolve_account_config(config_path)

    async with AsyncCredentialResolver(logger=logger) as resolver:
        creds = await resolver.resolve_all(config)

    headers = creds.bearer_headers() or creds.cookie_headers() or creds.basic_auth_headers()
    if not headers or not creds.base_url:
        logger.error("No usable credential could be derived")
        return 1

    if creds.bearer is not None:
        logger.info("IAM token expired: %s", creds.bearer.is_expired(leeway=60))

    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.get(f"{creds.base_url}/_all_dbs", headers=headers)
    print(response.status_code, response.text)
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", help="Path to a Cloudant service-credentials JSON file")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    raise SystemExit(asyncio.run(main(args.config)))
