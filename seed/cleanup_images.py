#!/usr/bin/env python3
"""
Cleanup script to remove seeded images from a Cloudflare Images account.

Run:
    poetry run python seed/cleanup_images.py --id-prefix seed-
"""

import argparse
import asyncio
import os
import sys

from aws_lambda_powertools import Logger

from cfimages import ImagesClient
from cfimages.core.utils.constants import ENV_CLOUDFLARE_ACCOUNT_ID, ENV_CLOUDFLARE_API_TOKEN

logger = Logger(service="cleanup")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete seeded Cloudflare images")

    parser.add_argument(
        "--account-id",
        default=os.getenv(ENV_CLOUDFLARE_ACCOUNT_ID),
        help=f"Cloudflare account ID (default: ${ENV_CLOUDFLARE_ACCOUNT_ID})",
    )
    parser.add_argument(
        "--api-token",
        default=os.getenv(ENV_CLOUDFLARE_API_TOKEN),
        help=f"API token with Images:Write (default: ${ENV_CLOUDFLARE_API_TOKEN})",
    )
    parser.add_argument(
        "--id-prefix",
        required=True,
        help="Only images whose ID starts with this prefix are deleted",
    )

    args = parser.parse_args()
    if not args.account_id or not args.api_token:
        parser.error("account ID and API token are required")

    return args


async def cleanup_images(args: argparse.Namespace) -> int:
    async with ImagesClient(args.account_id, args.api_token) as client:
        logger.info(
            "Starting cleanup process",
            extra={"images_url": client.images_url, "id_prefix": args.id_prefix},
        )

        # Collect first: deleting while paging would shift later pages
        targets = [
            image.id async for image in client.iter_images(per_page=100)
            if image.id.startswith(args.id_prefix)
        ]

        if not targets:
            logger.info("No images found for cleanup")
            return 0

        failures = 0
        for image_id in targets:
            result = await client.delete(image_id)
            if result.is_success:
                logger.info("Deleted image", extra={"image_id": image_id})
            else:
                failures += 1
                logger.error(
                    "Failed to delete image",
                    extra={"image_id": image_id, "error": result.message},
                )

        logger.info(
            "Cleanup completed",
            extra={"deleted": len(targets) - failures, "failures": failures},
        )
        return failures


def main() -> None:
    try:
        args = parse_args()
        failures = asyncio.run(cleanup_images(args))
    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)

    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
