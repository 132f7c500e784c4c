#!/usr/bin/env python3
"""
Seed script to upload sample images to a Cloudflare Images account.

Credentials come from the flags or from CLOUDFLARE_ACCOUNT_ID /
CLOUDFLARE_API_TOKEN.

Run:
    poetry run python seed/seed_images.py \
      --images-dir ./samples \
      --id-prefix seed- \
      --limit 4
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from aws_lambda_powertools import Logger

from cfimages import FilePayload, ImagesClient, Success
from cfimages.core.utils.constants import (
    ENV_CLOUDFLARE_ACCOUNT_ID,
    ENV_CLOUDFLARE_API_TOKEN,
    ENV_CLOUDFLARE_TIMEOUT,
    EXTENSION_MEDIA_TYPE_MAP,
)

logger = Logger(service="seed")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed images into Cloudflare Images")

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
        "--images-dir",
        type=Path,
        required=True,
        help="Directory containing the images to upload",
    )
    parser.add_argument(
        "--id-prefix",
        default="seed-",
        help="Prefix for the custom image IDs",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=4,
        help="Number of images to seed",
    )

    args = parser.parse_args()
    if not args.account_id or not args.api_token:
        parser.error("account ID and API token are required")

    return args


def find_images(images_dir: Path, limit: int) -> list[Path]:
    return sorted(
        path
        for path in images_dir.iterdir()
        if path.is_file() and path.suffix.lower().lstrip(".") in EXTENSION_MEDIA_TYPE_MAP
    )[:limit]


async def seed_images(args: argparse.Namespace) -> int:
    failures = 0
    timeout = float(os.getenv(ENV_CLOUDFLARE_TIMEOUT, "60"))

    async with ImagesClient(args.account_id, args.api_token, timeout=timeout) as client:
        logger.info("Starting seeding process", extra={"images_url": client.images_url})

        for image_path in find_images(args.images_dir, args.limit):
            payload = FilePayload(image_path)
            result = await client.upload(
                payload,
                image_id=f"{args.id_prefix}{image_path.stem}",
                metadata={"source": "seed"},
            )

            if isinstance(result, Success):
                logger.info(
                    "Seeded image",
                    extra={"image": image_path.name, "image_id": result.data.id},
                )
            else:
                failures += 1
                logger.error(
                    "Failed to seed image",
                    extra={"image": image_path.name, "error": result.message},
                )

        logger.info("Seeding completed", extra={"failures": failures})

        listing = await client.list(page=1, per_page=args.limit)
        if isinstance(listing, Success):
            logger.info(
                "List images response",
                extra={
                    "total_count": listing.data.total_count,
                    "ids": [image.id for image in listing.data.images],
                },
            )

    return failures


def main() -> None:
    try:
        args = parse_args()
        failures = asyncio.run(seed_images(args))
    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)

    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
