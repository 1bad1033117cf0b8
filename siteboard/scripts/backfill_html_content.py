"""
마크다운 본문이 있는데 html_content 가 비어 있는 콘텐츠를 채운다.

사용법:
    python -m siteboard.scripts.backfill_html_content [--dry-run] [--batch-size 100]
"""

import argparse
import asyncio
import logging

from siteboard.core.database import AsyncSessionLocal
from siteboard.services.content_service import backfill_html_content

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(dry_run: bool, batch_size: int):
    async with AsyncSessionLocal() as db:
        result = await backfill_html_content(db, batch_size=batch_size, dry_run=dry_run)
    mode = "dry-run" if dry_run else "applied"
    logger.info(f"[backfill] {mode}: scanned={result['scanned']} updated={result['updated']}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="html_content 백필")
    parser.add_argument("--dry-run", action="store_true", help="변경 없이 대상 수만 확인")
    parser.add_argument("--batch-size", type=int, default=100)
    args = parser.parse_args()
    asyncio.run(main(args.dry_run, max(1, args.batch_size)))
