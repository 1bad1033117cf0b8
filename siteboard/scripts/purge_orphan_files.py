"""
어디에서도 참조하지 않는 업로드 이미지를 정리한다.

사용법:
    python -m siteboard.scripts.purge_orphan_files [--dry-run]
"""

import argparse
import asyncio
import logging

from siteboard.core.database import AsyncSessionLocal
from siteboard.services.orphan_service import delete_orphans, find_orphans

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(dry_run: bool):
    async with AsyncSessionLocal() as db:
        report = await find_orphans(db)
        stats = report["stats"]
        logger.info(
            f"[orphan] total={stats['total_files']} referenced={stats['referenced_files']} "
            f"orphan={stats['orphan_files']} ({stats['orphan_size']} bytes)"
        )
        paths = [f.path for f in report["orphan_files"]]
        if not paths:
            return
        result = await delete_orphans(db, paths, dry_run=dry_run)
    logger.info(f"[orphan] deleted={result['deleted_count']} skipped={result['skipped_count']} dry_run={dry_run}")
    for err in result["errors"]:
        logger.warning(f"[orphan] {err}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="고아 업로드 파일 정리")
    parser.add_argument("--dry-run", action="store_true", help="삭제하지 않고 대상만 확인")
    args = parser.parse_args()
    asyncio.run(main(args.dry_run))
