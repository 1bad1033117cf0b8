"""
간단한 Redis 기반 레이트 리밋 유틸리티
"""

from __future__ import annotations

import logging
import time

from fastapi import HTTPException, status

from siteboard.core.config import settings
from siteboard.core.database import get_redis_client

logger = logging.getLogger(__name__)


async def check_rate_limit(bucket: str, max_requests: int, window_seconds: int = 60) -> tuple[bool, int]:
    """
    고정 윈도우 방식 레이트리밋.
    반환: (허용 여부, 남은 횟수)
    """
    if not settings.RATE_LIMIT_ENABLED:
        return (True, max_requests)

    now = int(time.time())
    window = now // window_seconds
    key = f"rl:{bucket}:{window}"
    try:
        client = get_redis_client()
        count = await client.incr(key)
        if count == 1:
            await client.expire(key, window_seconds)
        remaining = max(0, max_requests - count)
        return (count <= max_requests, remaining)
    except Exception as e:
        # Redis 장애 시 리밋을 우회(가용성 우선)
        logger.warning(f"[rate_limit] redis unavailable, bypass: {e}")
        return (True, max_requests)


async def enforce_rate_limit(bucket: str, max_requests: int, window_seconds: int = 60) -> None:
    """한도 초과 시 429"""
    allowed, _ = await check_rate_limit(bucket, max_requests, window_seconds)
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="요청이 너무 많습니다. 잠시 후 다시 시도해주세요.",
        )
