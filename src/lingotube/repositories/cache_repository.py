"""Repository for transcript caching over a durable tier and an in-process tier."""

import asyncio
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from ..core.cache_backends import DurableStore
from ..models import Transcript
from ..utils.logging import get_logger

logger = get_logger("cache_repository")

DEFAULT_TTL_SECONDS = 7 * 24 * 3600


@dataclass
class CacheEntry:
    """Represents a cache entry with metadata."""
    key: str
    value: str
    created_at: datetime = field(default_factory=datetime.now)
    expires_at: Optional[datetime] = None
    access_count: int = 0
    last_accessed: datetime = field(default_factory=datetime.now)

    @property
    def is_expired(self) -> bool:
        """Check if entry is expired."""
        if self.expires_at is None:
            return False
        return datetime.now() >= self.expires_at

    @property
    def ttl_seconds(self) -> Optional[float]:
        """Get time to live in seconds."""
        if self.expires_at is None:
            return None
        return max(0, (self.expires_at - datetime.now()).total_seconds())


class MemoryTranscriptStore:
    """
    Process-local tier: size-bounded LRU with per-entry expiry.

    Values are whole serialized transcripts, so every mutation is a single
    insert, replace or delete on the underlying dict.
    """

    def __init__(self, max_entries: int = 500):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._evictions = 0

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired:
            logger.debug(f"Expired memory cache entry: {key}")
            del self._entries[key]
            return None
        entry.access_count += 1
        entry.last_accessed = datetime.now()
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: str, expires_at: Optional[datetime] = None) -> None:
        self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug(f"Evicted from memory cache: {evicted_key}")

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def stats(self) -> Dict[str, Any]:
        return {
            "memory_entries": len(self._entries),
            "memory_max_entries": self.max_entries,
            "memory_evictions": self._evictions,
            "total_accesses": sum(e.access_count for e in self._entries.values()),
        }


class CacheRepository:
    """
    Transcript cache keyed by video ID.

    Reads try the durable tier first and fall back to the in-process tier on
    any error, absence or undecodable value. Writes always land in the
    in-process tier; the durable write is best-effort. Both tiers expire an
    entry ``ttl_seconds`` after the transcript was created, so the in-process
    tier never serves what the durable tier has already expired.
    """

    def __init__(
        self,
        durable_store: Optional[DurableStore] = None,
        memory_store: Optional[MemoryTranscriptStore] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key_prefix: str = "transcript:",
        timeout: float = 5.0
    ):
        self.durable_store = durable_store
        self.memory_store = memory_store or MemoryTranscriptStore()
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix
        self.timeout = timeout
        self._stats = {"hits": 0, "misses": 0, "durable_errors": 0, "writes": 0}
        tier = durable_store.name if durable_store else "none"
        logger.info(f"Initialized CacheRepository (durable tier: {tier}, ttl={ttl_seconds}s)")

    def cache_key(self, video_id: str) -> str:
        return f"{self.key_prefix}{video_id}"

    def _expiry_for(self, transcript: Transcript) -> datetime:
        return transcript.created_at + timedelta(seconds=self.ttl_seconds)

    def _decode(self, raw: str, tier: str, video_id: str) -> Optional[Transcript]:
        try:
            return Transcript.from_json(raw)
        except (TypeError, ValueError, KeyError) as e:
            logger.error(f"Discarding undecodable {tier} cache entry for {video_id}: {e}")
            return None

    async def _durable_get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.wait_for(self.durable_store.get(key), timeout=self.timeout)
        except Exception as e:
            self._stats["durable_errors"] += 1
            logger.warning(f"Durable cache read failed for {key}, using in-process tier: {e}")
            return None

    async def get(self, video_id: str) -> Optional[Transcript]:
        """
        Get a previously stored transcript.

        Returns:
            The complete stored Transcript, or None when neither tier has it
        """
        key = self.cache_key(video_id)

        if self.durable_store is not None:
            raw = await self._durable_get(key)
            if raw:
                transcript = self._decode(raw, "durable", video_id)
                if transcript is not None:
                    self.memory_store.set(key, raw, self._expiry_for(transcript))
                    self._stats["hits"] += 1
                    logger.debug(f"Durable cache hit for {key}")
                    return transcript

        raw = self.memory_store.get(key)
        if raw:
            transcript = self._decode(raw, "memory", video_id)
            if transcript is not None:
                self._stats["hits"] += 1
                logger.debug(f"Memory cache hit for {key}")
                return transcript
            self.memory_store.delete(key)

        self._stats["misses"] += 1
        logger.debug(f"Cache miss for {key}")
        return None

    async def put(self, video_id: str, transcript: Transcript) -> bool:
        """
        Store a transcript.

        Returns:
            False only if the transcript could not be serialized; durable-tier
            failures are logged and do not affect the result
        """
        key = self.cache_key(video_id)
        try:
            payload = transcript.to_json()
        except (TypeError, ValueError) as e:
            logger.error(f"Cannot serialize transcript for {video_id}: {e}")
            return False

        self.memory_store.set(key, payload, self._expiry_for(transcript))
        self._stats["writes"] += 1

        if self.durable_store is not None:
            try:
                await asyncio.wait_for(
                    self.durable_store.set(key, payload, self.ttl_seconds),
                    timeout=self.timeout
                )
                logger.debug(f"Stored in durable cache: {key}")
            except Exception as e:
                self._stats["durable_errors"] += 1
                logger.warning(f"Durable cache write failed for {key}; kept in-process only: {e}")

        logger.info(f"Cached transcript for {video_id} ({transcript.total_segments} segments)")
        return True

    async def delete(self, video_id: str) -> None:
        """Remove a transcript from both tiers."""
        key = self.cache_key(video_id)
        self.memory_store.delete(key)
        if self.durable_store is not None:
            try:
                await asyncio.wait_for(self.durable_store.delete(key), timeout=self.timeout)
            except Exception as e:
                self._stats["durable_errors"] += 1
                logger.warning(f"Durable cache delete failed for {key}: {e}")
        logger.info(f"Cleared cached transcript for {video_id}")

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        stats = dict(self._stats)
        stats.update(self.memory_store.stats())
        stats["durable_tier"] = self.durable_store.name if self.durable_store else None
        return stats

    async def cleanup(self) -> None:
        """Cleanup cache repository."""
        if self.durable_store is not None:
            await self.durable_store.close()
        logger.info("CacheRepository cleanup completed")
