"""Durable key-value backends for the transcript cache."""

import abc
import asyncio
import hashlib
import json
import os
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiohttp

from ..utils.logging import get_logger
from .config import CacheConfig, NetworkConfig
from .exceptions import CacheStoreError

logger = get_logger("cache_backends")


class DurableStore(abc.ABC):
    """
    Minimal key-value contract for a cache tier that outlives the process.

    Implementations raise ``CacheStoreError`` for any failure; absence of a
    key is not a failure and returns ``None``.
    """

    name = "durable"

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value or None if absent/expired."""

    @abc.abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value under key, expiring after ttl_seconds."""

    @abc.abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key if present."""

    async def close(self) -> None:
        """Release any held resources."""


class FileStore(DurableStore):
    """JSON-file store with per-entry expiry, one file per key."""

    name = "file"

    def __init__(self, cache_dir: str, hash_algorithm: str = "sha256"):
        self.cache_dir = Path(cache_dir)
        self.hash_algorithm = hash_algorithm
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Initialized FileStore at {self.cache_dir}")

    def _get_cache_path(self, key: str) -> Path:
        """Get cache file path for a key."""
        if self.hash_algorithm == "md5":
            digest = hashlib.md5(key.encode()).hexdigest()
        else:
            digest = hashlib.sha256(key.encode()).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def _read(self, key: str) -> Optional[str]:
        cache_path = self._get_cache_path(key)
        if not cache_path.exists():
            return None

        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CacheStoreError(f"Error reading cache {cache_path}: {e}") from e

        expires_at = data.get("expires_at")
        if expires_at is not None and time.time() >= expires_at:
            logger.debug(f"Expired file cache entry for {key}")
            self._remove(cache_path)
            return None

        return data.get("value")

    def _write(self, key: str, value: str, ttl_seconds: int) -> None:
        cache_path = self._get_cache_path(key)
        tmp_path = cache_path.with_suffix(".tmp")
        payload = {
            "key": key,
            "value": value,
            "expires_at": time.time() + ttl_seconds if ttl_seconds else None,
        }
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, ensure_ascii=False)
            os.replace(tmp_path, cache_path)
        except OSError as e:
            raise CacheStoreError(f"Error writing cache {cache_path}: {e}") from e

    def _remove(self, cache_path: Path) -> None:
        try:
            cache_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheStoreError(f"Error deleting cache {cache_path}: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await asyncio.to_thread(self._write, key, value, ttl_seconds)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._remove, self._get_cache_path(key))


class UpstashRedisStore(DurableStore):
    """Redis over the Upstash REST API (one JSON command per POST)."""

    name = "upstash"

    def __init__(self, url: str, token: str, timeout: float = 5.0):
        if not url or not token:
            raise ValueError("Upstash store requires both a REST URL and a token")
        self.url = url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None
        logger.info(f"Initialized UpstashRedisStore at {self.url}")

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"Authorization": f"Bearer {self.token}"}
            )
        return self._session

    async def _command(self, *args: Any) -> Any:
        """Run one Redis command and return its ``result`` field."""
        session = await self._get_session()
        try:
            async with session.post(self.url, json=[str(a) for a in args]) as response:
                body: Dict[str, Any] = await response.json(content_type=None)
                if response.status != 200 or "error" in body:
                    raise CacheStoreError(
                        f"Upstash {args[0]} failed ({response.status}): {body.get('error', 'unknown error')}"
                    )
                return body.get("result")
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise CacheStoreError(f"Upstash {args[0]} failed: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        return await self._command("GET", key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        command: List[Any] = ["SET", key, value]
        if ttl_seconds:
            command.extend(["EX", ttl_seconds])
        await self._command(*command)

    async def delete(self, key: str) -> None:
        await self._command("DEL", key)

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("Closed Upstash HTTP session")


def create_durable_store(
    cache_config: CacheConfig,
    network_config: Optional[NetworkConfig] = None
) -> Optional[DurableStore]:
    """
    Build the durable tier selected by ``CACHE_BACKEND``.

    Returns None for in-process-only caching, which is a valid runtime mode.
    """
    backend = cache_config.backend
    timeout = network_config.cache_timeout if network_config else 5.0
    upstash_ready = bool(cache_config.upstash_url and cache_config.upstash_token)

    if backend in ("auto", "upstash") and upstash_ready:
        return UpstashRedisStore(cache_config.upstash_url, cache_config.upstash_token, timeout=timeout)

    if backend == "upstash":
        logger.warning("Upstash backend requested but not configured; using in-process cache only")
        return None

    if backend == "file":
        return FileStore(cache_config.cache_dir)

    if backend not in ("auto", "memory"):
        logger.warning(f"Unknown cache backend '{backend}'; using in-process cache only")

    logger.info("No durable cache configured; transcripts cached in-process only")
    return None
