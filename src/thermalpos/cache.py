"""
Remember the last serial port that opened, so later CLI runs can leave
out --port.
"""

import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

CACHE_TTL_SECONDS = 24 * 60 * 60

CONFIG_DIR = Path.home() / ".config" / "thermalpos"
CACHE_FILE = CONFIG_DIR / "last_port"


@dataclass
class CachedPort:
    """A port and line speed that worked."""

    port: str
    baudrate: int
    last_used: float

    @classmethod
    def from_dict(cls, data: dict) -> "CachedPort":
        return cls(
            port=str(data["port"]),
            baudrate=int(data["baudrate"]),
            last_used=float(data["last_used"]),
        )

    def expired(self, ttl_seconds: float) -> bool:
        return time.time() - self.last_used > ttl_seconds


def load_cached_port(ttl_seconds: float = CACHE_TTL_SECONDS) -> Optional[CachedPort]:
    """Cached port, or None when there is none, it is stale or unreadable."""
    try:
        cached = CachedPort.from_dict(json.loads(CACHE_FILE.read_text()))
    except FileNotFoundError:
        return None
    except (ValueError, KeyError, TypeError):
        # Corrupt entry
        return None
    return None if cached.expired(ttl_seconds) else cached


def save_port(port: str, baudrate: int) -> CachedPort:
    """Record a port that was just opened."""
    cached = CachedPort(port=port, baudrate=baudrate, last_used=time.time())
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CACHE_FILE.write_text(json.dumps(asdict(cached)))
    return cached


def clear_cache() -> bool:
    """Forget the cached port. False if nothing was cached."""
    try:
        CACHE_FILE.unlink()
    except FileNotFoundError:
        return False
    return True
