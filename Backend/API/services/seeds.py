import logging, threading, time
from dataclasses import dataclass
from typing import Optional
from services.rng import commit, generate_server_seed
import config

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SeedEpoch:
    server_seed: str
    commit: str
    commit_time: int

    @classmethod
    def create(cls, server_seed: Optional[str] = None) -> "SeedEpoch":
        seed = server_seed or generate_server_seed()
        return cls(server_seed=seed, commit=commit(seed), commit_time=now_ms())

    def public(self) -> dict:
        return {"commit": self.commit, "commit_time": self.commit_time}


class SeedRegistry:
    """
    Holds the house's active seed.

    Rounds read one immutable snapshot through current(); rotate() swaps in a
    new epoch under a lock, so a round never sees two different secrets.
    """

    def __init__(self, server_seed: Optional[str] = None):
        self._lock = threading.Lock()
        self._epoch = SeedEpoch.create(server_seed)
        logger.info("seed epoch started, commit=%s", self._epoch.commit)

    def current(self) -> SeedEpoch:
        return self._epoch

    def is_active(self, commit_hex: str) -> bool:
        return self._epoch.commit == commit_hex

    def rotate(self) -> tuple[SeedEpoch, SeedEpoch]:
        with self._lock:
            retired = self._epoch
            self._epoch = SeedEpoch.create()
            active = self._epoch
        logger.info("seed rotated, retired=%s active=%s", retired.commit, active.commit)
        return retired, active

    def retire(self, epoch: SeedEpoch) -> bool:
        """Rotate only if `epoch` is still the active one. Returns whether it rotated."""
        with self._lock:
            if self._epoch is not epoch:
                return False
            self._epoch = SeedEpoch.create()
            active = self._epoch
        logger.info("seed retired after reveal, retired=%s active=%s", epoch.commit, active.commit)
        return True


registry = SeedRegistry(config.SERVER_SEED)


def get_registry() -> SeedRegistry:
    return registry
