"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/digest_map.py
Thread-safe digest -> paths map used by the parallel hashing stage.
Keys are spread over a fixed number of shards, each guarded by its own lock,
so workers inserting different digests rarely contend.
"""

import threading
from typing import Dict, List, Iterator, Tuple

DEFAULT_SHARD_COUNT = 16


class ConcurrentDigestMap:
    """
    Sharded map from hex digest to the list of paths with that digest.
    Callers never lock: add() and the read helpers synchronize per shard.
    """

    def __init__(self, shard_count: int = DEFAULT_SHARD_COUNT):
        if shard_count <= 0:
            raise ValueError("Shard count must be positive")
        self._shards: List[Dict[str, List[str]]] = [{} for _ in range(shard_count)]
        self._locks = [threading.Lock() for _ in range(shard_count)]

    def _shard_index(self, digest: str) -> int:
        return hash(digest) % len(self._shards)

    def add(self, digest: str, path: str) -> None:
        index = self._shard_index(digest)
        with self._locks[index]:
            self._shards[index].setdefault(digest, []).append(path)

    def get(self, digest: str) -> List[str]:
        index = self._shard_index(digest)
        with self._locks[index]:
            return list(self._shards[index].get(digest, []))

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        """Snapshot of (digest, paths) pairs, shard by shard."""
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                snapshot = [(digest, list(paths)) for digest, paths in shard.items()]
            yield from snapshot

    def to_dict(self) -> Dict[str, List[str]]:
        return dict(self.items())

    def __len__(self) -> int:
        total = 0
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                total += len(shard)
        return total

    def __contains__(self, digest: str) -> bool:
        index = self._shard_index(digest)
        with self._locks[index]:
            return digest in self._shards[index]
