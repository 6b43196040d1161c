"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content hashing with pluggable hash algorithms.

Files are read in fixed-size chunks so peak memory does not depend on file size.
Read errors are NOT handled here: they propagate to the caller, which decides
whether a failure is fatal (it never is for the hashing stage).
"""

import hashlib

from diranalyzer.core.interfaces import Hasher, HashAlgorithm

CHUNK_SIZE = 8 * 1024


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    def new(self):
        return hashlib.sha256()


class HasherImpl(Hasher):
    """
    Computes the hex digest of a whole file with the injected algorithm.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_digest(self, path: str) -> str:
        """
        Streams the file through the hash algorithm.

        Raises:
            OSError: if the file cannot be opened or read
        """
        digest = self.algorithm.new()
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.chunk_size), b""):
                digest.update(chunk)
        return digest.hexdigest()
