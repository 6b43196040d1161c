"""
Tests for streaming SHA-256 content hashing.
"""
import hashlib
import pytest
from diranalyzer.core.hasher import HasherImpl, Sha256AlgorithmImpl, CHUNK_SIZE


class TestHasher:

    def test_known_digest(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"hello")
        assert HasherImpl().compute_digest(str(path)) == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824")

    def test_empty_file(self, temp_dir):
        path = temp_dir / "empty"
        path.write_bytes(b"")
        assert HasherImpl().compute_digest(str(path)) == hashlib.sha256(b"").hexdigest()

    def test_multi_chunk_file_matches_whole_digest(self, temp_dir):
        """Content spanning several chunks hashes the same as one update()."""
        data = bytes(range(256)) * ((CHUNK_SIZE * 3) // 256 + 7)
        path = temp_dir / "big.bin"
        path.write_bytes(data)
        assert HasherImpl().compute_digest(str(path)) == hashlib.sha256(data).hexdigest()

    def test_small_chunk_size(self, temp_dir):
        path = temp_dir / "f"
        path.write_bytes(b"abcdefghij")
        assert HasherImpl(chunk_size=3).compute_digest(str(path)) == hashlib.sha256(b"abcdefghij").hexdigest()

    def test_same_prefix_different_tail(self, temp_dir):
        a = temp_dir / "a"
        b = temp_dir / "b"
        a.write_bytes(b"x" * CHUNK_SIZE + b"1")
        b.write_bytes(b"x" * CHUNK_SIZE + b"2")
        hasher = HasherImpl()
        assert hasher.compute_digest(str(a)) != hasher.compute_digest(str(b))

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(OSError):
            HasherImpl().compute_digest(str(temp_dir / "missing"))

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            HasherImpl(chunk_size=0)

    def test_algorithm_name(self):
        assert Sha256AlgorithmImpl().name == "sha256"
