"""
Shared fixtures for diranalyzer tests.
Creates isolated temporary directory trees with controlled file contents.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import os
import sys

# Add src/ to sys.path so 'diranalyzer' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def sample_tree(temp_dir) -> Dict[str, Path]:
    """
    Creates the reference tree:
    - a/x.bin   10 bytes "0123456789"
    - a/y.bin   10 bytes, same content as a/x.bin
    - b/z.bin   10 bytes "9876543210"
    - a/b/w.bin  5 bytes
    """
    paths = {"root": temp_dir}

    (temp_dir / "a" / "b").mkdir(parents=True)
    (temp_dir / "b").mkdir()

    paths["x"] = temp_dir / "a" / "x.bin"
    paths["y"] = temp_dir / "a" / "y.bin"
    paths["z"] = temp_dir / "b" / "z.bin"
    paths["w"] = temp_dir / "a" / "b" / "w.bin"

    paths["x"].write_bytes(b"0123456789")
    paths["y"].write_bytes(b"0123456789")
    paths["z"].write_bytes(b"9876543210")
    paths["w"].write_bytes(b"abcde")

    return paths


@pytest.fixture
def undecodable_tree(temp_dir) -> Dict[str, Path]:
    """
    A file whose name is not valid UTF-8 (b"bad\\xff.bin") next to an identical
    good.bin. Python sees the bad name as a str with a lone surrogate.
    """
    if sys.platform == "win32":
        pytest.skip("byte file names are POSIX only")
    raw_path = os.path.join(os.fsencode(str(temp_dir)), b"bad\xff.bin")
    try:
        with open(raw_path, "wb") as f:
            f.write(b"0123456789")
    except OSError:
        pytest.skip("filesystem rejects file names that are not valid UTF-8")
    (temp_dir / "good.bin").write_bytes(b"0123456789")
    return {"root": temp_dir, "bad": Path(os.fsdecode(raw_path)), "good": temp_dir / "good.bin"}
