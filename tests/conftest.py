import os

import pytest


@pytest.fixture
def make_executable(tmp_path):
    """Write a small ``sh`` script into ``tmp_path/bin`` and return its path."""

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def factory(name: str, body: str = "exit 0", *, directory=None, mode: int = 0o755):
        target_dir = directory or bin_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        os.chmod(path, mode)
        return path

    factory.bin_dir = bin_dir
    return factory
