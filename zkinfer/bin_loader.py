"""Saving and loading Python objects as binary files."""

from __future__ import annotations

import os
import pickle
from typing import Any


def save_to_file(obj: Any, filename: str | os.PathLike[str]) -> None:
    """Serialize ``obj`` into ``filename``, replacing any existing content."""
    with open(filename, "wb") as handle:
        pickle.dump(obj, handle, protocol=pickle.HIGHEST_PROTOCOL)


def load_from_file(filename: str | os.PathLike[str]) -> Any:
    """Read back an object written by :func:`save_to_file`. Only load trusted files."""
    with open(filename, "rb") as handle:
        return pickle.load(handle)