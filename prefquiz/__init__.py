"""Prefectural capital quiz trainer.

Multiple-choice drills over the 47 prefectural capitals, with per-user
correctness history and a retry mode for previously missed questions.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
