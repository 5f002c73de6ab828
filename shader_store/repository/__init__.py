"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings.
Every function takes an open connection; locking is the caller's job.
"""
from __future__ import annotations
