"""Shared constants for the dungeon layout engine."""

from __future__ import annotations

# Tree-index space -> grid space scale factors.
X_STEP = 20
Y_STEP = 12

# Every room footprint has the same size.
ROOM_WIDTH = 14
ROOM_HEIGHT = 8

# Corridors are carved two tiles wide.
CORRIDOR_WIDTH = 2

MAX_RANDOM_SEED = 1_000_000
