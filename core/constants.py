"""core/constants.py — Shared constants used across the codebase.

Centralises the fixed numbers that are structural rather than tunable
(the street's coordinate system, clocks, screen size).  Balance numbers
belong in ``data/tuning.toml`` instead.

Unit System
-----------
The street is one-dimensional.

    Lateral position    %       (0 = left screen edge, 100 = right)
    Scroll offset       u       (world units; one district = 500 u)
    Time (sim)          tick    (1 tick = 1 simulated second)
    Time (display)      ms      (wall-clock, timers and the resolver lock)
    Stats               %       (0..100, clamped)
    Money               $       (whole dollars)

Entities live in lateral-% space.  Anything outside ``VISIBLE_MIN ..
VISIBLE_MAX`` is off-screen and gets retired.
"""

# ── Street geometry ─────────────────────────────────────────────────
DISTRICT_WIDTH: float = 500.0           # scroll units per district
VENUE_BLOCK_WIDTH: float = 100.0        # parallax units per venue block
VENUE_PARALLAX: float = 0.3             # venue strip scroll factor
SCREEN_BLOCKS: int = 10                 # venue blocks visible on screen

PLAYER_MIN_X: float = 5.0
PLAYER_MAX_X: float = 90.0
PLAYER_START_X: float = 50.0
PLAYER_CENTRE_X: float = 50.0           # police push-back target

VISIBLE_MIN: float = -5.0               # pedestrians enter / retire here
VISIBLE_MAX: float = 105.0
VEHICLE_ENTRY_X: float = 110.0
VEHICLE_EXIT_X: float = -15.0

# ── Stat bounds ─────────────────────────────────────────────────────
STAT_MIN: float = 0.0
STAT_MAX: float = 100.0

# ── Clocks ──────────────────────────────────────────────────────────
TICK_MS: int = 1000                     # one simulated second
MOVE_REPEAT_MS: int = 50                # movement repeat while held
NARRATIVE_MS: int = 3000                # narrative line visibility
TRANSACTION_MS: int = 1200              # transaction toast visibility
RESOLVER_LOCK_MS: int = 350             # resolved buttons frozen after change

# ── Window ──────────────────────────────────────────────────────────
SCREEN_W: int = 960
SCREEN_H: int = 540
FPS: int = 60
