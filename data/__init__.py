"""data — Shipped TOML tables (``tuning.toml``, ``districts.toml``).

A package only so the tables install next to the code; ``core.tuning``
finds them through ``DATA_DIR``.
"""
