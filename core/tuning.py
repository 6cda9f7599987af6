"""core/tuning.py — Data-driven tuning constants and static tables.

Every tunable street number (decay rates, odds, cool-downs, prices,
the funding ladder) lives in ``data/tuning.toml`` and is loaded once
at startup.  Any system reads a value with::

    from core.tuning import get as _tun
    decay = _tun("needs", "hunger_decay", 1.5)

The default passed to ``get`` is the shipped value, so the simulation
behaves identically with no TOML loaded (tests, headless runs).

Static world tables (``data/districts.toml``) are different: they are
read strictly with ``read_table`` and a missing file is an error.

Hot-reload: call ``reload()`` to re-read the tuning file.  In-game, F5.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    try:
        import tomli as tomllib            # pip install tomli
    except ModuleNotFoundError:
        tomllib = None                     # type: ignore[assignment]


DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml``.
    """
    global _data, _path

    path = DATA_DIR / "tuning.toml" if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        _data = {}
        return

    if tomllib is None:
        print("[TUNING] No TOML parser available (need Python 3.11+ or `pip install tomli`)")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def clear() -> None:
    """Forget every loaded value so ``get`` returns defaults."""
    global _data
    _data = {}


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"funding.stages.seed"`` looks up ``[funding.stages.seed]``.

    >>> get("needs", "hunger_decay", 1.5)
    1.5
    """
    node = _walk(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _walk(section_path)
    if isinstance(node, dict):
        return dict(node)
    return {}


def read_table(name: str, directory: str | Path | None = None) -> dict:
    """Strictly load ``<directory>/<name>.toml`` (default ``data/``).

    Unlike ``load`` this never falls back: static tables have no
    in-code defaults, so a missing file or parser raises.
    """
    path = Path(directory or DATA_DIR) / f"{name}.toml"
    if tomllib is None:
        raise RuntimeError("reading TOML tables needs Python 3.11+ or `pip install tomli`")
    if not path.exists():
        raise FileNotFoundError(f"static table {path} is missing")
    with open(path, "rb") as f:
        return tomllib.load(f)


def _walk(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
