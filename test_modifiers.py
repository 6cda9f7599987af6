"""test_modifiers.py — District tables, effective modifiers, weighted draw.

Run:  python test_modifiers.py
"""
from __future__ import annotations
import random

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import Archetype, District, ModifierKey, TimeOfDay
from core.tuning import DATA_DIR, tomllib
from logic.modifiers import (
    base_modifier, density, district_name, effective_modifier, spawn_table,
    tables, time_modifiers, venues, weighted_draw,
)
from testkit import FixedRandom, check, main


def test_tables_complete():
    t = tables()
    check(len(t.order) == 9, "nine districts on the belt", f"got {len(t.order)}")
    check(set(t.order) == set(District), "belt order covers every district")
    for d in District:
        row = t.modifiers[d]
        check(set(row) == set(ModifierKey), f"{d.value}: full modifier row")
        check(all(0.0 <= v <= 1.0 for v in row.values()),
              f"{d.value}: biases within 0..1")
        check(len(spawn_table(d)) > 0, f"{d.value}: spawn table present")
        check(len(venues(d)) > 0, f"{d.value}: venue strip present")
        check(0.0 < density(d) <= 1.0, f"{d.value}: density within 0..1")
    check(district_name(District.CROSS) == "Kings Cross", "display name")


def test_time_table():
    check(not time_modifiers(TimeOfDay.DAWN).service_available, "dawn: services closed")
    check(time_modifiers(TimeOfDay.DAY).service_available, "day: services open")
    check(time_modifiers(TimeOfDay.NIGHT).crime_multiplier == 1.0,
          "night: full crime multiplier")


def test_effective_modifier():
    cross = District.CROSS
    theft_day = effective_modifier(cross, ModifierKey.THEFT, TimeOfDay.DAY)
    check(abs(theft_day - 0.25) < 1e-9, "crime key scales by crime_multiplier",
          f"got {theft_day}")
    theft_night = effective_modifier(cross, ModifierKey.THEFT, TimeOfDay.NIGHT)
    check(abs(theft_night - 0.5) < 1e-9, "night crime is the base value")

    pitch_day = effective_modifier(cross, ModifierKey.PITCH, TimeOfDay.DAY)
    pitch_night = effective_modifier(cross, ModifierKey.PITCH, TimeOfDay.NIGHT)
    check(abs(pitch_day - 0.4) < 1e-9, "service key untouched while open")
    check(abs(pitch_night - 0.12) < 1e-9, "service key drops to 30% when closed",
          f"got {pitch_night}")

    food = effective_modifier(cross, ModifierKey.FOOD, TimeOfDay.NIGHT)
    check(food == base_modifier(cross, ModifierKey.FOOD), "plain key is the base value")

    by_name = effective_modifier(cross, "drugs", TimeOfDay.DUSK)
    by_enum = effective_modifier(cross, ModifierKey.DRUGS, TimeOfDay.DUSK)
    check(by_name == by_enum, "string keys resolve to the enum")

    try:
        effective_modifier(cross, "parking", TimeOfDay.DAY)
    except KeyError:
        check(True, "unknown key raises KeyError")
    else:
        check(False, "unknown key raises KeyError", "no exception")

    for d in District:
        for t in TimeOfDay:
            for k in ModifierKey:
                v = effective_modifier(d, k, t)
                if not 0.0 <= v <= 1.0:
                    check(False, "effective modifiers stay within 0..1",
                          f"{d.value}/{k.value}/{t.value} = {v}")
    check(True, "effective modifiers stay within 0..1")


def test_weighted_draw():
    check(weighted_draw([], random.Random(1)) is None, "empty table → None")

    single = [(Archetype.VC, 0.3)]
    picks = {weighted_draw(single, random.Random(seed)) for seed in range(50)}
    check(picks == {Archetype.VC}, "single entry is always returned")

    pair = [("a", 1.0), ("b", 1.0)]
    check(weighted_draw(pair, FixedRandom(0.25)) == "a", "low roll → first entry")
    check(weighted_draw(pair, FixedRandom(0.75)) == "b", "high roll → second entry")
    check(weighted_draw(pair, FixedRandom(1.0)) == "a", "r == 1.0 → first entry")
    check(weighted_draw([("x", 0.0), ("y", 0.0)], FixedRandom(0.5)) == "x",
          "zero total weight → first entry")

    rng = random.Random(7)
    table = spawn_table(District.CROSS)
    counts: dict[Archetype, int] = {}
    for _ in range(2000):
        a = weighted_draw(table, rng)
        counts[a] = counts.get(a, 0) + 1
    check(counts.get(Archetype.SEXWORKER, 0) > counts.get(Archetype.BUSKER, 0),
          "heavier weights are drawn more often", str(counts))


# ── Shipped tables ───────────────────────────────────────────────────

def test_tables_ship():
    root = DATA_DIR.parent
    with open(root / "pyproject.toml", "rb") as f:
        setup = tomllib.load(f)["tool"]["setuptools"]
    check((DATA_DIR / "__init__.py").exists(), "data/ is an importable package")
    check("data" in setup["packages"], "data/ is installed with the code")
    check(setup["package-data"].get("data") == ["*.toml"], "its TOML tables ride along")
    shipped = sorted(p.name for p in DATA_DIR.glob("*.toml"))
    check(shipped == ["districts.toml", "tuning.toml"], "both tables are in data/", str(shipped))


if __name__ == "__main__":
    main("Modifier Tests", [
        ("District Tables", test_tables_complete),
        ("Time of Day", test_time_table),
        ("Effective Modifier", test_effective_modifier),
        ("Weighted Draw", test_weighted_draw),
        ("Shipped Tables", test_tables_ship),
    ])
