"""logic/spawner.py — Entity lifecycle: spawn, advance, retire.

Pedestrians arrive in density-scaled bursts at either screen edge and
walk through; a lurking dealer may appear in drug-heavy districts;
cars enter from the far right and leave off the left.  The ibis cameo
lives in a periodic window and is purely cosmetic.

Ids come from ``Entities.next_id`` and only ever increase.  Anything
that leaves the visible range is dropped along with any reference to
it (``steal_target``).
"""

from __future__ import annotations
import random
from dataclasses import replace

from components import (
    Archetype, ModifierKey, Pedestrian, Vehicle, Wildlife, WorldState,
)
from core.constants import (
    VEHICLE_ENTRY_X, VEHICLE_EXIT_X, VISIBLE_MAX, VISIBLE_MIN,
)
from core.determinism import chance
from core.tuning import get as _tun
from logic.effects import add_pedestrian, spawn_id, with_entities, with_flags
from logic.modifiers import (
    base_modifier, density, effective_modifier, spawn_table, time_modifiers,
    weighted_draw,
)


# ── Pedestrians ──────────────────────────────────────────────────────

def max_population(dens: float) -> int:
    return max(1, round(_tun("entities.pedestrians", "max_population", 7) * dens))


def advance_pedestrians(state: WorldState) -> WorldState:
    kept: list[Pedestrian] = []
    walk = _tun("entities.pedestrians", "base_speed", 1.5)
    for ped in state.entities.pedestrians:
        if ped.lurk_ticks > 0:
            lurk = ped.lurk_ticks - 1
            ped = replace(ped, lurk_ticks=lurk, x=ped.x + ped.speed * ped.direction,
                          speed=ped.speed if lurk else walk)
        else:
            ped = replace(ped, x=ped.x + ped.speed * ped.direction)
        if VISIBLE_MIN <= ped.x <= VISIBLE_MAX:
            kept.append(ped)
    state = with_entities(state, pedestrians=tuple(kept))
    live = {p.id for p in kept}
    if state.flags.steal_target is not None and state.flags.steal_target not in live:
        state = with_flags(state, steal_target=None, dealer_nearby=False,
                           pedestrian_actions=())
    return state


def spawn_pedestrians(state: WorldState, rng: random.Random) -> WorldState:
    district = state.world.district
    dens = density(district)
    crowd = time_modifiers(state.world.time_of_day).crowd_density
    walkers = [p for p in state.entities.pedestrians
               if p.archetype is not Archetype.DEALER]
    cap = max_population(dens)
    if len(walkers) >= cap:
        return state
    if not chance(rng, _tun("entities.pedestrians", "burst_chance", 0.25) * dens * crowd):
        return state

    # dealers never walk through; they only appear as lurkers
    table = [(a, w) for a, w in spawn_table(district) if a is not Archetype.DEALER]
    base = _tun("entities.pedestrians", "base_speed", 1.5)
    burst = rng.randint(1, _tun("entities.pedestrians", "max_burst", 2))
    for _ in range(min(burst, cap - len(walkers))):
        archetype = weighted_draw(table, rng)
        if archetype is None:
            break
        direction = rng.choice((1, -1))
        state, pid = spawn_id(state)
        state = add_pedestrian(state, Pedestrian(
            id=pid,
            x=VISIBLE_MIN if direction == 1 else VISIBLE_MAX,
            speed=base * rng.uniform(0.7, 1.3),
            direction=direction,
            archetype=archetype,
        ))
    return state


def spawn_dealer(state: WorldState, rng: random.Random) -> WorldState:
    district = state.world.district
    if base_modifier(district, ModifierKey.DRUGS) <= _tun("entities.dealer", "min_drugs", 0.45):
        return state
    if any(p.archetype is Archetype.DEALER for p in state.entities.pedestrians):
        return state
    drugs = effective_modifier(district, ModifierKey.DRUGS, state.world.time_of_day)
    if not chance(rng, _tun("entities.dealer", "spawn_chance", 0.06) * drugs):
        return state
    state, pid = spawn_id(state)
    return add_pedestrian(state, Pedestrian(
        id=pid,
        x=rng.uniform(15.0, 85.0),
        speed=_tun("entities.dealer", "lurk_speed", 0.1),
        direction=rng.choice((1, -1)),
        archetype=Archetype.DEALER,
        stealable=False,
        lurk_ticks=_tun("entities.dealer", "lurk_ticks", 40),
    ))


# ── Vehicles ─────────────────────────────────────────────────────────

def advance_vehicles(state: WorldState) -> WorldState:
    kept: list[Vehicle] = []
    for car in state.entities.vehicles:
        speed = car.speed * 0.5 if car.stopped else car.speed
        if speed < 0.01:
            speed = 0.0
        car = replace(car, speed=speed, x=car.x - speed)
        if car.x >= VEHICLE_EXIT_X:
            kept.append(car)
    return with_entities(state, vehicles=tuple(kept))


def spawn_vehicle(state: WorldState, rng: random.Random) -> WorldState:
    moving = [c for c in state.entities.vehicles if not c.is_encounter]
    if len(moving) >= _tun("entities.vehicles", "max_vehicles", 3):
        return state
    crowd = time_modifiers(state.world.time_of_day).crowd_density
    if not chance(rng, _tun("entities.vehicles", "spawn_chance", 0.15) * crowd):
        return state
    state, vid = spawn_id(state)
    car = Vehicle(id=vid, x=VEHICLE_ENTRY_X,
                  speed=rng.uniform(_tun("entities.vehicles", "min_speed", 4.0),
                                    _tun("entities.vehicles", "max_speed", 8.0)),
                  variant=rng.randint(0, 3))
    return with_entities(state, vehicles=state.entities.vehicles + (car,))


# ── Wildlife ─────────────────────────────────────────────────────────

def update_wildlife(state: WorldState, rng: random.Random) -> WorldState:
    ibis = state.entities.wildlife
    period = _tun("entities.wildlife", "period", 120)
    window = _tun("entities.wildlife", "window", 30)
    in_window = state.stats.elapsed_seconds % period < window
    if not in_window:
        if ibis.active:
            return with_entities(state, wildlife=Wildlife(x=ibis.x, active=False))
        return state
    if ibis.active:
        x = min(95.0, max(5.0, ibis.x + rng.uniform(-1.0, 1.0)))
        return with_entities(state, wildlife=Wildlife(x=x, active=True))
    bias = base_modifier(state.world.district, ModifierKey.WILDLIFE)
    if chance(rng, _tun("entities.wildlife", "chance", 0.2) * bias):
        return with_entities(state, wildlife=Wildlife(x=rng.uniform(10.0, 90.0), active=True))
    return state


# ── Lifecycle step ───────────────────────────────────────────────────

def advance_entities(state: WorldState, rng: random.Random) -> WorldState:
    state = advance_pedestrians(state)
    state = spawn_pedestrians(state, rng)
    state = spawn_dealer(state, rng)
    state = advance_vehicles(state)
    return spawn_vehicle(state, rng)
