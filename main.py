"""
main.py — Bootstrap

1. Parse the command line
2. Load tuning and the district tables
3. Create the session
4. Either run the pygame window (title → street) or a headless
   autopilot that plays N ticks and prints a summary

Usage:
    python main.py                       # windowed
    python main.py --headless --ticks 600 --seed 7
"""

from __future__ import annotations
import argparse
import sys

from components import Facing, Slot
from core import tuning
from core.clock import advance_ms, set_now_ms
from core.constants import MOVE_REPEAT_MS, TICK_MS
from core.determinism import DEFAULT_SEED, derive_rng
from logic.modifiers import load_tables
from simulation.session import GameSession
from ui.commands import (
    ExitShop, Interact, MoveStart, MoveStop, PressButton, StartGame,
)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Kerbside - survive the streets of Sydney, 1991, and raise your round"
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window; an autopilot presses the buttons",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=600,
        help="Headless only: number of one-second ticks to play (default: 600)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"RNG seed for the run (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--tuning",
        type=str,
        default=None,
        help="Path to a tuning TOML (default: data/tuning.toml)",
    )
    return parser.parse_args(argv)


# ── Headless ─────────────────────────────────────────────────────────

def run_headless(session: GameSession, ticks: int) -> int:
    """Play *ticks* seconds with a seeded autopilot.  Returns exit code."""
    pilot = derive_rng(session.seed, "autopilot")
    set_now_ms(0)
    session.dispatch(StartGame())
    for _ in range(ticks):
        if session.state.is_over:
            break
        state = session.state
        if state.flags.shop_open:
            session.dispatch(ExitShop())
        elif pilot.random() < 0.3:
            session.dispatch(MoveStart(pilot.choice((Facing.LEFT, Facing.RIGHT))))
            for _ in range(pilot.randint(2, 10)):
                session.pump(advance_ms(MOVE_REPEAT_MS))
            session.dispatch(MoveStop())
        elif state.world.zone is not None and pilot.random() < 0.2:
            session.dispatch(Interact())

        session.pump(advance_ms(TICK_MS // 2))
        buttons = session.buttons()
        live = [slot for slot in Slot if not buttons.slot(slot).is_none]
        if live and pilot.random() < 0.5:
            session.dispatch(PressButton(pilot.choice(live)))
        session.pump(advance_ms(TICK_MS - TICK_MS // 2))
        session.tick()

    s = session.state
    outcome = "running"
    if s.flags.is_victory:
        outcome = "ipo"
    elif s.flags.is_game_over:
        outcome = s.flags.game_over_cause.value
    print(f"[HEADLESS] seed={session.seed} survived={s.stats.elapsed_seconds}s "
          f"outcome={outcome} stage={s.stats.funding_stage.value} "
          f"money=${s.stats.money} hope={s.stats.hope:.0f}")
    for cat, n in session.log.counts().items():
        print(f"[HEADLESS]   {cat:<12} {n}")
    for entry in session.log.since(s.stats.elapsed_seconds - 5):
        print(f"[HEADLESS]   {entry['tick']:>5}s {entry['cat']:<12} {entry['msg']}")
    return 0


# ── Windowed ─────────────────────────────────────────────────────────

def run_window(session: GameSession) -> int:
    from core.app import App
    from scenes.title_scene import TitleScene

    app = App(session, title="Kerbside")
    app.push_scene(TitleScene())
    app.run()
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    tuning.load(args.tuning)
    load_tables()
    session = GameSession(seed=args.seed)
    if args.headless:
        return run_headless(session, args.ticks)
    return run_window(session)


if __name__ == "__main__":
    sys.exit(main())
