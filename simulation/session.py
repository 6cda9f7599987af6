"""simulation/session.py — The single owner of the running game.

``GameSession`` holds the current snapshot, the seeded RNG, the timer
queue and the button lock.  Every input (a one-second tick or a player
command) is applied on one thread and produces exactly one committed
snapshot; nothing else ever writes ``session.state``.

    session = GameSession(seed=1991)
    session.dispatch(StartGame())
    session.tick()
    session.dispatch(PressButton(Slot.A))
    session.pump()          # fire due timers, settle the lock

A commit always:

1. recomputes availability and checks for game over
2. schedules the hide timers for any new feedback line (a newer line
   replaces the pending hide for its channel)
3. logs to the DevLog
4. offers the resolved buttons to the lock
"""

from __future__ import annotations
from typing import Any, Callable

from components import (
    DevLog, Facing, Screen, Slot, WorldState, initial_state,
)
from core.clock import now_ms
from core.constants import MOVE_REPEAT_MS, NARRATIVE_MS, TRANSACTION_MS
from core.determinism import DEFAULT_SEED, make_rng
from logic.actions import (
    choose_shop_option, duck, exit_shop, ignore_car, interact, move,
    perform_button, sell_drugs, stop,
)
from logic.availability import refresh_availability
from logic.effects import hide_feedback, with_flags
from logic.movement import can_move, refresh_location
from logic.needs import check_game_over
from logic.resolver import resolve
from logic.tick import world_tick
from simulation.action_lock import ActionLock
from simulation.scheduler import TimerQueue
from ui.commands import (
    ChooseShopOption, Command, Duck, ExitShop, IgnoreCar, Interact,
    MoveStart, MoveStop, Pause, PressButton, Restart, SellDrugs, StartGame,
)

_HIDE_DELAYS = {
    "narrative": NARRATIVE_MS,
    "transaction": TRANSACTION_MS,
}
_MOVE_KEY = "move"


class GameSession:

    def __init__(self, seed: int | None = None,
                 clock: Callable[[], int] = now_ms,
                 log: DevLog | None = None) -> None:
        self.seed = DEFAULT_SEED if seed is None else seed
        self.rng = make_rng(self.seed)
        self.clock = clock
        self.state: WorldState = initial_state()
        self.timers = TimerQueue()
        self.lock = ActionLock()
        self.log = log or DevLog()
        self._moving: Facing | None = None

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self) -> None:
        if self.state.screen is not Screen.TITLE:
            return
        self._fresh_run()
        print(f"[SESSION] New run (seed {self.seed})")

    def restart(self) -> None:
        if self.state.screen is not Screen.PLAYING:
            return
        self._fresh_run()
        print("[SESSION] Restarted")

    def _fresh_run(self) -> None:
        self._moving = None
        self.timers.clear()
        self.lock.reset()
        self.log.clear()
        self.log.record(0, "session", "new run", details={"seed": self.seed})
        self._commit(refresh_location(initial_state(Screen.PLAYING)))

    def tick(self) -> None:
        """Advance the world by one second."""
        if not self.state.is_running:
            return
        self._commit(world_tick(self.state, self.rng))

    def toggle_pause(self) -> None:
        s = self.state
        if s.screen is not Screen.PLAYING or s.is_over:
            return
        paused = not s.flags.is_paused
        if paused:
            self._halt_movement()
        self.log.record(s.stats.elapsed_seconds, "session",
                        "paused" if paused else "resumed")
        self._commit(with_flags(self.state, is_paused=paused))

    # ── Movement ─────────────────────────────────────────────────────

    def move_start(self, direction: Facing) -> None:
        if self._moving is direction:
            return
        self._moving = direction
        self._step({})

    def move_stop(self) -> None:
        if self._halt_movement():
            self._commit(stop(self.state))

    def _halt_movement(self) -> bool:
        was_moving = self._moving is not None
        self._moving = None
        self.timers.cancel(_MOVE_KEY)
        return was_moving

    def _step(self, _data: dict[str, Any]) -> None:
        if self._moving is None:
            return
        if can_move(self.state):
            self._commit(move(self.state, self._moving))
        if self.state.is_running:
            self.timers.post_delay(self.clock(), MOVE_REPEAT_MS, _MOVE_KEY,
                                   self._step)
        else:
            self._moving = None

    def duck(self, down: bool) -> None:
        self._commit(duck(self.state, down))

    # ── Player actions ───────────────────────────────────────────────

    def _absorbed(self, what: str) -> bool:
        """Player actions do nothing while frozen after the sacrifice."""
        if self.state.flags.freeze_ticks > 0:
            self.log.record(self.state.stats.elapsed_seconds, "action",
                            f"{what} absorbed (frozen)")
            return True
        return False

    def press(self, slot: Slot) -> None:
        button = self.lock.visible.slot(slot)
        if button.is_none or self._absorbed(button.action):
            return
        self.log.record(self.state.stats.elapsed_seconds, "action",
                        f"{slot.value.upper()}: {button.action}",
                        details={"kind": button.kind.value})
        self._commit(perform_button(self.state, button, self.rng))

    def interact(self) -> None:
        if not self._absorbed("interact"):
            self._commit(interact(self.state, self.rng))

    def sell_drugs(self) -> None:
        if not self._absorbed("sell"):
            self._commit(sell_drugs(self.state, self.rng))

    def choose_shop_option(self, option_id: str) -> None:
        if self._absorbed(option_id):
            return
        self.log.record(self.state.stats.elapsed_seconds, "shop", option_id)
        self._commit(choose_shop_option(self.state, option_id, self.rng))

    def exit_shop(self) -> None:
        self._commit(exit_shop(self.state))

    def ignore_car(self) -> None:
        self._commit(ignore_car(self.state))

    def dispatch(self, command: Command) -> None:
        if isinstance(command, StartGame):
            self.start()
        elif isinstance(command, Restart):
            self.restart()
        elif isinstance(command, MoveStart):
            self.move_start(command.direction)
        elif isinstance(command, MoveStop):
            self.move_stop()
        elif isinstance(command, Duck):
            self.duck(command.down)
        elif isinstance(command, Interact):
            self.interact()
        elif isinstance(command, PressButton):
            self.press(command.slot)
        elif isinstance(command, SellDrugs):
            self.sell_drugs()
        elif isinstance(command, ChooseShopOption):
            self.choose_shop_option(command.option_id)
        elif isinstance(command, ExitShop):
            self.exit_shop()
        elif isinstance(command, Pause):
            self.toggle_pause()
        elif isinstance(command, IgnoreCar):
            self.ignore_car()
        else:
            raise TypeError(f"unknown command {command!r}")

    # ── Timers and buttons ───────────────────────────────────────────

    def pump(self, now: int | None = None) -> int:
        """Fire due timers and let a held-back button triple through."""
        if now is None:
            now = self.clock()
        fired = self.timers.pump(now)
        self.lock.offer(resolve(self.state), now)
        return fired

    def buttons(self):
        return self.lock.visible

    # ── Commit ───────────────────────────────────────────────────────

    def _commit(self, new: WorldState) -> None:
        old = self.state
        new = check_game_over(refresh_availability(new))
        self.state = new
        now = self.clock()
        t = new.stats.elapsed_seconds

        for channel, delay in _HIDE_DELAYS.items():
            fb = getattr(new, channel)
            if fb.visible and fb.seq != getattr(old, channel).seq:
                self.timers.post_delay(now, delay, f"hide:{channel}",
                                       self._hide, {"channel": channel, "seq": fb.seq})
                self.log.record(t, channel, fb.text)

        if new.is_over and not old.is_over:
            self._halt_movement()
            if new.flags.is_victory:
                print(f"[GAME] IPO at {t}s with ${new.stats.money}")
                self.log.record(t, "game", "victory", details={"money": new.stats.money})
            else:
                cause = new.flags.game_over_cause
                print(f"[GAME] Over at {t}s: {cause.value}")
                self.log.record(t, "game", "over", details={"cause": cause.value})

        if new.stats.funding_stage is not old.stats.funding_stage:
            self.log.record(t, "funding", new.stats.funding_stage.value)

        if self.lock.offer(resolve(new), now):
            self.log.record(t, "lock", " | ".join(self.lock.visible.labels()))

    def _hide(self, data: dict[str, Any]) -> None:
        self.state = hide_feedback(self.state, data["channel"], data["seq"])
