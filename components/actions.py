"""components.actions — Resolved button descriptors.

The resolver maps a snapshot to three ``ButtonAction`` slots.  Both
are frozen and hashable so the session can compare triples by value
when deciding whether the lock must restart.
"""

from __future__ import annotations
from dataclasses import dataclass

from components.enums import ActionKind, Slot


@dataclass(frozen=True, slots=True)
class ButtonAction:
    kind: ActionKind = ActionKind.NONE
    action: str = ""
    label: str = ""

    @property
    def is_none(self) -> bool:
        return self.kind is ActionKind.NONE


NO_ACTION = ButtonAction()


@dataclass(frozen=True, slots=True)
class ResolvedButtons:
    a: ButtonAction = NO_ACTION
    b: ButtonAction = NO_ACTION
    c: ButtonAction = NO_ACTION

    def slot(self, slot: Slot) -> ButtonAction:
        return getattr(self, slot.value)

    def labels(self) -> tuple[str, str, str]:
        return (self.a.label, self.b.label, self.c.label)
