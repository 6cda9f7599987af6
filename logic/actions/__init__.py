"""logic/actions — High-level player actions.

Thin wrappers the session calls in response to commands.  Each takes
a snapshot (and the session RNG) and returns the next snapshot.

Public API (re-exported here)
-----------------------------
``perform_button``      — run a resolved context button
``interact``            — E key: open the shop or do the zone action
``move`` / ``stop``     — walk one step / stop walking
``duck``                — crouch (halves the police catch chance)
``sell_drugs``          — offer a tab to whoever is in reach
``choose_shop_option``  — buy something inside an open shop
``exit_shop``           — leave the shop interior
``ignore_car``          — wave off a kerb-crawler
"""

from __future__ import annotations

from logic.actions.buttons import perform_button          # noqa: F401
from logic.actions.interact import interact               # noqa: F401
from logic.dealers import sell_drugs                      # noqa: F401
from logic.encounters import ignore as ignore_car         # noqa: F401
from logic.movement import duck, move, stop               # noqa: F401
from logic.zones import choose_shop_option, exit_shop     # noqa: F401
