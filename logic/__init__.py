"""logic — Street rules, snapshot in, snapshot out.

Subpackages
-----------
actions/    — player action entry points (buttons, interact, shop)

Top-level modules
-----------------
tick           — one-second world tick orchestrator
needs          — survival stats, drugs, companion, clock, game over
spawner        — pedestrians, cars and the ibis
encounters     — kerbside car encounters
police         — sweeps, catches, arrests
narrative      — low-probability street events
availability   — derived pedestrian/desperation sets for the resolver
resolver       — the three context buttons
crime          — steal, pitch, trade, confront, purse grab
dealers        — buying and selling stimulant and LSD
desperation    — theft, selling, the dog
funding        — the pitch ladder to IPO
zones          — street zones and shop interiors
movement       — walking, ducking, location refresh
geometry       — scroll offset → district and venue
modifiers      — district and time-of-day tables
effects        — copy-on-write helpers and clamping
input_manager  — raw input → intent mapping
"""
