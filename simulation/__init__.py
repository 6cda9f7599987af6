"""simulation — The running game around the pure street logic.

Everything in ``logic/`` is snapshot in, snapshot out.  This package
owns the mutable parts: the current snapshot, the wall-clock timers
and the button lock.

Submodules
----------
session      GameSession — command dispatch, tick, commit pipeline
scheduler    TimerQueue — keyed millisecond timers (feedback hide, move repeat)
action_lock  ActionLock — holds the visible button triple for 350 ms
"""
