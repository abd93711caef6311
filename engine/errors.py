"""
errors.py — Engine Error Taxonomy
==================================
    EngineError            – base class, never raised directly
      AlreadyRunning       – start / shuffle / resize requested during a run
      InvalidConfiguration – unknown algorithm or distribution, size or delay out of bounds
      Aborted              – internal: a checkpoint saw a cancellation request

Aborted unwinds the algorithm's call stack and is turned into a
CANCELLED outcome by the executor; it never reaches the UI.
Index faults inside algorithms are plain IndexError and are NOT part
of this hierarchy.
"""


class EngineError(Exception):
    pass


class AlreadyRunning(EngineError):
    pass


class InvalidConfiguration(EngineError, ValueError):
    pass


class Aborted(EngineError):
    pass
