"""gambit: a standard-chess rules engine.

The :mod:`gambit.core` package holds the pure rules (move generation, attack
detection, legality filtering, move application and status derivation).
:mod:`gambit.game` wraps one game behind the controller a presentation
layer talks to.
"""

__version__ = "0.1.0"
