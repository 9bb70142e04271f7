"""Runtime side of the @action marker.

Declaration modules import this so ``@action`` resolves when the generated
server imports them. Actions are found by reading the source, so the
decorator returns the function unchanged.
"""

from __future__ import annotations

from typing import Callable, TypeVar

F = TypeVar("F", bound=Callable[..., object])


def action(func: F) -> F:
    """Mark a function as a remotely callable action."""
    return func
