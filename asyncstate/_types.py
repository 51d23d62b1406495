"""
Core type definitions for asyncstate.

Типы и алиасы используемые по всей библиотеке.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import LazyCoroResult

# ============================================================================
# Type aliases
# ============================================================================

# Thunk = zero-arg producer (fallbacks, on_loading, fold handlers without payload)
type Thunk[T] = Callable[[], T]

# Listener = callback notified with every newly published state
type Listener[S] = Callable[[S], None]

# Unsubscribe = handle returned by StateSink.subscribe()
type Unsubscribe = Callable[[], None]

# NoError = type representing "never fails" semantic
type NoError = typing.Never

# ============================================================================
# Concrete type shortcuts
# ============================================================================

# LCR = LazyCoroResult shortcut (the deferred computation driven by a controller)
type LCR[T, E] = LazyCoroResult[T, E]

# TaskFn = function producing a deferred computation from call arguments
type TaskFn[**P, T, E] = Callable[P, LazyCoroResult[T, E]]

__all__ = (
    # Type aliases
    "Thunk",
    "Listener",
    "Unsubscribe",
    "NoError",
    # Concrete shortcuts
    "LCR",
    "TaskFn",
)
