"""
asyncstate: lifecycle of an async computation as one exhaustively matched value.

Core building blocks for rendering async work without isLoading/error/data
flags, and for driving it safely under re-invocation.

Architecture:
- base: the four variants (NotInitiated, Loading, Success, Error) they all share
- Family namespaces, one per admitted tag set, same combinators in each:
  async_state_n (all four), async_state (no NotInitiated),
  async_state_s (Loading | Success), async_state_sn (no Error)
- controller: TaskController / ImmediateTaskController publishing states
  from kungfu.LazyCoroResult computations
"""

import logging

# Variants
from .base import (
    AnyState,
    Failure,
    Loading,
    NotInitiated,
    ReadyState,
    Success,
    Tag,
    from_dict,
    to_dict,
)

# Core types
from ._types import LCR, NoError, TaskFn

# Helpers
from ._helpers import identity, pipe

# Family namespaces
from . import async_state, async_state_n, async_state_s, async_state_sn
from .async_state import AsyncState
from .async_state_n import AsyncStateN
from .async_state_s import AsyncStateS
from .async_state_sn import AsyncStateSN

# Controller
from . import controller
from .controller import (
    ControllerPolicy,
    ImmediateTaskController,
    ResetPolicy,
    StateCell,
    StateSink,
    TaskController,
    create_controller,
    create_immediate_controller,
)

# Errors
from ._errors import ForeignStateError, MissingHandlerError, NotReadyError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    # Variants
    "AnyState",
    "Failure",
    "Loading",
    "NotInitiated",
    "ReadyState",
    "Success",
    "Tag",
    "from_dict",
    "to_dict",
    # Types
    "LCR",
    "NoError",
    "TaskFn",
    # Helpers
    "identity",
    "pipe",
    # Families
    "async_state",
    "async_state_n",
    "async_state_s",
    "async_state_sn",
    "AsyncState",
    "AsyncStateN",
    "AsyncStateS",
    "AsyncStateSN",
    # Controller
    "controller",
    "ControllerPolicy",
    "ImmediateTaskController",
    "ResetPolicy",
    "StateCell",
    "StateSink",
    "TaskController",
    "create_controller",
    "create_immediate_controller",
    # Errors
    "ForeignStateError",
    "MissingHandlerError",
    "NotReadyError",
)
