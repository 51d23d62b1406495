from .policy import ControllerPolicy, ResetPolicy
from .sink import StateCell, StateSink
from .task_either import (
    ImmediateTaskController,
    TaskController,
    create_controller,
    create_immediate_controller,
)

__all__ = (
    # Configuration
    "ControllerPolicy",
    "ResetPolicy",
    # State sinks
    "StateCell",
    "StateSink",
    # Controllers
    "ImmediateTaskController",
    "TaskController",
    "create_controller",
    "create_immediate_controller",
)
