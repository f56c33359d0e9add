"""Engines: single-pass firing, forward chaining, listeners and tracing."""

from .firing import AbstractEngine, FiringEngine
from .inference import InferenceEngine
from .listeners import EngineListener, RuleListener
from .parameters import EngineParameters
from .trace import FiringTrace, SessionTrace, TraceEvent, TraceStep

__all__ = [
    # Engines
    "AbstractEngine",
    "FiringEngine",
    "InferenceEngine",
    # Listeners
    "EngineListener",
    "RuleListener",
    # Parameters
    "EngineParameters",
    # Trace
    "FiringTrace",
    "SessionTrace",
    "TraceEvent",
    "TraceStep",
]
