"""Engine facade, its state and change notifications."""

from .bus import EDIT_REJECTED, VALUE_CHANGE, VALUE_COMMIT, EngineBus
from .facade import ExternalValue, NumericEngine
from .state import EditResult, EnginePhase, EngineState, NumberValues

__all__ = [
    "EDIT_REJECTED",
    "EditResult",
    "EngineBus",
    "EnginePhase",
    "EngineState",
    "ExternalValue",
    "NumberValues",
    "NumericEngine",
    "VALUE_CHANGE",
    "VALUE_COMMIT",
]
