"""Exception hierarchy for IntervalQuest."""


class IntervalQuestError(Exception):
    """Base exception for IntervalQuest."""


class InvalidConfiguration(IntervalQuestError):
    """Raised when a timer configuration cannot be coerced to integers."""


class IllegalTransition(IntervalQuestError):
    """A command was issued in a state that forbids it."""


class CuePlaybackUnavailable(IntervalQuestError):
    """The audio or speech backend is missing or failed to play."""


class PresetError(IntervalQuestError):
    """Base exception for preset storage."""


class PresetConflict(PresetError):
    """A different preset is already stored under the same name."""


class PresetReadOnly(PresetError):
    """Built-in presets cannot be overwritten or deleted."""


class PresetNotFound(PresetError):
    """No preset is stored under the requested name."""


class PresetStorageError(PresetError):
    """Reading from or writing to the preset backend failed."""
