"""Run states and workout phases."""

from enum import Enum


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class Phase(Enum):
    WORK = "work"
    REST = "rest"
    FINISHED = "finished"


class PhaseTrigger(Enum):
    """Why a phase was entered."""

    START = "start"
    WORK_COMPLETE = "work_complete"
    NEXT_ROUND = "next_round"
