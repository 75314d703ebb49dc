"""Audio package: cue tones (``sounds``), speech (``speech``) and the
event-to-cue mapping (``cues``).

Submodules are imported directly so that loading the cue mapping does not
pull in QtMultimedia.
"""
