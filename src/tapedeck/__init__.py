"""tapedeck - durable, human-editable storage for recorded HTTP interactions."""

__version__ = "0.1.0"
