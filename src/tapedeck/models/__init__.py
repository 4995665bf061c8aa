"""tapedeck data models - re-exports all public model classes."""

from tapedeck.models.config import TapeConfig
from tapedeck.models.tape import (
    TAPE_DOCUMENT_KEY,
    CompressionAlgorithm,
    Headers,
    PersistedBuffer,
    PersistedRequest,
    PersistedResponse,
    PersistedTapeRecord,
    TapeDocument,
    TapeRecord,
    TapeRequest,
    TapeResponse,
)

__all__ = [
    "TAPE_DOCUMENT_KEY",
    "CompressionAlgorithm",
    "Headers",
    "PersistedBuffer",
    "PersistedRequest",
    "PersistedResponse",
    "PersistedTapeRecord",
    "TapeConfig",
    "TapeDocument",
    "TapeRecord",
    "TapeRequest",
    "TapeResponse",
]
