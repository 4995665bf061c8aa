"""On-disk storage for tapes and auxiliary data maps."""

from tapedeck.storage.data_map import load_data_map, store_data_map
from tapedeck.storage.tape_store import TapeStore

__all__ = [
    "TapeStore",
    "load_data_map",
    "store_data_map",
]
