"""hive-store - Single-resource bays for the hive engine."""
from hive_store.store import Store, StoreHelper
from hive_store.systems import Decay, Regen, make_decay_system, make_regen_system

__all__ = [
    "Store",
    "StoreHelper",
    "Regen",
    "Decay",
    "make_regen_system",
    "make_decay_system",
]
