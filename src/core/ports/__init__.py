# nanolytica - Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.events import EventStorePort, StoreError
from src.core.ports.time import TimePort

__all__ = [
    "EventStorePort",
    "StoreError",
    "TimePort",
]
