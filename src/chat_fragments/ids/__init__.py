from chat_fragments.ids.generators import SystemClock, UuidIdGenerator
from chat_fragments.ids.protocol import Clock, IdGenerator

__all__ = [
    "Clock",
    "IdGenerator",
    "SystemClock",
    "UuidIdGenerator",
]
