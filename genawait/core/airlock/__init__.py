from .airlock import Airlock as Airlock
from .airlock_slot import AirlockSlot as AirlockSlot
