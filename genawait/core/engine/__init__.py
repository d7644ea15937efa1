from .async_step import AsyncStep as AsyncStep
from .sync_step import sync_step as sync_step
