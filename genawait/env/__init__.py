from .configure import configure as configure
from .env import Env as Env
from .load_env import load_env as load_env
