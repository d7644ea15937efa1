from .gen_frame import GenFrame as GenFrame
from .gen import Gen as Gen
