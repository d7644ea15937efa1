from .gen_iterator import GenIterator as GenIterator
from .gen_stream import GenStream as GenStream
