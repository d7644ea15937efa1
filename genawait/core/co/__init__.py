from .co import Co as Co
from .suspension import Suspension as Suspension
