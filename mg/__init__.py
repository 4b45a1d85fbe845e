from .montgomery import Montgomery, MontgomeryNumber
from .typing import InverseStrategy
from .common import inv_mod2, inv_euclid
from .errors import (MontgomeryError, AlreadyInitialized, NotInitialized, InvalidRadix, InvalidModulus,
                     ModulusNotPrime, OperandOutOfRange)

__version__ = '0.1.0'
