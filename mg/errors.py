## Error taxonomy of Montgomery contexts
## All errors are recoverable: they are raised before any operand is touched.


class MontgomeryError(Exception):
    pass


class AlreadyInitialized(MontgomeryError, RuntimeError):
    pass


class NotInitialized(MontgomeryError, RuntimeError):
    pass


class InvalidRadix(MontgomeryError, ValueError):
    pass


class InvalidModulus(MontgomeryError, ValueError):
    pass


class ModulusNotPrime(MontgomeryError, ValueError):
    pass


class OperandOutOfRange(MontgomeryError, ValueError):
    pass
