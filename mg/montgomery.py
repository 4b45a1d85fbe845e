## Montgomery form over Z_N, for N an odd modulus and R > N a power of 2 (the radix).
# A number x is represented as x*R % N; the product of two representations is folded back with REDC, which
# replaces the division by N with a mask, a multiplication and a shift:
#   REDC(u) := u * R^{-1} mod N, for 0 <= u < N*R
# references:
# [1] [Montgomery modular multiplication](https://en.wikipedia.org/wiki/Montgomery_modular_multiplication)
# [2] [Topics in Computational Number Theory Inspired by Peter L. Montgomery](https://www.cambridge.org/core/books/topics-in-computational-number-theory-inspired-by-peter-l-montgomery/4F7A9AE2CE219D490B7D253558CF6F00)
from functools import wraps
from typing import Optional, Union

import sympy
from loguru import logger

from .common import is_power_of_two, co_prime, inv_mod2, inv_euclid
from .errors import (AlreadyInitialized, NotInitialized, InvalidRadix, InvalidModulus, ModulusNotPrime,
                     OperandOutOfRange)
from .typing import InverseStrategy
from .utils import load_config

# Configuration of contexts
config = load_config()
ENFORCE_PRIMALITY = bool(config.get('ENFORCE_PRIMALITY', True))
INVERSE_STRATEGY = InverseStrategy.parse(config.get('INVERSE_STRATEGY', 'hensel'))

_INVERSES = {
    InverseStrategy.HENSEL: inv_mod2,
    InverseStrategy.EUCLID: inv_euclid,
}


def requires_init(method):
    ''' Guard: the decorated method requires a live (initialized) context'''

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        if not self.initialized:
            raise NotInitialized(f'{method.__name__}: Montgomery context is not initialized')
        return method(self, *args, **kwargs)

    return wrapper


class Montgomery:
    def __init__(self, enforce_primality: Optional[bool] = None,
                 inverse_strategy: Union[InverseStrategy, str, None] = None):

        # policies, default to the loaded configuration
        self.enforce_primality: bool = ENFORCE_PRIMALITY if enforce_primality is None else enforce_primality
        self.inverse_strategy: InverseStrategy = INVERSE_STRATEGY if inverse_strategy is None \
            else InverseStrategy.parse(inverse_strategy)

        self.initialized: bool = False

        self._N: Optional[int] = None  # modulo
        self._R: Optional[int] = None  # R > N and is a power of 2 (the smallest power of 2 greater than N by default)
        self.__n: Optional[int] = None  # R = 2 ** __n
        self.__RMASK: Optional[int] = None  # (&__RMASK) substitutes for (%R) operation

        self.R2: Optional[int] = None  # R^2 % N
        self.N_inv: Optional[int] = None  # N^{-1} % R

    @classmethod
    def factory(cls, mod: int, R: Optional[int] = None, **kwargs) -> 'Montgomery':
        '''
            Create a ready-to-use context over mod; with R given the explicit-radix policy is used, o.w. the canonical
            one (R is the least power of 2 greater than mod).
        '''
        inst = cls(**kwargs)
        return inst.init(mod) if R is None else inst.init_r(R, mod)

    @property
    def N(self):
        return self._N

    @property
    def R(self):
        return self._R

    @property
    def n(self):
        return self.__n

    @property
    def mask(self):
        return self.__RMASK

    @staticmethod
    def _check_modulus(mod):
        if not isinstance(mod, int) or mod <= 0 or not mod & 1:
            raise InvalidModulus(f'The modulus must be a positive odd integer, got {mod!r}')

    def init(self, mod: int) -> 'Montgomery':
        '''
            Initialize the context over mod with R = 2**bitlen(mod).
            Strict contexts (enforce_primality) reject composite moduli.
        '''
        if self.initialized:
            raise AlreadyInitialized('Montgomery context is already initialized, release it first')

        self._check_modulus(mod)
        if self.enforce_primality and not sympy.isprime(mod):
            raise ModulusNotPrime(f'The modulus {mod} is not a prime (pass enforce_primality=False to allow it)')

        return self.__setup(1 << mod.bit_length(), mod)

    def init_r(self, R: int, mod: int) -> 'Montgomery':
        '''
            Initialize the context over mod with a caller-chosen radix R, so that contexts over different moduli
            can share the same R. No primality check is done here: shared-radix moduli are typically composite.
        '''
        if self.initialized:
            raise AlreadyInitialized('Montgomery context is already initialized, release it first')

        self._check_modulus(mod)
        if not isinstance(R, int) or not is_power_of_two(R):
            raise InvalidRadix(f'R must be a power of 2, got {R!r}')
        if R <= mod:
            raise InvalidRadix(f'R (={R}) must be greater than the modulus (={mod})')

        return self.__setup(R, mod)

    def __setup(self, R, mod):
        if not co_prime(R, mod):
            raise InvalidModulus(f'The modulus {mod} must be co-prime to R={R}')

        self._N = mod
        self._R = R
        self.__n = R.bit_length() - 1
        self.__RMASK = R - 1

        self.__pre_calc()
        self.initialized = True

        logger.debug(f'Montgomery context ready: N={self._N:#x}, R=2^{self.__n}, strategy={self.inverse_strategy.value}')
        return self

    def __pre_calc(self):
        self.R2 = self.__pre_calc_R2()  # R^2 % N
        self.N_inv = _INVERSES[self.inverse_strategy](self._N, self._R)  # N^{-1} % R

    def __pre_calc_R2(self):
        # Use n rounds of modulo doubling to get R^2 % N, where R = 2^n
        # refer: [2] p.19
        ci = self._R % self._N  # c0 = R
        for _ in range(self.__n):
            ci <<= 1
            if ci >= self._N:
                ci -= self._N

        return ci

    @requires_init
    def release(self):
        ''' Drop the precomputed constants; the context may be initialized again afterwards'''
        logger.debug(f'Releasing Montgomery context over N={self._N:#x}')
        self._N = self._R = self.__n = self.__RMASK = None
        self.R2 = self.N_inv = None
        self.initialized = False

    @requires_init
    def REDC(self, u: int) -> int:
        '''
            Montgomery reduction (REDC) of number u
            ref: [1]
        :param u: 0 <= u < N*R
        :return: u * R^{-1} mod N
        '''
        if u < 0 or u >= self._R * self._N:
            raise OperandOutOfRange('Given number is out of montgomery reduction range')

        t = (u & self.__RMASK) * self.N_inv & self.__RMASK
        u = u - t * self._N >> self.__n  # exact: u - t*N = 0 mod R

        return u + self._N if u < 0 else u

    @requires_init
    def enter_domain(self, a: int) -> int:
        ''' a -> a*R % N, for 0 <= a < N'''
        if a < 0 or a >= self._N:
            raise OperandOutOfRange(f'Only numbers in [0, N) can enter the Montgomery domain, got {a}')

        return self.REDC(a * self.R2)

    @requires_init
    def exit_domain(self, a: int) -> int:
        ''' a*R % N -> a'''
        return self.REDC(a)

    @requires_init
    def multiply(self, a: int, b: int) -> int:
        ''' Montgomery product of two Montgomery representations: a*b*R^{-1} % N'''
        if not (0 <= a < self._N and 0 <= b < self._N):
            raise OperandOutOfRange('Montgomery product operands must lie in [0, N)')

        return self.REDC(a * b)

    @requires_init
    def add(self, a: int, b: int) -> int:
        ''' a + b % N for a, b in [0, N), by a conditional subtraction'''
        # eliminate expensive modulo expression
        t = a + b
        return t - self._N if t >= self._N else t

    @requires_init
    def subtract(self, a: int, b: int) -> int:
        t = a - b
        return t + self._N if t < 0 else t

    @requires_init
    def __call__(self, v: int) -> 'MontgomeryNumber':
        return MontgomeryNumber(self.enter_domain(v % self._N), self)

    def __repr__(self):
        if not self.initialized:
            return 'Montgomery(<released>)'
        return f'Montgomery(N={self._N}, R=2^{self.__n})'


class MontgomeryNumber:
    ''' A value held in Montgomery representation, bound to the context that produced it'''

    def __init__(self, value, mont: Montgomery):
        self.mont = mont
        self.value = value

    def _check(self, other):
        if not isinstance(other, MontgomeryNumber):
            return False
        if other.mont is not self.mont and (other.mont.N, other.mont.R) != (self.mont.N, self.mont.R):
            raise ValueError('Cannot mix numbers of different Montgomery contexts')
        return True

    def __mul__(self, other):
        if not self._check(other):
            return NotImplemented
        return MontgomeryNumber(self.mont.multiply(self.value, other.value), self.mont)

    def __add__(self, other):
        if not self._check(other):
            return NotImplemented

        return MontgomeryNumber(self.mont.add(self.value, other.value), self.mont)

    def __sub__(self, other):
        if not self._check(other):
            return NotImplemented

        return MontgomeryNumber(self.mont.subtract(self.value, other.value), self.mont)

    def __eq__(self, other):
        if not isinstance(other, MontgomeryNumber):
            return NotImplemented
        return self.value == other.value and self.mont.N == other.mont.N and self.mont.R == other.mont.R

    def __hash__(self):
        return hash((self.value, self.mont.N, self.mont.R))

    def __repr__(self):
        return f"{self.value} (mod {self.mont.N}, R=2^{self.mont.n})"

    def __int__(self):
        # Convert Montgomery representation back to integer using R^{-1}, using int(a)
        return self.mont.exit_domain(self.value)
