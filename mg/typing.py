from enum import Enum


class InverseStrategy(str, Enum):
    """ How N^{-1} mod R is computed when a context is initialized"""
    HENSEL = 'hensel'  # Newton/Hensel lifting, doubling the correct low bits each step
    EUCLID = 'euclid'  # general modular inverse of the bignum library

    @classmethod
    def parse(cls, value) -> 'InverseStrategy':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f'Unknown inverse strategy: {value!r}, choose from {[s.value for s in cls]}')
