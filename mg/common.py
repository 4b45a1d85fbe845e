## Common arithmetics
## Inverses modulo a power of two, and a machine-word rendition of REDC
import sympy

# Convenient lambdas
nextp2 = lambda x: 1 << x.bit_length()  # least power of 2 strictly greater than x
is_power_of_two = lambda n: n > 0 and (n & (n - 1)) == 0  # check if n is power of 2

# Machine word (int64_t) emulation
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
to_int64 = lambda x: (x & WORD_MASK) - ((x & (1 << WORD_BITS - 1)) << 1)  # wrap x into a signed 64-bit word


def xgcd(a, b):
    '''
        ax + by = gcd(a,b), extended gcd without recursion
    :param a:
    :param b:
    :return: x, y and gcd(a,b)
        !!NOTE: x, and y could be negative numbers
    '''
    x0, x1, y0, y1 = 1, 0, 0, 1
    while b != 0:
        q = a // b
        a, b = b, a % b
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return x0, y0, a


def co_prime(a, b):
    _, _, d = xgcd(a, b)
    return d == 1


def _check_inv_args(n, r):
    if not n & 1:
        raise ValueError(f'Only odd numbers are invertible modulo a power of 2, got n={n}')
    if not is_power_of_two(r):
        raise ValueError(f'r={r} must be a power of 2')


def inv_mod2(n, r):
    '''
        n^{-1} mod r for odd n and r a power of 2, by Hensel (Newton) lifting:
            n*y = 1 mod 2^k  ==>  n*y*(2 - n*y) = 1 mod 2^{2k}
        Starting from y = 1 (correct mod 2), each step doubles the number of correct low bits.
    :return: inverse in [0, r)
    '''
    _check_inv_args(n, r)

    k = r.bit_length() - 1
    mask = r - 1
    y, bits = 1, 1
    while bits < k:
        y = y * (2 - n * y) & mask
        bits <<= 1

    return y & mask


def inv_euclid(n, r):
    ''' n^{-1} mod r, delegated to the general (extended Euclid) modular inverse'''
    _check_inv_args(n, r)
    return int(sympy.mod_inverse(n, r)) if r > 1 else 0


#region Machine word rendition
# Everything below works on signed 64-bit words, the way a fixed-width implementation would: products wrap
# modulo 2^64, so the modulus must stay below 2^31 for x*N' and q*N to fit a word.

def _check_word_args(r, n):
    if n * r >= 1 << WORD_BITS - 1:
        raise ValueError(f'n*r must fit a signed {WORD_BITS}-bit word, got n={n}, r={r}')


def inv_mod2_word(n, r):
    ''' Same lifting as inv_mod2 on wrapping words; a run of log2(r)+1 steps is more than enough'''
    _check_inv_args(n, r)
    _check_word_args(r, n)

    y = 1
    for _ in range(r.bit_length()):
        y = to_int64(y * to_int64(2 - n * y))

    return y & (r - 1)


def redc_word(x, r, n, n_inv):
    ''' REDC on words: x * r^{-1} mod n, for 0 <= x < n*r < 2^63'''
    _check_word_args(r, n)
    if x < 0 or x >= n * r:
        raise ValueError(f'x={x} is out of the word REDC range [0, n*r)')

    q = ((x & (r - 1)) * n_inv) & (r - 1)
    x = to_int64(x - q * n) >> (r.bit_length() - 1)
    if x < 0:
        x += n
    return x


def to_mont_word(x, r, n):
    ''' x * r mod n by log2(r) rounds of modular doubling (no multiplication, no division)'''
    _check_word_args(r, n)

    x %= n
    for _ in range(r.bit_length() - 1):
        x <<= 1
        if x >= n:
            x -= n

    return x

#endregion
