## Proof of concept: computing over "encrypted" values with two Montgomery contexts sharing one radix.
# The owner holds a private context over a prime P; a third party holds a public context over PQ = P*Q. Both use the
# same R > PQ, so a product reduced under PQ is still meaningful modulo P:
#   REDC_PQ(v*R * p*R) = v*p*R mod P
# NOTE: "encryption" here is entering the Montgomery domain, it does NOT hide anything.
import random
import time
from contextlib import contextmanager
from typing import Optional

from loguru import logger

from .common import nextp2
from .montgomery import Montgomery, config
from .utils import next_prime_from_random, profiler

BIT_LENGTH = int(config.get('PRIME_BITS', 256)) << 1  # bit length of PQ


@contextmanager
def timed(steps, label):
    ''' Record the elapsed nanoseconds of the enclosed block under steps[label]'''
    start = time.perf_counter_ns()
    try:
        yield
    finally:
        steps[label] = time.perf_counter_ns() - start
        logger.info(f'{label}: {steps[label]} ns')


def run_poc(v=98, p=14, z=101, bit_length=BIT_LENGTH, seed: Optional[int] = None) -> dict:
    '''
        Compute v*p + z mod P on the third-party side, over values the owner brought into its Montgomery domain.
    :return: report with the moduli, the "encrypted" values, the decrypted result, the plain result and timings
    '''
    rng = random.Random(seed)
    steps = {}

    with timed(steps, 'generate primes and compute PQ'):
        P = next_prime_from_random(bit_length >> 1, rng)
        Q = next_prime_from_random(bit_length >> 1, rng)
        PQ = P * Q

    # the smallest power of 2 greater than PQ, shared by both contexts
    with timed(steps, 'compute the shared radix'):
        e = nextp2(PQ)

    private = Montgomery(enforce_primality=False).init_r(e, P)
    public = Montgomery(enforce_primality=False).init_r(e, PQ)
    logger.debug(f'private: {private!r}, public: {public!r}')

    with timed(steps, 'encrypt plaintext values'):
        v_c, p_c, z_c = (private.enter_domain(x % P) for x in (v, p, z))

    # third party side, sees only PQ and the encrypted values
    with timed(steps, 'modular multiplication and addition'):
        vp_c = public.REDC(v_c * p_c) + z_c

    with timed(steps, 'plain multiplication and addition'):
        vp = (v * p + z) % P

    with timed(steps, 'decryption'):
        vp_d = private.exit_domain(vp_c)

    private.release()
    public.release()

    if vp_d != vp:
        raise ArithmeticError(f'Decrypted result {vp_d} does not match the plain result {vp}')

    return {
        'P': P, 'Q': Q, 'PQ': PQ, 'R': e,
        'encrypted': (v_c, p_c, z_c),
        'computed': vp_c,
        'decrypted': vp_d,
        'plain': vp,
        'timings_ns': steps,
    }


def benchmark_redc(mont: Montgomery, num_runs=1000, seed: Optional[int] = None):
    '''
        Time one Montgomery product (REDC of a product of two representations) against the plain a*b % N
    :return: mean seconds per call for (REDC, plain)
    '''
    rng = random.Random(seed)
    N = mont.N
    a, b = rng.randrange(N), rng.randrange(N)
    a_, b_ = mont.enter_domain(a), mont.enter_domain(b)

    @profiler(num_runs=num_runs)
    def redc_product():
        return mont.REDC(a_ * b_)

    @profiler(num_runs=num_runs)
    def plain_product():
        return a * b % N

    act, exp = mont.exit_domain(redc_product()), plain_product()
    if act != exp:
        raise ArithmeticError(f'Montgomery product {act} differs from plain product {exp}')

    return redc_product.last_samples.mean(), plain_product.last_samples.mean()
