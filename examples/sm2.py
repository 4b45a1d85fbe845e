import random
from mg.montgomery import Montgomery
from mg.typing import InverseStrategy

"""
    Sample code to show-case usage of py-mg package on the SM2 prime
"""
if __name__ == '__main__':

    # Modulo for SM2
    p = 0xfffffffeffffffffffffffffffffffffffffffff00000000ffffffffffffffff
    M = Montgomery.factory(mod=p)
    M0 = Montgomery.factory(mod=p, inverse_strategy=InverseStrategy.EUCLID)

    # both strategies agree on the precomputed constants
    assert M.R == M0.R and M.N_inv == M0.N_inv

    x_ = random.randint(1, p - 1)
    y_ = random.randint(1, p - 1)

    x, y = M(x_), M(y_)
    R = M.R

    # 1) multiplication
    c = x * y
    assert c.value == (x_ * y_) * R % p

    # 2) addition / subtraction
    assert int(x + y) == (x_ + y_) % p
    assert int(x - y) == (x_ - y_) % p

    # exit the Montgomery domain
    assert int(x) == x_
    assert int(y) == y_

    print(f'succeeded!')
