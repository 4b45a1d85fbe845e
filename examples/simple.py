from mg.montgomery import Montgomery

if __name__ == '__main__':

    p = 65537  # 2^16 + 1
    M = Montgomery.factory(mod=p)
    print(f'modulus: {M.N}, R: {M.R}')

    x_ = 12345
    print(f'number: {x_}')

    # enter the Montgomery domain
    x = M.enter_domain(x_)
    assert x == x_ * M.R % p
    print(f'number in Montgomery form: {x}')

    # multiply in the domain, fold back with REDC
    y = M.enter_domain(54321)
    c = M.REDC(x * y)
    assert M.exit_domain(c) == x_ * 54321 % p

    # exit the Montgomery domain
    _x = M.exit_domain(x)
    assert _x == x_
    print(f'original number: {_x}')

    M.release()
    print(f'succeeded!')
