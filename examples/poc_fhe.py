from mg.poc import run_poc

"""
    Shared-radix proof of concept: v*p + z computed by a third party over PQ, decrypted by the owner of P.
    In this PoC, encrypting/decrypting the values is the same as bringing in or out of Montgomery form.
"""
if __name__ == '__main__':

    report = run_poc(v=98, p=14, z=101)

    print(f"Encrypted value of v: {report['encrypted'][0]}")
    print(f"Encrypted value of p: {report['encrypted'][1]}")
    print(f"Encrypted value of z: {report['encrypted'][2]}")
    print(f"Computed value vp_c: {report['computed']:X}")
    print(f"Decrypted result: {report['decrypted']}")
    print(f"Original result: {report['plain']}")

    for label, ns in report['timings_ns'].items():
        print(f'{label}: {ns} ns')
