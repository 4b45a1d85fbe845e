import unittest

from mg.montgomery import Montgomery
from mg.poc import run_poc, benchmark_redc


class TestProofOfConcept(unittest.TestCase):

    def test_run(self):
        report = run_poc(v=98, p=14, z=101, bit_length=256, seed=2024)
        P, PQ, R = report['P'], report['PQ'], report['R']

        self.assertEqual(PQ, P * report['Q'])
        self.assertTrue(R > PQ and R & (R - 1) == 0)
        self.assertEqual(report['plain'], (98 * 14 + 101) % P)
        self.assertEqual(report['decrypted'], report['plain'])

        # encryption is Montgomery form under P
        self.assertEqual(report['encrypted'], tuple(x * R % P for x in (98, 14, 101)))
        self.assertIn('decryption', report['timings_ns'])

    def test_small_primes_over_seeds(self):
        for seed in range(60):
            report = run_poc(v=9, p=7, z=5, bit_length=8, seed=seed)
            P, Q = report['P'], report['Q']

            self.assertTrue(P & 1 and Q & 1, f'Even prime drawn for seed={seed}')
            self.assertEqual(report['decrypted'], (9 * 7 + 5) % P)

    def test_reproducible(self):
        a = run_poc(bit_length=128, seed=7)
        b = run_poc(bit_length=128, seed=7)
        self.assertEqual((a['P'], a['Q'], a['computed']), (b['P'], b['Q'], b['computed']))

    def test_large_values_wrap_mod_p(self):
        v, p, z = 1 << 300, 3 ** 200, 5 ** 150
        report = run_poc(v=v, p=p, z=z, bit_length=128, seed=11)
        self.assertEqual(report['decrypted'], (v * p + z) % report['P'])

    def test_benchmark(self):
        mont = Montgomery.factory(mod=447183295099964424624663934151)
        redc_t, plain_t = benchmark_redc(mont, num_runs=50, seed=1)
        self.assertGreater(redc_t, 0)
        self.assertGreater(plain_t, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
