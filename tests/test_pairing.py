import logging
import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from curve import (
    BLS6_6,
    BLS6_6_EXT,
    BLS6_6_G1,
    BLS6_6_G2,
    TINY_JUBJUB,
    TINY_JUBJUB_EXT,
    TINY_JUBJUB_G1,
    TINY_JUBJUB_G2,
)
from field import F13, F13_4, F43_6
from pairing import MillerStep, PairingError, final_exponentiate, linefunc, miller_loop, multi_pairing, pairing


class LineFunctionTests(unittest.TestCase):
    def setUp(self):
        self.one, self.two, self.three = (k * TINY_JUBJUB_G1 for k in (1, 2, 3))
        self.negone, self.negtwo, self.negthree = -self.one, -self.two, -self.three

    def value(self, a, b, t):
        return linefunc(a, b, t)[1]

    def test_line_vanishes_on_collinear_points(self):
        self.assertEqual(self.value(self.one, self.two, self.one), F13(0))
        self.assertEqual(self.value(self.one, self.two, self.two), F13(0))
        self.assertNotEqual(self.value(self.one, self.two, self.three), F13(0))
        self.assertEqual(self.value(self.one, self.two, self.negthree), F13(0))
        self.assertEqual(self.value(self.one, self.one, self.one), F13(0))
        self.assertNotEqual(self.value(self.one, self.one, self.two), F13(0))
        self.assertEqual(self.value(self.one, self.one, self.negtwo), F13(0))

    def test_vertical_line(self):
        m, v = linefunc(self.one, self.negone, self.two)
        self.assertIsNone(m)
        self.assertEqual(v, self.two.x - self.one.x)
        self.assertEqual(self.value(self.one, self.negone, self.negone), F13(0))

    def test_slope_is_reported(self):
        m, _ = linefunc(self.one, self.one, self.two)
        self.assertEqual(m, F13(6))

    def test_infinity_rejected(self):
        with self.assertRaises(ValueError):
            linefunc(TINY_JUBJUB.infinity(), self.one, self.two)


class TinyJubJubPairingTests(unittest.TestCase):
    def test_miller_loop_and_pairing_values(self):
        f = miller_loop(TINY_JUBJUB_G1, TINY_JUBJUB_G2)
        self.assertEqual(f, F13_4([9, 2, 11, 12]))  # 12t^3 + 11t^2 + 2t + 9
        self.assertEqual(final_exponentiate(f, TINY_JUBJUB_EXT), F13_4([3, 7, 7, 6]))
        self.assertEqual(pairing(TINY_JUBJUB_G1, TINY_JUBJUB_G2), F13_4([3, 7, 7, 6]))  # 6t^3 + 7t^2 + 7t + 3

    def test_trace_rows(self):
        steps = []
        miller_loop(TINY_JUBJUB_G1, TINY_JUBJUB_G2, trace=steps)
        self.assertEqual([(s.bit, s.op) for s in steps], [(0, "double"), (1, "double"), (1, "add")])
        self.assertTrue(all(isinstance(s, MillerStep) for s in steps))
        self.assertEqual(steps[0].slope, F13_4([6]))
        self.assertEqual(steps[0].line, F13_4([2, 3, 11, 8]))
        self.assertEqual(steps[0].point, TINY_JUBJUB.point(7, 11))
        self.assertEqual(steps[1].slope, F13_4([10]))
        self.assertEqual(steps[1].point, -TINY_JUBJUB_G1)
        self.assertIsNone(steps[2].slope)  # 4P = -P: vertical line
        self.assertEqual(steps[2].line, F13_4([12, 0, 4]))
        self.assertTrue(steps[2].point.is_infinity())
        self.assertEqual(steps[-1].f, F13_4([9, 2, 11, 12]))

    def test_trace_is_logged_at_debug(self):
        with self.assertLogs("pairing", level=logging.DEBUG) as cm:
            miller_loop(TINY_JUBJUB_G1, TINY_JUBJUB_G2)
        self.assertEqual(len(cm.records), 3)
        self.assertIn("op=add", cm.output[-1])

    def test_pairing_has_order_r(self):
        e = pairing(TINY_JUBJUB_G1, TINY_JUBJUB_G2)
        self.assertNotEqual(e, F13_4.one())
        self.assertEqual(e**5, F13_4.one())

    def test_bilinearity(self):
        e = pairing(TINY_JUBJUB_G1, TINY_JUBJUB_G2)
        for a in range(1, 5):
            for b in range(1, 5):
                self.assertEqual(pairing(a * TINY_JUBJUB_G1, b * TINY_JUBJUB_G2), e ** (a * b))

    def test_non_degeneracy(self):
        for a in range(1, 5):
            for b in range(1, 5):
                self.assertNotEqual(pairing(a * TINY_JUBJUB_G1, b * TINY_JUBJUB_G2), F13_4.one())

    def test_infinity_pairs_to_one(self):
        self.assertEqual(pairing(TINY_JUBJUB.infinity(), TINY_JUBJUB_G2), F13_4.one())
        self.assertEqual(pairing(TINY_JUBJUB_G1, TINY_JUBJUB_EXT.infinity()), F13_4.one())

    def test_multi_pairing(self):
        e = pairing(TINY_JUBJUB_G1, TINY_JUBJUB_G2)
        self.assertEqual(multi_pairing([(TINY_JUBJUB_G1, TINY_JUBJUB_G2), (-TINY_JUBJUB_G1, TINY_JUBJUB_G2)]), F13_4.one())
        self.assertEqual(multi_pairing([(TINY_JUBJUB_G1, TINY_JUBJUB_G2), (2 * TINY_JUBJUB_G1, TINY_JUBJUB_G2)]), e**3)
        with self.assertRaises(ValueError):
            multi_pairing([])


class PairingPreconditionTests(unittest.TestCase):
    def test_p_outside_r_torsion(self):
        p = next(p for p in TINY_JUBJUB.points() if not p.is_infinity() and not (5 * p).is_infinity())
        with self.assertRaises(PairingError):
            miller_loop(p, TINY_JUBJUB_G2)
        with self.assertRaises(PairingError):
            pairing(p, TINY_JUBJUB_G2)

    def test_q_in_base_subgroup(self):
        q = TINY_JUBJUB_G1.lift(TINY_JUBJUB_EXT)
        with self.assertRaises(PairingError):
            pairing(TINY_JUBJUB_G1, q)
        # unchecked, a linearly dependent Q only yields a meaningless value: the tangent at 2P vanishes at Q = 2P
        self.assertEqual(pairing(TINY_JUBJUB_G1, 2 * q, validate=False), F13_4.zero())

    def test_q_outside_r_torsion(self):
        t2 = next(p for p in TINY_JUBJUB.points() if not p.is_infinity() and p.y.is_zero())
        bad = TINY_JUBJUB_G2 + t2.lift(TINY_JUBJUB_EXT)  # order 10
        self.assertNotEqual(bad.frobenius(), bad)
        with self.assertRaises(PairingError):
            pairing(TINY_JUBJUB_G1, bad)

    def test_mismatched_curves(self):
        with self.assertRaises(PairingError):
            pairing(BLS6_6_G1, TINY_JUBJUB_G2)

    def test_multi_pairing_rejects_mixed_curves(self):
        pairs = [(TINY_JUBJUB_G1, TINY_JUBJUB_G2), (BLS6_6_G1, BLS6_6_G2)]
        with self.assertRaises(PairingError):
            multi_pairing(pairs)
        with self.assertRaises(PairingError):
            multi_pairing(pairs, validate=False)


class BLS6_6PairingTests(unittest.TestCase):
    def test_bilinearity(self):
        e = pairing(BLS6_6_G1, BLS6_6_G2)
        self.assertNotEqual(e, F43_6.one())
        self.assertEqual(e**13, F43_6.one())
        for a, b in ((2, 3), (5, 7), (12, 1)):
            self.assertEqual(pairing(a * BLS6_6_G1, b * BLS6_6_G2), e ** (a * b))

    def test_cofactor_cleared_generator(self):
        g = next(3 * p for p in BLS6_6.points() if not (3 * p).is_infinity())
        self.assertTrue((13 * g).is_infinity())
        e = pairing(g, BLS6_6_G2)
        self.assertNotEqual(e, F43_6.one())
        self.assertEqual(e**13, F43_6.one())
        self.assertEqual(BLS6_6_EXT.k, 6)


if __name__ == "__main__":
    unittest.main()
