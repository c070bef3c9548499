import unittest

from quicktions import Fraction as QFraction  # type: ignore

from matrixtools.utils import gcd, lcm


class TestUtils(unittest.TestCase):

    def test_gcd(self):
        self.assertEqual(gcd(12, 18), 6)
        self.assertEqual(gcd(-12, 18), 6)
        self.assertEqual(gcd(12, -18), 6)
        self.assertEqual(gcd(0, 7), 7)
        self.assertEqual(gcd(0, -7), 7)
        self.assertEqual(gcd(17, 5), 1)

    def test_gcd_zero_second(self):
        # base case returns first argument as is
        self.assertEqual(gcd(5, 0), 5)
        self.assertEqual(gcd(-5, 0), -5)
        self.assertEqual(gcd(0, 0), 0)

    def test_gcd_agrees_with_reduction(self):
        for n in range(-20, 21):
            for d in range(1, 21):
                g = gcd(n, d)
                q = QFraction(n, d)
                self.assertEqual((n // g, d // g), (q.numerator, q.denominator))

    def test_lcm(self):
        self.assertEqual(lcm(4, 6), 12)
        self.assertEqual(lcm(2, 3), 6)
        self.assertEqual(lcm(5, 5), 5)
        self.assertEqual(lcm(1, 9), 9)
        self.assertEqual(lcm(0, 3), 0)

    def test_lcm_zero_zero(self):
        with self.assertRaises(ZeroDivisionError):
            lcm(0, 0)
