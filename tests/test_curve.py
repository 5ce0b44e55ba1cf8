import os
import unittest

from EdSig.Cryptography.Errors import NonCanonicalError, IdentityElementError, WeakPublicKeyError, InvalidEncodingError
from EdSig.Cryptography.edwards25519 import field, scalar
from EdSig.Cryptography.edwards25519.curve import Edwards25519, BASE_POINT, NEUTRAL_ELEMENT

P_BYTES = bytes.fromhex("edffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f")
L_BYTES = bytes.fromhex("edd3f55c1a631258d69cf7a2def9de1400000000000000000000000000000010")

BASE_POINT_BYTES = bytes.fromhex("5866666666666666666666666666666666666666666666666666666666666666")
NEUTRAL_BYTES    = bytes.fromhex("0100000000000000000000000000000000000000000000000000000000000000")
ORDER_2_BYTES    = bytes.fromhex("ec"+"ff"*31)
ORDER_8_BYTES    = bytes.fromhex("c7176a703d4dd84fba3c0b760d10670f2a2053fa2c39ccc64ec7fd7792ac03fa")

def scalar_bytes(n):
    return n.to_bytes(32, "little")

def on_curve(point):
    zi = field.inv(point.z)
    x = point.x * zi % field.P
    y = point.y * zi % field.P
    return (-x*x + y*y - 1 - field.D*x*x*y*y) % field.P == 0

class TestField(unittest.TestCase):
    def test_constants(self):
        self.assertEqual(field.to_bytes(field.P), bytes(32))
        self.assertEqual(field.SQRT_M1 * field.SQRT_M1 % field.P, field.P - 1)
        self.assertEqual(field.D * 121666 % field.P, (field.P - 121665) % field.P)

    def test_canonical_encodings(self):
        field.reject_non_canonical(bytes(32))
        field.reject_non_canonical(ORDER_2_BYTES[:31]+b"\x7f")
        # The sign bit is not part of the field element
        field.reject_non_canonical(ORDER_2_BYTES)

    def test_non_canonical_encodings(self):
        for encoding in [
            P_BYTES,
            P_BYTES[:31]+b"\xff",
            b"\xee"+P_BYTES[1:],
            b"\xff"*31+b"\x7f",
            b"\xff"*32,
        ]:
            with self.assertRaises(NonCanonicalError):
                field.reject_non_canonical(encoding)

    def test_from_bytes_reduces(self):
        self.assertEqual(field.from_bytes(P_BYTES), 0)
        self.assertEqual(field.from_bytes(b"\xee"+P_BYTES[1:]), 1)
        self.assertEqual(field.from_bytes(b"\x05"+bytes(30)+b"\x80"), 5)

    def test_inverse(self):
        for i in range(20):
            x = int.from_bytes(os.urandom(32), "little") % field.P
            if x != 0:
                self.assertEqual(x * field.inv(x) % field.P, 1)

    def test_sqrt_ratio(self):
        x = field.sqrt_ratio(4, 1)
        self.assertIn(x, [2, field.P - 2])

        x = field.sqrt_ratio(field.P - 4, 1)
        self.assertEqual(x * x % field.P, field.P - 4)

        self.assertEqual(field.sqrt_ratio(0, 1), 0)

        # 2 is not a square modulo p
        with self.assertRaises(InvalidEncodingError):
            field.sqrt_ratio(2, 1)

    def test_lengths(self):
        self.assertRaises(ValueError, field.from_bytes, bytes(31))
        self.assertRaises(ValueError, field.reject_non_canonical, bytes(33))


class TestScalar(unittest.TestCase):
    def test_canonical(self):
        scalar.reject_non_canonical(scalar.ZERO)
        scalar.reject_non_canonical(scalar_bytes(scalar.L - 1))
        self.assertEqual(scalar_bytes(scalar.L), L_BYTES)

        for encoding in [L_BYTES, scalar_bytes(scalar.L + 1), b"\xff"*32]:
            with self.assertRaises(NonCanonicalError):
                scalar.reject_non_canonical(encoding)

    def test_reduce(self):
        self.assertEqual(scalar.reduce(L_BYTES), scalar.ZERO)
        self.assertEqual(scalar.reduce(scalar_bytes(scalar.L + 7)), scalar_bytes(7))
        self.assertEqual(scalar.reduce64(L_BYTES+bytes(32)), scalar.ZERO)

        wide = os.urandom(64)
        self.assertEqual(scalar.reduce64(wide), scalar_bytes(int.from_bytes(wide, "little") % scalar.L))

    def test_clamp(self):
        self.assertEqual(scalar.clamp(b"\xff"*32), b"\xf8"+b"\xff"*30+b"\x7f")
        self.assertEqual(scalar.clamp(scalar.ZERO), bytes(31)+b"\x40")

    def test_arithmetic(self):
        a = scalar_bytes(2)
        b = scalar_bytes(3)
        c = scalar_bytes(4)
        self.assertEqual(scalar.mul_add(a, b, c), scalar_bytes(10))
        self.assertEqual(scalar.mul(a, b), scalar_bytes(6))
        self.assertEqual(scalar.add(a, b), scalar_bytes(5))
        self.assertEqual(scalar.mul8(b), scalar_bytes(24))

        minus_one = scalar_bytes(scalar.L - 1)
        self.assertEqual(scalar.mul(minus_one, minus_one), scalar_bytes(1))
        self.assertEqual(scalar.add(minus_one, scalar_bytes(1)), scalar.ZERO)
        self.assertEqual(scalar.mul_add(minus_one, scalar_bytes(1), scalar_bytes(1)), scalar.ZERO)

    def test_lengths(self):
        self.assertRaises(ValueError, scalar.reduce, bytes(64))
        self.assertRaises(ValueError, scalar.reduce64, bytes(32))
        self.assertRaises(ValueError, scalar.clamp, bytes(16))
        self.assertRaises(ValueError, scalar.mul, bytes(32), bytes(31))


class TestEdwards25519(unittest.TestCase):
    def test_encodings(self):
        self.assertEqual(BASE_POINT.to_bytes(), BASE_POINT_BYTES)
        self.assertEqual(NEUTRAL_ELEMENT.to_bytes(), NEUTRAL_BYTES)
        self.assertEqual(Edwards25519.from_bytes(BASE_POINT_BYTES), BASE_POINT)
        self.assertEqual(Edwards25519.from_bytes(NEUTRAL_BYTES), NEUTRAL_ELEMENT)
        self.assertTrue(on_curve(BASE_POINT))

    def test_group_order(self):
        p = BASE_POINT.mul(L_BYTES)
        self.assertEqual(p, NEUTRAL_ELEMENT)
        self.assertRaises(IdentityElementError, p.reject_identity)
        BASE_POINT.reject_identity()

    def test_group_law(self):
        b2 = BASE_POINT.dbl()
        self.assertEqual(BASE_POINT.add(BASE_POINT), b2)
        self.assertEqual(BASE_POINT.mul(scalar_bytes(2)), b2)
        self.assertEqual(b2.sub(BASE_POINT), BASE_POINT)
        self.assertEqual(BASE_POINT.add(NEUTRAL_ELEMENT), BASE_POINT)
        self.assertEqual(BASE_POINT.add(BASE_POINT.neg()), NEUTRAL_ELEMENT)
        self.assertTrue(on_curve(b2))
        self.assertEqual(Edwards25519.from_bytes(b2.to_bytes()), b2)

    def test_generic_and_base_multiplication_agree(self):
        generic = Edwards25519.from_bytes(BASE_POINT_BYTES)
        self.assertFalse(generic.is_base)
        for i in range(4):
            s = os.urandom(32)
            self.assertEqual(generic.mul(s), BASE_POINT.mul(s))

    def test_clamped_multiplication(self):
        s = os.urandom(32)
        self.assertEqual(BASE_POINT.clamped_mul(s), BASE_POINT.mul(scalar.clamp(s)))

    def test_small_order_points(self):
        p = Edwards25519.from_bytes(ORDER_8_BYTES)
        self.assertTrue(on_curve(p))
        p.reject_identity()
        self.assertEqual(p.clear_cofactor(), NEUTRAL_ELEMENT)

        with self.assertRaises(WeakPublicKeyError):
            p.mul(scalar_bytes(5))
        self.assertTrue(issubclass(WeakPublicKeyError, IdentityElementError))

        self.assertEqual(p.mul(scalar_bytes(8), reject_weak=False), NEUTRAL_ELEMENT)

    def test_order_2_point(self):
        p = Edwards25519.from_bytes(ORDER_2_BYTES)
        q = Edwards25519.from_bytes(ORDER_2_BYTES[:31]+b"\x7f")
        self.assertEqual(p, q)
        self.assertRaises(IdentityElementError, p.reject_identity)
        self.assertEqual(p.dbl(), NEUTRAL_ELEMENT)
        Edwards25519.reject_non_canonical(ORDER_2_BYTES)

    def test_invalid_encodings(self):
        failures = 0
        for y in range(2, 64):
            try:
                p = Edwards25519.from_bytes(field.to_bytes(y))
                self.assertTrue(on_curve(p))
            except InvalidEncodingError:
                failures += 1

        self.assertGreater(failures, 0)

    def test_lengths(self):
        self.assertRaises(ValueError, Edwards25519.from_bytes, bytes(31))
        self.assertRaises(ValueError, BASE_POINT.mul, bytes(64))


if __name__ == '__main__':
    unittest.main(verbosity=2)
