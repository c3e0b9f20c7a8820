import unittest

from glassbatch.normalize import normalize_fractions


class TestNormalize(unittest.TestCase):
    def test_rescales_to_100(self):
        result = normalize_fractions([30.0, 10.0, 50.0])
        self.assertTrue(result.was_rescaled)
        self.assertAlmostEqual(sum(result.fractions), 100.0, delta=1e-3)
        self.assertAlmostEqual(result.fractions[0], 30.0 * 100.0 / 90.0)

    def test_idempotent(self):
        once = normalize_fractions([1.0, 2.0, 4.0])
        twice = normalize_fractions(once.fractions)
        self.assertFalse(twice.was_rescaled)
        self.assertEqual(twice.fractions, once.fractions)

    def test_all_zero_unchanged(self):
        result = normalize_fractions([0.0, 0.0])
        self.assertFalse(result.was_rescaled)
        self.assertEqual(result.fractions, (0.0, 0.0))

    def test_within_tolerance_unchanged(self):
        result = normalize_fractions([50.0, 50.0005])
        self.assertFalse(result.was_rescaled)
        self.assertEqual(result.fractions, (50.0, 50.0005))

    def test_just_outside_tolerance_rescales(self):
        self.assertTrue(normalize_fractions([50.0, 50.002]).was_rescaled)

    def test_non_finite_total_unchanged(self):
        for values in ([float("nan"), 10.0], [float("inf"), 10.0]):
            with self.subTest(values=values):
                result = normalize_fractions(values)
                self.assertFalse(result.was_rescaled)
                self.assertEqual(result.fractions[1], 10.0)

    def test_empty(self):
        result = normalize_fractions([])
        self.assertEqual(result.fractions, ())
        self.assertFalse(result.was_rescaled)


if __name__ == '__main__':
    unittest.main()
