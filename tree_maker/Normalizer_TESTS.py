import math
import unittest

from tree_maker.Normalizer import MAX_LEVELS, MIN_RADIUS, normalize, validate
from tree_maker.Properties import DEFAULT_PROPERTIES, InvalidConfiguration

class TestValidate(unittest.TestCase):

    def assertRejected(self, field, value):
        with self.assertRaises(InvalidConfiguration) as context:
            validate(DEFAULT_PROPERTIES.replace(**{field: value}))
        self.assertEqual(context.exception.field, field)

    def test_defaults_are_valid(self):
        self.assertEqual(validate(DEFAULT_PROPERTIES), DEFAULT_PROPERTIES)

    def test_whole_floats_become_ints(self):
        result = validate(DEFAULT_PROPERTIES.replace(segments=6.0, levels=1.0))
        self.assertIsInstance(result.segments, int)
        self.assertEqual(result.levels, 1)

    def test_big_seed_is_kept_exactly(self):
        seed = 2**63 + 1
        self.assertEqual(validate(DEFAULT_PROPERTIES.replace(seed=seed)).seed, seed)

    def test_huge_seed(self):
        seed = 10**400
        self.assertEqual(validate(DEFAULT_PROPERTIES.replace(seed=seed)).seed, seed)

    def test_negative_seed(self):
        normalized = normalize(DEFAULT_PROPERTIES.replace(seed=-1))
        self.assertEqual(normalized.seed, -1)
        self.assertEqual(normalized.generator_seed, 2**64 - 1)
        self.assertEqual(normalize(DEFAULT_PROPERTIES.replace(seed=5)).generator_seed, 5)

    def test_huge_levels(self):
        self.assertRejected("levels", 10**400)
        self.assertRejected("levels", MAX_LEVELS + 1)
        self.assertEqual(validate(DEFAULT_PROPERTIES.replace(levels=MAX_LEVELS)).levels, MAX_LEVELS)

    def test_huge_segments_and_steps(self):
        self.assertRejected("segments", 10**400)
        self.assertRejected("tree_steps", 10**400)
        self.assertRejected("tree_steps", 1e300)

    def test_huge_float_field(self):
        self.assertRejected("trunk_length", 10**400)

    def test_too_few_segments(self):
        self.assertRejected("segments", 2)

    def test_fractional_segments(self):
        self.assertRejected("segments", 4.5)

    def test_negative_levels(self):
        self.assertRejected("levels", -1)

    def test_single_tree_step(self):
        self.assertRejected("tree_steps", 1)

    def test_zero_radius(self):
        self.assertRejected("max_radius", 0)

    def test_not_finite(self):
        self.assertRejected("trunk_length", float("nan"))
        self.assertRejected("twist_rate", float("inf"))

    def test_bool_is_not_a_number(self):
        self.assertRejected("segments", True)

    def test_string_is_not_a_number(self):
        self.assertRejected("branch_factor", "2.45")

    def test_missing(self):
        self.assertRejected("seed", None)

    def test_fractions(self):
        self.assertRejected("clump_max", 1.5)
        self.assertRejected("radius_falloff_rate", 1)
        self.assertRejected("taper_rate", 0)

class TestNormalizedProperties(unittest.TestCase):

    def test_lengths(self):
        normalized = normalize(DEFAULT_PROPERTIES.replace(levels=3))
        self.assertEqual(len(normalized.lengths), 4)
        self.assertAlmostEqual(normalized.length_at_level(0), 0.3)
        for level in range(3):
            goal = normalized.lengths[level] ** 0.99 * 0.85
            self.assertAlmostEqual(normalized.length_at_level(level + 1), goal)

    def test_length_overflow(self):
        with self.assertRaises(InvalidConfiguration) as context:
            normalize(DEFAULT_PROPERTIES.replace(initial_branch_length=1e10, length_falloff_power=40, levels=3))
        self.assertEqual(context.exception.field, "length_falloff_power")

    def test_radii_fall_off(self):
        normalized = normalize(DEFAULT_PROPERTIES.replace(levels=3))
        self.assertEqual(normalized.radius_at_level(0), 0.05)
        for level in range(3):
            self.assertLess(normalized.radius_at_level(level + 1), normalized.radius_at_level(level))
        tiny = normalize(DEFAULT_PROPERTIES.replace(levels=MAX_LEVELS, radius_falloff_rate=0.1))
        self.assertEqual(tiny.radius_at_level(MAX_LEVELS), MIN_RADIUS)

    def test_clumps(self):
        normalized = normalize(DEFAULT_PROPERTIES.replace(levels=2))
        self.assertAlmostEqual(normalized.clump_at_level(0), 0.404)
        self.assertAlmostEqual(normalized.clump_at_level(1), (0.404 + 0.9) / 2)
        self.assertAlmostEqual(normalized.clump_at_level(2), 0.9)
        self.assertEqual(normalize(DEFAULT_PROPERTIES.replace(levels=0)).clumps, [0.0])

    def test_sections(self):
        normalized = normalize(DEFAULT_PROPERTIES)
        self.assertEqual(normalized.sections_at_level(0), 8)
        self.assertAlmostEqual(normalized.trunk_step, 0.5 / 7)
        for level in range(1, normalized.levels + 1):
            count = normalized.sections_at_level(level)
            self.assertGreaterEqual(count, 2)
            self.assertLessEqual(count, 8)
            self.assertEqual(count, min(8, 1 + math.ceil(normalized.length_at_level(level) / normalized.trunk_step)))

if __name__ == '__main__':
    unittest.main()
