"""
Checks a Properties and works out the numbers every level of the tree needs.\n
normalize() is pure and cheap - it is run fresh on every generation rather than remembered between them.
"""

import math
import numbers
from typing import Any, Callable, List, Optional

from tree_maker.Interpolate import clamp, lerp
from tree_maker.Properties import InvalidConfiguration, Properties

MIN_RADIUS = 1e-6
"""no section is ever thinner than this. A radius of 0 makes rings with no area"""

MAX_SEGMENTS = 1024
MAX_LEVELS = 16
MAX_TREE_STEPS = 4096
"""the biggest segments, levels and tree_steps accepted. Past these a tree would not fit in memory"""

SEED_MODULUS = 2**64
"""negative seeds wrap around into numpy's seed range the way a 64 bit unsigned integer would"""


def _number(properties: Properties, name: str) -> float:
    value: Any = getattr(properties, name)
    if value is None:
        raise InvalidConfiguration(name, "is missing")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfiguration(name, f"must be a number, got {type(value).__name__}")
    try:
        value = float(value)
    except OverflowError:
        raise InvalidConfiguration(name, "must be finite, got a number too big for a float") from None
    if not math.isfinite(value):
        raise InvalidConfiguration(name, f"must be finite, got {value}")
    return value


def _integer(properties: Properties, name: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """whole numbers only. Python ints are checked exactly and never go through a float"""
    raw: Any = getattr(properties, name)
    if isinstance(raw, numbers.Integral) and not isinstance(raw, bool):
        whole = int(raw)
    else:
        value = _number(properties, name)
        if not value.is_integer():
            raise InvalidConfiguration(name, f"must be a whole number, got {value}")
        whole = int(value)
    if minimum is not None and whole < minimum:
        raise InvalidConfiguration(name, f"must be at least {minimum}")
    if maximum is not None and whole > maximum:
        raise InvalidConfiguration(name, f"must be at most {maximum}")
    return whole


def _ranged(properties: Properties, name: str, check: Callable[[float], bool], description: str) -> float:
    value = _number(properties, name)
    if not check(value):
        raise InvalidConfiguration(name, f"must be {description}, got {value}")
    return value


def _positive(properties: Properties, name: str) -> float:
    return _ranged(properties, name, lambda v: v > 0, "greater than 0")


def _not_negative(properties: Properties, name: str) -> float:
    return _ranged(properties, name, lambda v: v >= 0, "at least 0")


def _fraction(properties: Properties, name: str) -> float:
    return _ranged(properties, name, lambda v: 0 <= v <= 1, "between 0 and 1")


def validate(properties: Properties) -> Properties:
    """Returns a copy of properties with every value checked and turned into a plain int/float.\n
    Raises InvalidConfiguration on the first bad value."""
    return Properties(
        seed=_integer(properties, "seed"),
        segments=_integer(properties, "segments", 3, MAX_SEGMENTS),
        levels=_integer(properties, "levels", 0, MAX_LEVELS),
        initial_branch_length=_positive(properties, "initial_branch_length"),
        length_falloff_factor=_positive(properties, "length_falloff_factor"),
        length_falloff_power=_positive(properties, "length_falloff_power"),
        clump_max=_fraction(properties, "clump_max"),
        clump_min=_fraction(properties, "clump_min"),
        branch_factor=_not_negative(properties, "branch_factor"),
        drop_amount=_number(properties, "drop_amount"),
        grow_amount=_number(properties, "grow_amount"),
        sweep_amount=_number(properties, "sweep_amount"),
        max_radius=_positive(properties, "max_radius"),
        radius_falloff_rate=_ranged(properties, "radius_falloff_rate", lambda v: 0 < v < 1, "between 0 and 1 (exclusive)"),
        taper_rate=_ranged(properties, "taper_rate", lambda v: 0 < v <= 1, "greater than 0 and at most 1"),
        climb_rate=_not_negative(properties, "climb_rate"),
        trunk_kink=_not_negative(properties, "trunk_kink"),
        twist_rate=_number(properties, "twist_rate"),
        trunk_length=_positive(properties, "trunk_length"),
        tree_steps=_integer(properties, "tree_steps", 2, MAX_TREE_STEPS),
        v_multiplier=_number(properties, "v_multiplier"),
        twig_scale=_not_negative(properties, "twig_scale"),
    )


class NormalizedProperties:
    """Checked properties plus one row per level (0 is the trunk, `levels` the last children)"""
    properties: Properties
    lengths: List[float]
    """length of a branch at each level. The trunk uses trunk_length instead of lengths[0]"""
    radii: List[float]
    """the thickest a branch at each level starts at"""
    clumps: List[float]
    sections: List[int]
    """how many sections a branch at each level is cut into"""
    trunk_step: float
    """distance between trunk sections"""

    def __init__(self, properties: Properties):
        self.properties = properties
        levels = properties.levels
        self.trunk_step = properties.trunk_length / (properties.tree_steps - 1)

        self.lengths = [properties.initial_branch_length]
        for _ in range(levels):
            previous = self.lengths[-1]
            try:
                length = previous ** properties.length_falloff_power * properties.length_falloff_factor
            except OverflowError:
                length = math.inf
            if not math.isfinite(length):
                raise InvalidConfiguration("length_falloff_power", f"branch length overflows by level {len(self.lengths)}")
            self.lengths.append(length)

        self.radii = [max(properties.max_radius * properties.radius_falloff_rate ** level, MIN_RADIUS) for level in range(levels + 1)]

        self.clumps = [
            lerp(properties.clump_min, properties.clump_max, level / levels) if levels > 0 else 0.0
            for level in range(levels + 1)
        ]

        self.sections = [properties.tree_steps]
        for level in range(1, levels + 1):
            count = 1 + math.ceil(self.lengths[level] / self.trunk_step)
            self.sections.append(int(clamp(count, 2, properties.tree_steps)))

    @property
    def seed(self) -> int:
        return self.properties.seed

    @property
    def generator_seed(self) -> int:
        """seed as numpy takes it - never negative"""
        return self.properties.seed % SEED_MODULUS if self.properties.seed < 0 else self.properties.seed

    @property
    def levels(self) -> int:
        return self.properties.levels

    def length_at_level(self, level: int) -> float:
        return self.lengths[level]

    def radius_at_level(self, level: int) -> float:
        return self.radii[level]

    def clump_at_level(self, level: int) -> float:
        return self.clumps[level]

    def sections_at_level(self, level: int) -> int:
        return self.sections[level]

    def __repr__(self) -> str:
        return f"NormalizedProperties<levels:{self.levels} lengths:{self.lengths} radii:{self.radii} sections:{self.sections}>"


def normalize(properties: Properties) -> NormalizedProperties:
    """validate() then build the per level table"""
    return NormalizedProperties(validate(properties))
