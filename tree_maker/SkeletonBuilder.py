"""
Grows a Skeleton from NormalizedProperties.\n
All randomness comes from the one numpy Generator made in build_skeleton and handed down to every step,
so the same properties always grow the same tree.\n
The shape of the tree (how many branches, sections and twigs) never depends on the seed - only where things point does.
"""

import logging
import math
from typing import List

import numpy as np

from tree_maker.Branch import Branch, Section, TwigPlacement, twig_count
from tree_maker.Interpolate import lerp
from tree_maker.Normalizer import MIN_RADIUS, NormalizedProperties
from tree_maker.Skeleton import Skeleton
from tree_maker.Vec3 import Vec3

_LOGGER = logging.getLogger(__name__)

TWIG_DENSITY = 20.0
"""twigs per unit of branch length per unit of twig_scale"""
TWIG_TILT = 0.3
"""how much of straight up is mixed into a twig's facing"""


class ChildCounter:
    """Hands out how many children each section gets.\n
    The fractional part of branch_factor is carried from one section to the next, so over n sections the
    total is always within 1 of n * branch_factor and no section ever gets a negative count."""
    mean: float
    _carry: float

    def __init__(self, mean: float):
        self.mean = mean
        self._carry = 0.5

    def next(self) -> int:
        total = self._carry + self.mean
        count = math.floor(total)
        self._carry = total - count
        return count


def _turned(direction: Vec3, bias: Vec3) -> Vec3:
    """direction nudged by bias, kept at length 1. If they cancel out the direction is left alone"""
    result = (direction + bias).normalize_or_zero()
    if result.magnitude() == 0:
        return direction
    return result


def grow_trunk(skeleton: Skeleton, normalized: NormalizedProperties, rand: np.random.Generator) -> Branch:
    """tree_steps sections from the origin, heading up.\n
    Every step the heading kinks around a sideways axis, that axis twists around the trunk, and climb_rate pulls the heading back up."""
    properties = normalized.properties
    twist_per_step = math.tau * properties.twist_rate / properties.tree_steps

    position = Vec3.zero()
    direction = Vec3.Y()
    sideways = Vec3.X()
    sections: List[Section] = []
    for step in range(properties.tree_steps):
        radius = max(properties.max_radius * properties.taper_rate ** step, MIN_RADIUS)
        sections.append(Section(position, direction, radius))
        position = position + direction * normalized.trunk_step

        sideways = sideways.rotate_around(direction, twist_per_step).reject(direction).normalize_or_zero()
        if sideways.magnitude() == 0:
            sideways = direction.to_arbitrary_perpendicular()
        kink = properties.trunk_kink * rand.uniform(-1.0, 1.0)
        direction = _turned(direction.rotate_around(sideways, kink), Vec3.Y(properties.climb_rate))

    trunk = Branch(skeleton.next_handle(), 0, sections, terminal=False)
    skeleton.add(trunk)
    return trunk


def child_direction(normalized: NormalizedProperties, tangent: Vec3, level: int, section_index: int, rand: np.random.Generator) -> Vec3:
    """Which way a child on `level` starts out from a parent section heading along tangent.\n
    A random way out from the parent (turned sweep_amount of a full turn further for every section up the parent)
    is slerped toward the parent's heading by the level's clump, then grow (up) and drop (down) are added on."""
    properties = normalized.properties
    azimuth = math.tau * (rand.random() + properties.sweep_amount * section_index)
    outward = tangent.to_arbitrary_perpendicular().rotate_around(tangent, azimuth)

    # outward is perpendicular to tangent, so this rotation is a slerp from tangent (clump 1) to outward (clump 0)
    clump = normalized.clump_at_level(level)
    direction = tangent.rotate_around(tangent.cross(outward), (1 - clump) * math.pi / 2)

    return _turned(direction, _bias(normalized, level))


def _bias(normalized: NormalizedProperties, level: int) -> Vec3:
    """grow is strongest close to the trunk, drop is strongest out at the tips"""
    properties = normalized.properties
    levels = normalized.levels
    grow = properties.grow_amount * ((levels - level + 1) / levels) ** 2
    drop = properties.drop_amount * (level / levels)
    return Vec3.Y(grow - drop)


def grow_child(skeleton: Skeleton, normalized: NormalizedProperties, parent: Branch, section_index: int, direction: Vec3, radius: float) -> Branch:
    """A branch one level below parent, starting on parent.sections[section_index].\n
    It bends a little more toward the level's bias every section."""
    level = parent.level + 1
    count = normalized.sections_at_level(level)
    step = normalized.length_at_level(level) / (count - 1)
    bend = _bias(normalized, level) / (count - 1)

    position = parent.sections[section_index].position
    sections: List[Section] = []
    for index in range(count):
        section_radius = max(radius * normalized.properties.taper_rate ** index, MIN_RADIUS)
        sections.append(Section(position, direction, section_radius))
        position = position + direction * step
        if index < count - 2:
            direction = _turned(direction, bend)

    child = Branch(
        skeleton.next_handle(),
        level,
        sections,
        parent=parent.handle,
        parent_section=section_index,
        terminal=level == normalized.levels,
    )
    skeleton.add(child)
    return child


def split(skeleton: Skeleton, normalized: NormalizedProperties, branch: Branch, counter: ChildCounter, rand: np.random.Generator) -> None:
    """Grows children off every section of branch but its first, then their children, down to the last level"""
    if branch.level >= normalized.levels:
        return
    level = branch.level + 1
    falloff = normalized.properties.radius_falloff_rate

    for section_index in range(1, len(branch.sections)):
        count = counter.next()
        section = branch.sections[section_index]
        radius = min(normalized.radius_at_level(level), section.radius * falloff)
        if radius < MIN_RADIUS:
            # too thin to carry anything
            continue
        for _ in range(count):
            direction = child_direction(normalized, section.direction, level, section_index, rand)
            child = grow_child(skeleton, normalized, branch, section_index, direction, radius)
            split(skeleton, normalized, child, counter, rand)


def scatter_twigs(skeleton: Skeleton, normalized: NormalizedProperties, rand: np.random.Generator) -> None:
    """Puts twigs on the last section of every terminal branch, sitting on its surface and facing out"""
    properties = normalized.properties
    for branch in skeleton.walk():
        if not branch.terminal:
            continue
        count = twig_count(normalized.length_at_level(branch.level), properties.twig_scale, TWIG_DENSITY)
        before, after = branch.sections[-2], branch.sections[-1]
        tangent = before.direction
        for _ in range(count):
            along = rand.random()
            center = before.position.lerp(after.position, along)
            radius = lerp(before.radius, after.radius, along)
            radial = tangent.to_arbitrary_perpendicular().rotate_around(tangent, rand.random() * math.tau)
            normal = (radial + Vec3.Y(TWIG_TILT)).normalize()
            skeleton.twigs.append(TwigPlacement(branch.handle, center + radial * radius, normal, tangent))


def build_skeleton(normalized: NormalizedProperties) -> Skeleton:
    """trunk, then branches, then twigs"""
    rand = np.random.default_rng(normalized.generator_seed)
    skeleton = Skeleton()
    trunk = grow_trunk(skeleton, normalized, rand)
    split(skeleton, normalized, trunk, ChildCounter(normalized.properties.branch_factor), rand)
    scatter_twigs(skeleton, normalized, rand)
    _LOGGER.debug("Grew %r from seed %d", skeleton, normalized.seed)
    return skeleton
