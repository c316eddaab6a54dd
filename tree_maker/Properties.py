"""
Properties is the parameter set a tree is grown from.\n
It is a frozen record - editing a parameter means making a new one with replace() and growing the tree again.\n
Keys can be written the way the browser demo wrote them (camelCase, "initalBranchLength" included) or as python field names.
"""

import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

_LOGGER = logging.getLogger(__name__)


class InvalidConfiguration(ValueError):
    """A parameter is missing, not a finite number, or outside of what makes a physical tree.\n
    Raised before any of the tree is grown."""

    field: str

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


@dataclass(frozen=True)
class Properties:
    seed: int
    """seeds the random generator. Any whole number, negative ones wrap around to seed + 2**64. Same seed and same everything else means the same tree"""
    segments: int
    """verts around every ring of the branch mesh"""
    levels: int
    """how many times branches split off branches. 0 is a bare trunk"""
    initial_branch_length: float
    length_falloff_factor: float
    length_falloff_power: float
    """child length = parent length ** power * factor"""
    clump_max: float
    clump_min: float
    """how hard children hug their parent's direction, from the first level (min) to the last (max)"""
    branch_factor: float
    """average children per parent section"""
    drop_amount: float
    grow_amount: float
    sweep_amount: float
    max_radius: float
    radius_falloff_rate: float
    taper_rate: float
    climb_rate: float
    trunk_kink: float
    twist_rate: float
    trunk_length: float
    tree_steps: int
    """sections in the trunk"""
    v_multiplier: float
    twig_scale: float

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'Properties':
        """Builds Properties from camelCase or snake_case keys. Keys that are not parameters (like colors) are ignored.\n
        Missing parameters raise InvalidConfiguration naming the python field, like every other bad value."""
        values: Dict[str, Any] = {}
        for field in dataclasses.fields(Properties):
            for key in (field.name, *_KEY_ALIASES[field.name]):
                if key in data:
                    values[field.name] = data[key]
                    break
            else:
                raise InvalidConfiguration(field.name, f"is missing (looked for {', '.join((field.name, *_KEY_ALIASES[field.name]))})")
        return Properties(**values)

    @staticmethod
    def from_json(path: str) -> 'Properties':
        """reads a json object of parameters, see from_dict"""
        _LOGGER.debug("Reading tree properties from %s", path)
        with open(path, mode="r", encoding="utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, dict):
            raise InvalidConfiguration("<root>", f"{path} does not hold a json object")
        return Properties.from_dict(data)

    def replace(self, **changes: Any) -> 'Properties':
        """A copy with some fields changed. Use python field names."""
        return dataclasses.replace(self, **changes)

    def toDict(self) -> dict:
        """camelCase keys, the same shape from_dict and the browser demo read"""
        return {_KEY_ALIASES[field.name][0]: getattr(self, field.name) for field in dataclasses.fields(self)}


_KEY_ALIASES = {
    "seed": ("seed",),
    "segments": ("segments",),
    "levels": ("levels",),
    "initial_branch_length": ("initialBranchLength", "initalBranchLength"),
    "length_falloff_factor": ("lengthFalloffFactor",),
    "length_falloff_power": ("lengthFalloffPower",),
    "clump_max": ("clumpMax",),
    "clump_min": ("clumpMin",),
    "branch_factor": ("branchFactor",),
    "drop_amount": ("dropAmount",),
    "grow_amount": ("growAmount",),
    "sweep_amount": ("sweepAmount",),
    "max_radius": ("maxRadius",),
    "radius_falloff_rate": ("radiusFalloffRate",),
    "taper_rate": ("taperRate",),
    "climb_rate": ("climbRate",),
    "trunk_kink": ("trunkKink",),
    "twist_rate": ("twistRate",),
    "trunk_length": ("trunkLength",),
    "tree_steps": ("treeSteps",),
    "v_multiplier": ("vMultiplier",),
    "twig_scale": ("twigScale",),
}
"""python field name -> keys it can be read from. The first one is what toDict writes"""


# the demo's stock parameters at the moment the seed sprouts (radius 0.05)
DEFAULT_PROPERTIES = Properties(
    seed=256,
    segments=6,
    levels=2,
    initial_branch_length=0.3,
    length_falloff_factor=0.85,
    length_falloff_power=0.99,
    clump_max=0.9,
    clump_min=0.404,
    branch_factor=2.45,
    drop_amount=-0.1,
    grow_amount=0.235,
    sweep_amount=0.01,
    max_radius=0.05,
    radius_falloff_rate=0.5,
    taper_rate=0.947,
    climb_rate=0.125,
    trunk_kink=0.093,
    twist_rate=3.02,
    trunk_length=0.5,
    tree_steps=8,
    v_multiplier=2.36,
    twig_scale=0.125,
)
