"""
Skeleton is the whole branching structure of one tree: an arena of Branches addressed by handle, plus the twig placements.
"""

from typing import Iterator, List

from tree_maker.Branch import Branch, TwigPlacement


class Skeleton:
    branches: List[Branch]
    """handle i is branches[i]. The trunk is handle 0"""
    twigs: List[TwigPlacement]

    def __init__(self):
        self.branches = []
        self.twigs = []

    def add(self, branch: Branch) -> int:
        """stores the branch under its handle (which must be the next free one) and hooks it to its parent"""
        if branch.handle != len(self.branches):
            raise ValueError(f"Expected handle {len(self.branches)}, got {branch.handle}")
        if branch.parent is not None:
            self.branches[branch.parent].children.append(branch.handle)
        self.branches.append(branch)
        return branch.handle

    def next_handle(self) -> int:
        return len(self.branches)

    def is_empty(self) -> bool:
        return len(self.branches) == 0

    @property
    def trunk(self) -> Branch:
        return self.branches[0]

    def __getitem__(self, handle: int) -> Branch:
        return self.branches[handle]

    def __len__(self) -> int:
        return len(self.branches)

    def __iter__(self) -> Iterator[Branch]:
        return iter(self.branches)

    def walk(self) -> Iterator[Branch]:
        """every branch, parents before their children (pre-order from the trunk)"""
        if self.is_empty():
            return
        stack = [0]
        while stack:
            branch = self.branches[stack.pop()]
            yield branch
            stack.extend(reversed(branch.children))

    def terminal_branches(self) -> List[Branch]:
        return [branch for branch in self.branches if branch.terminal]

    def max_level(self) -> int:
        return max((branch.level for branch in self.branches), default=0)

    def section_count(self) -> int:
        return sum(len(branch.sections) for branch in self.branches)

    def toDict(self) -> dict:
        return {
            "branches": [branch.toDict() for branch in self.branches],
            "twigs": [twig.toDict() for twig in self.twigs],
        }

    def __repr__(self) -> str:
        return f"Skeleton<branches:{len(self.branches)} sections:{self.section_count()} twigs:{len(self.twigs)}>"
