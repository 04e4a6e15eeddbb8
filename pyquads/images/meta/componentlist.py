from typing import Iterator, List, Sequence

from pyquads.utils.components import Component


class ComponentList:
    """Connected components of an image mask, in the same order as the rows of the component catalog."""

    __module__ = "pyquads.images.meta"

    def __init__(self, components: Sequence[Component]):
        self.components: List[Component] = list(components)

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __getitem__(self, idx: int) -> Component:
        return self.components[idx]


__all__ = ["ComponentList"]
