"""
Item and tag records shared by the loader, the entropy calculator and the
tree builder.

Tags are a closed set of three kinds; every kind resolves to a plain string
value so partitions and edges never need to know which kind they hold.
"""

from dataclasses import dataclass
from enum import Enum

PRESENCE_VALUE = "defined"


class TagKind(Enum):
    PRESENCE = "presence"
    CATEGORICAL = "categorical"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class Tag:
    """A named attribute with its resolved string value."""

    kind: TagKind
    name: str
    value: str

    @classmethod
    def presence(cls, name):
        return cls(TagKind.PRESENCE, name, PRESENCE_VALUE)

    @classmethod
    def categorical(cls, name, value):
        return cls(TagKind.CATEGORICAL, name, value)

    @classmethod
    def numeric(cls, name, number: int):
        return cls(TagKind.NUMERIC, name, str(number))

    def __str__(self):
        if self.kind is TagKind.PRESENCE:
            return self.name
        return f"{self.name}={self.value}"


@dataclass(frozen=True)
class Item:
    """A weighted, tagged unit (a file). Weight is its access count."""

    identifier: str
    weight: int
    tags: frozenset = frozenset()

    def holds(self, tag: Tag) -> bool:
        return tag in self.tags


def total_weight(items):
    return sum(item.weight for item in items)


def build_catalogue(items):
    """
    Group every distinct tag in the collection under its name.

    Args:
        items: Ordered item collection for one run.
    Returns:
        Dict mapping tag name -> list of distinct Tag values, both in
        first-seen order (items in order, each item's tags sorted).
    """
    catalogue = {}
    for item in items:
        for tag in sorted(item.tags, key=lambda t: (t.name, t.kind.value, t.value)):
            values = catalogue.setdefault(tag.name, [])
            if tag not in values:
                values.append(tag)
    return catalogue
