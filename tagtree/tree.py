"""
Recursive tag tree builder.

Each call picks the tag name with the highest information gain over the
current items, splits the items by that name's values (plus an "undefined"
bucket) and recurses on every non-empty part with the chosen name removed
from the catalogue. Nodes are frozen once returned.
"""

import sys
from dataclasses import dataclass
from typing import Dict, Tuple

from .entropy import best_tag_name, gain_report, partition, probability

MIN_GAIN_FOR_SPLIT = 0.001
PURE_SPLIT_GAIN = 1.0
UNDEFINED_EDGE = "undefined"


# ---------------------
# Tree structures
# ---------------------
@dataclass(frozen=True)
class Leaf:
    items: Tuple = ()

    @property
    def name(self):
        return ""


@dataclass(frozen=True)
class Branch:
    """Connection from an internal node to one child."""

    node: object
    edge: str
    probability: float


@dataclass(frozen=True)
class Internal:
    name: str
    gains: Dict[str, float]
    branches: Tuple[Branch, ...] = ()


def is_leaf(node):
    return isinstance(node, Leaf)


def iter_leaves(node):
    """Yield every leaf below `node`, depth-first in build order."""
    if is_leaf(node):
        yield node
        return
    for branch in node.branches:
        yield from iter_leaves(branch.node)


# ---------------------
# Recursive tree builder
# ---------------------
def build_tree(catalogue, items, verbose=False, depth=0):
    """
    Build the tag tree for the given items.

    Args:
      catalogue: tag name -> list of distinct Tag values still available
      items    : ordered item collection for this node
      verbose  : print split progress to stderr
      depth    : current depth (0 at root)

    Returns:
      Leaf or Internal node for these items.
    """
    items = tuple(items)
    gains = gain_report(catalogue, items)
    best, gain = best_tag_name(gains)

    # Stopping conditions (exact float comparisons)
    if best is None or gain < MIN_GAIN_FOR_SPLIT or gain == PURE_SPLIT_GAIN:
        if verbose:
            print(f"[depth {depth}] Leaf with {len(items)} items", file=sys.stderr)
        return Leaf(items)

    if verbose:
        print(f"[depth {depth}] Split on '{best}' (G={gain:.4f}) over {len(items)} items",
              file=sys.stderr)

    reduced = {name: values for name, values in catalogue.items() if name != best}
    parts, undefined = partition(best, catalogue, items)

    branches = []
    for tag, subset in parts:
        if not subset:
            continue
        child = build_tree(reduced, subset, verbose=verbose, depth=depth + 1)
        branches.append(Branch(child, tag.value, probability(subset, items)))
    if undefined:
        child = build_tree(reduced, undefined, verbose=verbose, depth=depth + 1)
        branches.append(Branch(child, UNDEFINED_EDGE, probability(undefined, items)))

    return Internal(best, dict(gains), tuple(branches))
