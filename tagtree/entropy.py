"""
Weighted entropy and information gain over item collections.

The probability mass of an item is its weight divided by the total weight
of the collection being measured. Partitions are taken per tag name: one
sub-collection per registered value of that name, plus the "undefined"
bucket for items holding none of them.
"""

import numpy as np

from .model import total_weight


# ---------------------
# Entropy
# ---------------------
def entropy(items):
    """Compute Shannon entropy (bits) over the weighted item distribution."""
    weights = np.array([item.weight for item in items], dtype=float)
    total = weights.sum()
    if total == 0:
        return 0.0
    probs = weights / total
    return float(-np.sum(probs * np.log2(probs)))


def probability(subset, items):
    """Weight share of `subset` relative to the whole of `items`."""
    return total_weight(subset) / total_weight(items)


# ---------------------
# Partitions & gain
# ---------------------
def partition(tag_name, catalogue, items):
    """
    Split items by the values registered under `tag_name`.

    Args:
        tag_name : name of the tag to split on
        catalogue: tag name -> list of distinct Tag values
        items    : the current item collection
    Returns:
        (parts, undefined) where parts is a list of (Tag, [Item]) in
        catalogue order and undefined holds items with none of the values.
    """
    values = catalogue.get(tag_name, [])
    parts = [(tag, [item for item in items if item.holds(tag)]) for tag in values]
    undefined = [item for item in items if not any(item.holds(tag) for tag in values)]
    return parts, undefined


def conditional_entropy(tag_name, catalogue, items):
    """H(D|t): expected entropy of items after splitting on `tag_name`."""
    parts, undefined = partition(tag_name, catalogue, items)
    subsets = [subset for _, subset in parts] + [undefined]
    H = 0.0
    for subset in subsets:
        # empty partitions contribute nothing
        if subset:
            H += probability(subset, items) * entropy(subset)
    return H


def information_gain(tag_name, catalogue, items):
    """IG(D, t) = H(D) - H(D|t)."""
    return entropy(items) - conditional_entropy(tag_name, catalogue, items)


def gain_report(catalogue, items):
    """Information gain for every tag name currently in the catalogue."""
    return {name: information_gain(name, catalogue, items) for name in catalogue}


def best_tag_name(gains):
    """
    Pick the tag name with maximum gain.

    Ties resolve to the lexicographically smallest name. An empty report
    yields (None, 0.0).
    """
    if not gains:
        return None, 0.0
    name = min(gains, key=lambda n: (-gains[n], n))
    return name, gains[name]
