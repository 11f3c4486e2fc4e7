"""
Text rendering of a built tag tree.

The output has two sections separated by a '---' line:

    /genre=0.92                      gain report, one line per non-zero gain
    /genre=rock/size=0.31
    ---
    /genre=rock/size=large/"a.mp3"   tree listing, one line per leaf item
    /genre=undefined/"notes.txt"

A pandas view of the gain report is available through gain_frame() for
export and inspection.
"""

from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from .tree import is_leaf

PATH_SEPARATOR = "/"
TAG_CONNECTOR = "="
SECTION_SEPARATOR = "---"
GAIN_COLUMNS = ["path", "tag", "gain"]


def format_decimal(value):
    """Two decimals, rounding half up on the shortest decimal form of value."""
    return str(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _segment(path, name, edge):
    return f"{path}{PATH_SEPARATOR}{name}{TAG_CONNECTOR}{edge}"


# ---------------------
# Gain report
# ---------------------
def _gain_rows(node, path=""):
    if is_leaf(node):
        return
    ranked = sorted(node.gains.items(), key=lambda kv: (-kv[1], kv[0].lower()))
    for name, gain in ranked:
        if gain != 0:
            yield path, name.lower(), gain
    for branch in node.branches:
        if not is_leaf(branch.node):
            yield from _gain_rows(branch.node, _segment(path, node.name, branch.edge).lower())


def gain_lines(root):
    return [
        f"{path}{PATH_SEPARATOR}{name}{TAG_CONNECTOR}{format_decimal(gain)}"
        for path, name, gain in _gain_rows(root)
    ]


def gain_frame(root):
    """
    Collect the gain report into a DataFrame.

    Args:
        root: Root node returned by build_tree.
    Returns:
        DataFrame with columns 'path', 'tag' and 'gain', in report order.
    """
    return pd.DataFrame(list(_gain_rows(root)), columns=GAIN_COLUMNS)


def top_gains(frame, n=25):
    """The n highest gains of a gain frame, best first."""
    return frame.sort_values("gain", ascending=False, kind="stable").head(n)


# ---------------------
# Tree listing
# ---------------------
def _ordered_branches(node):
    return sorted(node.branches, key=lambda b: (b.probability, b.node.name), reverse=True)


def listing_lines(node, path=""):
    """Leaf paths, one quoted item identifier per line."""
    if is_leaf(node):
        return [f'{path}{PATH_SEPARATOR}"{item.identifier}"' for item in node.items]
    lines = []
    for branch in _ordered_branches(node):
        lines.extend(listing_lines(branch.node, _segment(path, node.name, branch.edge)))
    return lines


def render_tree(root):
    """Render the gain report and the tree listing as one text block."""
    lines = gain_lines(root) + [SECTION_SEPARATOR] + listing_lines(root)
    return "\n".join(lines)
