"""Information-gain tag trees over weighted, tagged files."""

from .entropy import best_tag_name, conditional_entropy, entropy, gain_report, information_gain
from .model import Item, Tag, TagKind, build_catalogue
from .render import gain_frame, render_tree, top_gains
from .tree import Branch, Internal, Leaf, build_tree, iter_leaves

__all__ = [
    "Branch",
    "Internal",
    "Item",
    "Leaf",
    "Tag",
    "TagKind",
    "best_tag_name",
    "build_catalogue",
    "build_tree",
    "conditional_entropy",
    "entropy",
    "gain_frame",
    "gain_report",
    "information_gain",
    "iter_leaves",
    "render_tree",
    "top_gains",
]
