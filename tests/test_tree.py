import pytest

from conftest import item
from tagtree.model import Tag, build_catalogue, total_weight
from tagtree.tree import Internal, Leaf, build_tree, is_leaf, iter_leaves


def _ids(items):
    return [i.identifier for i in items]


def _check_node(node, items):
    """Leaves below every internal node hold exactly that node's items."""
    below = [i for leaf in iter_leaves(node) for i in leaf.items]
    assert sorted(_ids(below)) == sorted(_ids(items))
    if is_leaf(node):
        return
    assert sum(b.probability for b in node.branches) == pytest.approx(1.0)
    for branch in node.branches:
        child_items = [i for leaf in iter_leaves(branch.node) for i in leaf.items]
        assert branch.probability == pytest.approx(total_weight(child_items) / total_weight(items))
        _check_node(branch.node, child_items)


def test_single_value_tag_gives_one_leaf():
    red = Tag.categorical("color", "red")
    items = (item("A", 3, red), item("B", 1, red))
    root = build_tree(build_catalogue(items), items)
    assert root == Leaf(items)


def test_gain_of_exactly_one_stops_recursion():
    items = (item("A", 1, Tag.categorical("kind", "x")), item("B", 1, Tag.categorical("kind", "y")))
    root = build_tree(build_catalogue(items), items)
    assert isinstance(root, Leaf)
    assert _ids(root.items) == ["A", "B"]


def test_empty_catalogue_gives_leaf():
    items = (item("A", 1), item("B", 2))
    assert build_tree({}, items) == Leaf(items)


def test_two_level_tree(genre_items):
    root = build_tree(build_catalogue(genre_items), genre_items)

    assert isinstance(root, Internal)
    assert root.name == "genre"
    assert set(root.gains) == {"genre", "live"}
    assert [b.edge for b in root.branches] == ["rock", "jazz", "undefined"]
    assert [b.probability for b in root.branches] == pytest.approx([0.6, 0.2, 0.2])

    rock = root.branches[0].node
    assert isinstance(rock, Internal)
    assert rock.name == "live"
    assert list(rock.gains) == ["live"]
    assert [b.edge for b in rock.branches] == ["defined", "undefined"]
    assert [_ids(b.node.items) for b in rock.branches] == [["a"], ["b"]]

    assert root.branches[1].node == Leaf((genre_items[2],))
    assert root.branches[2].node == Leaf((genre_items[3],))


def test_chosen_name_is_removed_for_children(genre_items):
    root = build_tree(build_catalogue(genre_items), genre_items)
    for branch in root.branches:
        if not is_leaf(branch.node):
            assert "genre" not in branch.node.gains


def test_tie_picks_smallest_name():
    alpha, beta = Tag.presence("alpha"), Tag.presence("beta")
    items = (item("a", 1, alpha, beta), item("b", 1), item("c", 1))
    root = build_tree(build_catalogue(items), items)
    assert root.name == "alpha"
    assert root.gains["alpha"] == root.gains["beta"]


def test_every_item_lands_in_exactly_one_leaf(genre_items):
    root = build_tree(build_catalogue(genre_items), genre_items)
    _check_node(root, genre_items)


def test_build_is_deterministic(genre_items):
    catalogue = build_catalogue(genre_items)
    assert build_tree(catalogue, genre_items) == build_tree(catalogue, genre_items)


def test_catalogue_is_not_mutated(genre_items):
    catalogue = build_catalogue(genre_items)
    before = {name: list(values) for name, values in catalogue.items()}
    build_tree(catalogue, genre_items)
    assert catalogue == before


def test_verbose_progress_goes_to_stderr(genre_items, capsys):
    build_tree(build_catalogue(genre_items), genre_items, verbose=True)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[depth 0] Split on 'genre'" in captured.err
