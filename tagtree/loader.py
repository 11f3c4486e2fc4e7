"""
Parse and validate item files.

Inputs:
    A text file with one item per line:
        <identifier>,<type>,<accesses>[,<tag>...]
    where a tag is either `name` (presence) or `name=value` (numeric when the
    value is an integer, categorical otherwise).
Outputs:
    An ordered tuple of Items with numeric measurements already bucketed
    (see buckets.py), ready for the tree builder.
"""

import os
import re

from .buckets import convert_tags
from .model import Item, Tag

# ---------------------
# Configuration
# ---------------------
FIELD_SEPARATOR = ","
TAG_VALUE_SEPARATOR = "="
TAG_NAME_PATTERN = re.compile(r"[a-zA-Z][0-9a-zA-Z]*")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
ITEM_TYPES = ("audio", "image", "program", "text", "video")
EXECUTABLE_TAG_NAME = "executable"
MIN_FIELDS = 3
MIN_WEIGHT = 1


class LoadError(ValueError):
    """Raised when an item file cannot be turned into a valid collection."""


def parse_integer(text):
    """Parse a plain decimal integer; raises ValueError for anything else."""
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def parse_tag(text):
    """
    Turn one raw tag field into a Tag.

    Args:
        text: 'name' or 'name=value'.
    Returns:
        Presence, numeric or categorical Tag.
    """
    name, sep, value = text.strip().partition(TAG_VALUE_SEPARATOR)
    if not TAG_NAME_PATTERN.fullmatch(name):
        raise LoadError(f"invalid tag name: {name}. Must have this format: {TAG_NAME_PATTERN.pattern}")
    if not sep:
        return Tag.presence(name)
    if value == "":
        raise LoadError(f"tag '{name}' has no value!")
    try:
        return Tag.numeric(name, parse_integer(value))
    except ValueError:
        return Tag.categorical(name, value)


def _split_entry(line):
    fields = line.strip().split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS:
        raise LoadError("entries within the loaded file are not formatted correctly!")
    try:
        weight = parse_integer(fields[2])
    except ValueError:
        raise LoadError("entries within the loaded file are not formatted correctly!") from None
    return fields[0], fields[1], weight, fields[MIN_FIELDS:]


def _build_item(identifier, item_type, weight, raw_tags):
    if item_type.lower() not in ITEM_TYPES:
        raise LoadError(f"invalid file type '{item_type}'!")
    tags = [parse_tag(raw) for raw in raw_tags]
    if item_type.lower() == "program":
        tags.append(Tag.presence(EXECUTABLE_TAG_NAME))
    try:
        tags = convert_tags(item_type, tags)
    except ValueError as e:
        raise LoadError(str(e)) from e

    names = [tag.name.lower() for tag in tags]
    if len(set(names)) != len(names):
        raise LoadError(f"the loaded file contains reoccurring tags for '{identifier}'!")
    return Item(identifier, weight, frozenset(tags))


def check_tag_names(items):
    """
    Every tag name must be spelled and typed the same way across the file.

    Names are compared case-insensitively; 'Color' next to 'color', or a
    presence tag 'live' next to 'live=x', would otherwise split one name
    into indistinguishable report keys and edges.
    """
    seen = {}
    for item in items:
        for tag in item.tags:
            first = seen.setdefault(tag.name.lower(), (tag.name, tag.kind))
            if first != (tag.name, tag.kind):
                raise LoadError(
                    f"the loaded file contains reoccurring tags! '{tag.name}' ({tag.kind.value}) "
                    f"collides with '{first[0]}' ({first[1].value})"
                )


def parse_entries(lines):
    """
    Validate raw entry lines and build the item collection.

    Args:
        lines: Entry lines without trailing newlines; blank lines are skipped
               but still counted for line numbers in messages.
    Returns:
        Tuple of Items in file order.
    """
    numbered = [(number, _split_entry(line)) for number, line in enumerate(lines, start=1) if line.strip()]
    if not numbered:
        raise LoadError("loaded file was empty!")

    for number, (_, _, weight, _) in numbered:
        if weight < MIN_WEIGHT:
            raise LoadError(f"the loaded file contains an invalid access amount of {weight} in line {number}!")

    entries = [entry for _, entry in numbered]
    identifiers = [entry[0] for entry in entries]
    if len(set(identifiers)) != len(identifiers):
        raise LoadError("the loaded file contains reoccurring file identifiers!")
    if any(" " in identifier or identifier == "" for identifier in identifiers):
        raise LoadError("the loaded file contains illegal characters!")

    items = tuple(_build_item(*entry) for entry in entries)
    check_tag_names(items)
    return items


def read_lines(path):
    if not os.path.exists(path):
        raise LoadError(f"there is no file at '{path}'")
    with open(path, encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


def load_items(path):
    """Read and validate an item file. Returns (items, raw lines)."""
    lines = read_lines(path)
    return parse_entries(lines), [line for line in lines if line.strip()]
