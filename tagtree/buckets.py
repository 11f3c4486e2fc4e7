"""
Convert raw numeric measurements into categorical tags per item type.

Images are bucketed by size, audio and video by length, text by word
count. Genres are renamed per type so that an audio genre never shares a
partition with a video genre.
"""

from .model import Tag, TagKind

# ---------------------
# Configuration
# ---------------------
# item type -> (numeric tag name, categorical tag name, [(min value, label), ...] descending)
NUMERIC_BUCKETS = {
    "image": ("Size", "ImageSize", [(800000, "Large"), (40000, "Medium"), (10000, "Small"), (0, "Icon")]),
    "audio": ("Length", "AudioLength", [(300, "long"), (60, "normal"), (10, "short"), (0, "sample")]),
    "video": ("Length", "VideoLength", [(7200, "long"), (3600, "movie"), (300, "short"), (0, "clip")]),
    "text": ("Words", "TextLength", [(1000, "Long"), (100, "Medium"), (0, "Short")]),
}

GENRE_TAG_NAME = "Genre"
GENRE_RENAMES = {
    "audio": "AudioGenre",
    "video": "VideoGenre",
    "text": "TextGenre",
}


def bucket_label(value, buckets):
    """Label of the first bucket whose minimum `value` reaches, or None."""
    for minimum, label in buckets:
        if value >= minimum:
            return label
    return None


def convert_tag(item_type, tag):
    """
    Return the tag as it should be stored for an item of `item_type`.

    Raises:
        ValueError if a bucketed measurement is negative.
    """
    item_type = item_type.lower()
    if tag.kind is TagKind.NUMERIC and item_type in NUMERIC_BUCKETS:
        source, target, buckets = NUMERIC_BUCKETS[item_type]
        if tag.name.lower() == source.lower():
            label = bucket_label(int(tag.value), buckets)
            if label is None:
                raise ValueError(f"'{tag}' cannot be negative for {item_type} files!")
            return Tag.categorical(target, label)
    if (tag.kind is TagKind.CATEGORICAL and item_type in GENRE_RENAMES
            and tag.name.lower() == GENRE_TAG_NAME.lower()):
        return Tag.categorical(GENRE_RENAMES[item_type], tag.value)
    return tag


def convert_tags(item_type, tags):
    return [convert_tag(item_type, tag) for tag in tags]
