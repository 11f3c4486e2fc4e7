import pytest

from tagtree.model import Item, Tag


def item(identifier, weight, *tags):
    return Item(identifier, weight, frozenset(tags))


@pytest.fixture
def genre_items():
    """Four files, one of them live, split over two genres and one untagged."""
    rock = Tag.categorical("genre", "rock")
    jazz = Tag.categorical("genre", "jazz")
    live = Tag.presence("live")
    return (
        item("a", 2, rock, live),
        item("b", 1, rock),
        item("c", 1, jazz),
        item("d", 1),
    )


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "files.txt"
    path.write_text(
        "\n".join(
            [
                "song.mp3,audio,5,Genre=rock,Length=200",
                "intro.mp3,audio,3,Genre=rock,Length=30",
                "clip.mp4,video,2,Genre=rock,Length=100",
                "notes.txt,text,1,Words=50",
                "tool.exe,program,1",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path
