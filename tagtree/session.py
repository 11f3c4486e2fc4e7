"""
In-memory session holding loaded item collections and the command table.

Commands arrive as single text lines ('load data/files.txt', 'run 0', ...)
and come back as CommandResult values; printing is left to the caller.
"""

import dataclasses
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .loader import MIN_WEIGHT, LoadError, load_items, parse_integer
from .model import build_catalogue
from .render import gain_frame, render_tree, top_gains
from .tree import build_tree

COMMAND_SEPARATOR = " "
NO_COLLECTION_MESSAGE = "you must first load a file before changing it!"
TOP_GAINS = 10


@dataclass
class CommandResult:
    ok: bool
    message: Optional[str] = None


@dataclass
class Collection:
    id: int
    items: Tuple
    lines: List[str]


class Session:
    def __init__(self, verbose=False, export_dir=None):
        self.collections = []
        self.running = False
        self.verbose = verbose
        self.export_dir = export_dir
        # name -> (argument count, handler)
        self.commands = {
            "load": (1, self.load),
            "run": (1, self.run),
            "change": (3, self.change),
            "quit": (0, self.quit),
        }

    # ---------------------
    # Dispatch
    # ---------------------
    def execute(self, line):
        name, *args = line.strip().split(COMMAND_SEPARATOR)
        if name not in self.commands:
            return CommandResult(False, f"command '{name}' not found!")
        arity, handler = self.commands[name]
        if len(args) != arity:
            return CommandResult(False, f"wrong number of arguments for command '{name}'!")
        return handler(*args)

    def collection(self, raw_id):
        """
        Look up a loaded collection by its textual id.

        Returns:
            (collection, None) on success, (None, failed CommandResult) otherwise.
        """
        if not self.collections:
            return None, CommandResult(False, NO_COLLECTION_MESSAGE)
        try:
            index = parse_integer(raw_id)
        except ValueError:
            return None, CommandResult(False, f"the entered ID ({raw_id}) must be a number!")
        if not 0 <= index < len(self.collections):
            return None, CommandResult(False, f"the entered ID ({raw_id}) could not be found!")
        return self.collections[index], None

    # ---------------------
    # Commands
    # ---------------------
    def load(self, path):
        try:
            items, lines = load_items(path)
        except LoadError as e:
            return CommandResult(False, str(e))
        collection = Collection(len(self.collections), items, lines)
        self.collections.append(collection)
        return CommandResult(True, "\n".join([f"Loaded {path} with id: {collection.id}"] + lines))

    def run(self, raw_id):
        collection, failure = self.collection(raw_id)
        if failure is not None:
            return failure

        catalogue = build_catalogue(collection.items)
        root = build_tree(catalogue, collection.items, verbose=self.verbose)
        if self.export_dir is not None or self.verbose:
            frame = gain_frame(root)
            if self.verbose:
                print(f"Top {TOP_GAINS} gains for id {collection.id}:", file=sys.stderr)
                print(top_gains(frame, TOP_GAINS).to_string(index=False), file=sys.stderr)
            if self.export_dir is not None:
                self.export_gains(collection, frame)
        return CommandResult(True, render_tree(root))

    def export_gains(self, collection, frame):
        os.makedirs(self.export_dir, exist_ok=True)
        out_path = os.path.join(self.export_dir, f"gains_{collection.id}.csv")
        frame.to_csv(out_path, index=False)
        if self.verbose:
            print(f"Wrote gain report to {out_path}", file=sys.stderr)
        return out_path

    def change(self, raw_id, identifier, raw_weight):
        collection, failure = self.collection(raw_id)
        if failure is not None:
            return failure
        try:
            weight = parse_integer(raw_weight)
        except ValueError:
            return CommandResult(False, "the entered command is invalid! This commands format is: <id> <file> <number>")
        if weight < MIN_WEIGHT:
            return CommandResult(False, f"the entered number ({weight}) must be at least {MIN_WEIGHT}!")

        for position, item in enumerate(collection.items):
            if item.identifier == identifier:
                break
        else:
            return CommandResult(False, f"the entered file name ({identifier}) does not exist!")

        items = list(collection.items)
        items[position] = dataclasses.replace(item, weight=weight)
        collection.items = tuple(items)
        return CommandResult(True, f"Change {item.weight} to {weight} for {identifier}")

    def quit(self):
        self.running = False
        return CommandResult(True)
