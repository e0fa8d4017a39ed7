"""Core filesystem engine.

Path normalization, single-level traversal, and the directory-tree
operations built on it: merge transfer, empty-directory pruning,
recursive removal, and paginated listing.
"""

from treefs.core.cleaner import PruneResult, clean
from treefs.core.lister import MAX_PAGE_SIZE, MIN_PAGE_SIZE, clamp_page_size, list_tree
from treefs.core.paths import normalize
from treefs.core.remover import remove_dir, remove_tree
from treefs.core.transfer import copy_tree, move_tree, transfer
from treefs.core.walker import Decision, iter_dir, iter_tree, walk

__all__ = [
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "Decision",
    "PruneResult",
    "clamp_page_size",
    "clean",
    "copy_tree",
    "iter_dir",
    "iter_tree",
    "list_tree",
    "move_tree",
    "normalize",
    "remove_dir",
    "remove_tree",
    "transfer",
    "walk",
]
