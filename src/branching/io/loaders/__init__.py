from .errors import LoaderError
from .settings_loader import load_settings
from .tree_loader import TreeDocument, load_tree, save_tree

__all__ = ["LoaderError", "load_settings", "TreeDocument", "load_tree", "save_tree"]
