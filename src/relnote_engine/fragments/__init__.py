"""Fragments module — discover, check, merge, and prune release-note fragments."""

from relnote_engine.fragments.discover import sorted_fragment_filenames
from relnote_engine.fragments.merger import merge, merge_documents
from relnote_engine.fragments.pruner import remove_empty_sections
from relnote_engine.fragments.validator import check_files, check_fragment

__all__ = [
    "sorted_fragment_filenames",
    "merge",
    "merge_documents",
    "remove_empty_sections",
    "check_files",
    "check_fragment",
]
