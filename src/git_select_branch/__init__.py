"""Interactively check out a recent git branch.

Features:
- List local branches sorted by the time of their last commit
- Fuzzy-search prompt to pick a branch
- Safe checkout that never discards uncommitted changes
- Settings read from git config (``select-branch.*``)
"""

__version__ = "0.3.0"
