"""Branch derivation for release modules."""

from rt.git.branch import MAIN, Branch

__all__ = ["MAIN", "Branch"]
