"""relnotes — GitHub release notes from commit logs and word diffs."""

__version__ = "1.0.0"
