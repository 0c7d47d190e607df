"""auto-semver-tag - Semantic version tagging for merged pull requests.

This package decides whether a merged pull request should produce a new
``vMAJOR.MINOR.PATCH`` tag and creates it through the GitHub API.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
