"""gitvibe - AI generated commit messages and pull request descriptions."""

__version__ = "0.3.0"
__author__ = "gitvibe contributors"
