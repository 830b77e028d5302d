"""Pull request generation."""

from .generator import PRGenerator
from .schemas import PRResult, PullRequest
from .utils import PRCreationError, create_pull_request, parse_pr_text

__all__ = [
	"PRCreationError",
	"PRGenerator",
	"PRResult",
	"PullRequest",
	"create_pull_request",
	"parse_pr_text",
]
