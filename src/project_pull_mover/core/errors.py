"""Exception types raised by project-pull-mover.

Everything derives from PullMoverError so the CLI boundary can report any
expected failure with a single except clause and exit non-zero.
"""


class PullMoverError(Exception):
    """Base class for expected failures."""


class ConfigError(PullMoverError):
    """Invalid or incomplete command-line configuration."""


class NoDataError(PullMoverError):
    """A gh command that must return JSON returned nothing."""


class GhOutputParseError(PullMoverError):
    """gh output could not be decoded or parsed as JSON."""


class GraphQLApiError(PullMoverError):
    """The GraphQL API returned no data payload."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("\n".join(messages))


class MissingPullRequestDataError(PullMoverError):
    """A pull request lacks identifying data needed for a query or mutation."""
