#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the archive HTTP client."""

from __future__ import annotations

from dataclasses import dataclass, field

from ao3kit.constants import (
    AO3_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    MAX_ADULT_CONTENT_REDIRECTS,
)
from ao3kit.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ClientOptions(CloneFrozenMixin):
    """Configuration options for :class:`ao3kit.client.Ao3Client`.

    Parameters
    ----------
    base_url : str, default "https://archiveofourown.org"
        Archive root used to build chapter URLs.
    user_agent : str, default "ao3kit-fetcher/1.0"
        User-Agent header sent with every request.
    timeout : float, default 30.0
        Request timeout in seconds.
    max_adult_redirects : int, default 9
        Maximum number of adult-content confirmation hops before giving up.

    """

    base_url: str = field(default=AO3_BASE_URL, metadata={"help": "Archive root URL"})
    user_agent: str = field(default=DEFAULT_USER_AGENT, metadata={"help": "User-Agent header"})
    timeout: float = field(default=DEFAULT_REQUEST_TIMEOUT, metadata={"help": "Request timeout in seconds"})
    max_adult_redirects: int = field(
        default=MAX_ADULT_CONTENT_REDIRECTS,
        metadata={"help": "Maximum adult-content confirmation hops"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_adult_redirects < 0:
            raise ValueError(f"max_adult_redirects must be non-negative, got {self.max_adult_redirects}")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
