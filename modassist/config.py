"""Search configuration with environment overrides"""

import os
from typing import Optional

from pydantic import BaseModel, Field


class SearchSettings(BaseModel):
    """
    Recognized search options.

    relevance_threshold is authored in a 0-1 range; the ranker compares raw
    first-pass scores against relevance_threshold * 10.
    """

    relevance_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    max_results: int = Field(default=3, ge=0)
    max_corpus_size: int = Field(default=1000, ge=1)  # bound for quadratic corpus analysis

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """
        Load settings from environment variables.

        Config (env vars):
            RELEVANCE_THRESHOLD: float in [0, 1] (default: 0.5)
            MAX_RESULTS: int >= 0 (default: 3)
            MAX_CORPUS_SIZE: int >= 1 (default: 1000)

        Raises:
            ValueError: If a variable is set to an invalid value
        """
        overrides = {}

        threshold = _env("RELEVANCE_THRESHOLD")
        if threshold is not None:
            overrides["relevance_threshold"] = float(threshold)

        max_results = _env("MAX_RESULTS")
        if max_results is not None:
            overrides["max_results"] = int(max_results)

        max_corpus_size = _env("MAX_CORPUS_SIZE")
        if max_corpus_size is not None:
            overrides["max_corpus_size"] = int(max_corpus_size)

        # pydantic's ValidationError subclasses ValueError
        return cls(**overrides)


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
