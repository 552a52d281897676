"""Local problem collection.

This package owns the durable state of tracked problems: the Problem model,
URL canonicalization used as the cross-system join key, the YAML-backed
LocalStore, and the page scraper that fills in title and difficulty.
"""

from .errors import ProblemsError, StoreError, StoreFilesystemError, ScrapeError
from .models import Difficulty, Problem, ProblemStatus
from .store import LocalStore
from .url_normalizer import extract_slug, normalize_url

__all__ = [
    'Difficulty',
    'Problem',
    'ProblemStatus',
    'LocalStore',
    'normalize_url',
    'extract_slug',
    'ProblemsError',
    'StoreError',
    'StoreFilesystemError',
    'ScrapeError',
]
