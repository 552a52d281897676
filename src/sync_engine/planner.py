"""Set difference between the local collection and a remote snapshot."""

from typing import Iterable, List

from src.problems.models import Problem
from src.problems.url_normalizer import normalize_url

from .models import RemotePage, SyncPlan


def build_sync_plan(
    problems: Iterable[Problem],
    remote_pages: List[RemotePage],
    bidirectional: bool,
) -> SyncPlan:
    """Decide what to create, skip and archive, keyed by normalized URL.

    Local order is kept for creations and remote order for archives. Remote
    pages without a URL are never archived since they cannot be matched.
    """
    remote_urls = {normalize_url(page.url) for page in remote_pages if page.url}

    plan = SyncPlan()
    local_urls = set()
    for problem in problems:
        key = normalize_url(problem.url)
        local_urls.add(key)
        if key in remote_urls:
            plan.to_skip.append(problem)
        else:
            plan.to_create.append(problem)

    if bidirectional:
        plan.to_archive = [
            page for page in remote_pages
            if page.url and normalize_url(page.url) not in local_urls
        ]

    return plan
