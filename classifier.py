# classifier.py

from typing import Iterable, List, Set

from models.github_webhook import PushEvent
from models.webhook_result import InterestFlags

CONFIG_MARKERS = (".env", "config.", ".yml", ".yaml")


def extract_changed_files(event: PushEvent) -> Set[str]:
    """
    Collect every path added, modified or removed by any commit in the push.
    """
    changed = set()
    for commit in event.commits:
        changed.update(commit.added)
        changed.update(commit.modified)
        changed.update(commit.removed)
    return changed


def classify_interest(paths: Iterable[str]) -> InterestFlags:
    paths = list(paths)
    return InterestFlags(
        frontend_asset=any("index.html" in path for path in paths),
        dependency_manifest=any("package.json" in path for path in paths),
        config_file=any(marker in path for path in paths for marker in CONFIG_MARKERS),
        container_file=any("dockerfile" in path.lower() or "docker-compose" in path for path in paths),
    )


def describe_interest(flags: InterestFlags) -> List[str]:
    """
    Human-readable follow-up for each raised flag, in a fixed order.
    """
    actions = []
    if flags.frontend_asset:
        actions.append("index.html changed - frontend deployment required")
    if flags.dependency_manifest:
        actions.append("package.json changed - dependency update required")
    if flags.config_file:
        actions.append("Configuration files changed - config reload required")
    if flags.container_file:
        actions.append("Container files changed - container rebuild required")
    return actions
