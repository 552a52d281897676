"""YAML-backed local store for the problem collection and settings.

The store is a single YAML document:

    problems:
      - id: 3f1c...
        title: Two Sum
        url: https://leetcode.com/problems/two-sum/
        slug: two-sum
        difficulty: Easy
        date_added: "2024-01-15T10:30:00.000Z"
    config:
      database_id: 0123...
      auto_sync: true
    last_sync_time: "2024-01-15T10:31:00.000Z"

If the file is missing or empty it is treated as an empty store. Every
operation is a fresh read/modify/write; concurrent writers are not
coordinated (last writer wins). The API token is never written here.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from .errors import StoreError, StoreFilesystemError
from .models import Problem, utc_now_iso

logger = logging.getLogger(__name__)

CONFIG_KEYS = (
    'database_id',
    'parent_page_id',
    'parent_page_title',
    'auto_sync',
    'include_status',
)


class LocalStore:
    """Durable owner of the problem collection and non-secret configuration.

    Example:
        >>> store = LocalStore("/tmp/store.yaml")
        >>> store.add_problem(Problem.create("Two Sum", "https://leetcode.com/problems/two-sum/"))
        >>> len(store.get_problems())
        1
    """

    DEFAULT_STORE_DIR = '.problem-tracker'
    DEFAULT_STORE_FILE = 'store.yaml'

    def __init__(self, path: str):
        self.path = path

    @classmethod
    def default_path(cls) -> str:
        return os.path.join(
            os.path.expanduser('~'), cls.DEFAULT_STORE_DIR, cls.DEFAULT_STORE_FILE
        )

    # Problems

    def get_problems(self) -> List[Problem]:
        data = self._load()
        raw_problems = data.get('problems') or []
        if not isinstance(raw_problems, list):
            raise StoreError(
                f"Field 'problems' must be a list, got {type(raw_problems).__name__}",
                'problems'
            )
        return [Problem.from_dict(entry) for entry in raw_problems]

    def save_problems(self, problems: List[Problem]) -> None:
        data = self._load()
        data['problems'] = [problem.to_dict() for problem in problems]
        self._save(data)

    def add_problem(self, problem: Problem) -> None:
        """Insert a problem, replacing in place any record with the same slug."""
        problems = self.get_problems()
        for index, existing in enumerate(problems):
            if existing.slug == problem.slug:
                logger.debug(f"Replacing existing problem '{problem.slug}' at position {index}")
                problems[index] = problem
                break
        else:
            problems.append(problem)
        self.save_problems(problems)

    def delete_problem(self, problem_id: str) -> bool:
        """Remove the problem with the given id.

        Returns:
            True if a record was removed
        """
        problems = self.get_problems()
        remaining = [p for p in problems if p.id != problem_id]
        if len(remaining) == len(problems):
            return False
        self.save_problems(remaining)
        return True

    def find_problem(self, problem_id: str) -> Optional[Problem]:
        for problem in self.get_problems():
            if problem.id == problem_id:
                return problem
        return None

    def clear_all(self) -> None:
        data = self._load()
        data.pop('problems', None)
        self._save(data)

    # Configuration

    def get_config(self) -> Dict[str, Any]:
        data = self._load()
        config = data.get('config') or {}
        if not isinstance(config, dict):
            raise StoreError(
                f"Field 'config' must be a mapping, got {type(config).__name__}",
                'config'
            )
        result = {key: config.get(key) for key in CONFIG_KEYS}
        result['last_sync_time'] = data.get('last_sync_time')
        return result

    def save_config(self, **values: Any) -> None:
        """Merge the given settings into the stored configuration."""
        unknown = set(values) - set(CONFIG_KEYS)
        if unknown:
            raise StoreError(f"Unknown config key(s): {', '.join(sorted(unknown))}", 'config')

        data = self._load()
        config = data.get('config') or {}
        config.update(values)
        data['config'] = config
        self._save(data)

    def clear_config(self) -> None:
        data = self._load()
        data.pop('config', None)
        data.pop('last_sync_time', None)
        self._save(data)

    def update_last_sync_time(self) -> str:
        timestamp = utc_now_iso()
        data = self._load()
        data['last_sync_time'] = timestamp
        self._save(data)
        return timestamp

    # File handling

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except PermissionError:
            raise StoreFilesystemError(self.path, 'read', 'Permission denied')
        except OSError as e:
            raise StoreFilesystemError(self.path, 'read', str(e))

        if not content.strip():
            return {}

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise StoreError(f"Invalid YAML syntax: {str(e)}")

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise StoreError(
                f"Store must be a YAML dictionary, got {type(data).__name__}"
            )
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        yaml_str = yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        store_dir = os.path.dirname(self.path)
        if store_dir:
            try:
                os.makedirs(store_dir, exist_ok=True)
            except OSError as e:
                raise StoreFilesystemError(store_dir, 'create_directory', str(e))

        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise StoreFilesystemError(self.path, 'write', 'Permission denied')
        except OSError as e:
            raise StoreFilesystemError(self.path, 'write', str(e))
