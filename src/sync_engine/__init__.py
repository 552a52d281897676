"""Reconciliation between the local problem collection and Notion.

The Reconciler validates the database schema, diffs local problems against a
single remote snapshot by normalized URL, and applies rate-limited creates
and archives with per-item error isolation.
"""

from .auto_sync import AutoSyncHook
from .database_setup import DatabaseProvisioner, ParentPage
from .errors import ProvisioningError, SyncEngineError
from .models import RemotePage, SyncMode, SyncPhase, SyncPlan, SyncResult
from .planner import build_sync_plan
from .reconciler import Reconciler, RequestThrottle
from .remote_problems import MirrorResult, ProblemMirror
from .schema_validator import REQUIRED_COLUMNS, SchemaCheck, SchemaValidator
from .sync_lock import SyncLock

__all__ = [
    'AutoSyncHook',
    'DatabaseProvisioner',
    'ParentPage',
    'ProvisioningError',
    'SyncEngineError',
    'RemotePage',
    'SyncMode',
    'SyncPhase',
    'SyncPlan',
    'SyncResult',
    'build_sync_plan',
    'Reconciler',
    'RequestThrottle',
    'MirrorResult',
    'ProblemMirror',
    'REQUIRED_COLUMNS',
    'SchemaCheck',
    'SchemaValidator',
    'SyncLock',
]
