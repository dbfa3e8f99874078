"""ieltsplan - Sync store and completion proxy for the IELTS Master Plan dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ieltsplan")
except PackageNotFoundError:
    __version__ = "0+local"
from ieltsplan.client import SyncClient
from ieltsplan.config import SyncConfig
from ieltsplan.exceptions import (
    ConfigError,
    IeltsPlanError,
    InvalidPayloadError,
    InvalidRequestError,
    StorageUnavailableError,
    SyncClientError,
    SyncRejectedError,
    SyncServerError,
    UpstreamError,
)
from ieltsplan.models import (
    ChillZone,
    DailyReview,
    DayPlan,
    Mood,
    ResourceHub,
    ResourceItem,
    Series,
    SyncSnapshot,
    Task,
)
from ieltsplan.server import create_app
from ieltsplan.sync.classify import ClassifiedPayload, Region, classify
from ieltsplan.sync.merge import apply_update
from ieltsplan.sync.service import SyncService

__all__ = [
    "__version__",
    "ChillZone",
    "ClassifiedPayload",
    "ConfigError",
    "DailyReview",
    "DayPlan",
    "IeltsPlanError",
    "InvalidPayloadError",
    "InvalidRequestError",
    "Mood",
    "Region",
    "ResourceHub",
    "ResourceItem",
    "Series",
    "StorageUnavailableError",
    "SyncClient",
    "SyncClientError",
    "SyncConfig",
    "SyncRejectedError",
    "SyncServerError",
    "SyncService",
    "SyncSnapshot",
    "Task",
    "UpstreamError",
    "apply_update",
    "classify",
    "create_app",
]
