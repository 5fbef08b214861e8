"""pyanpyan core library: checklist models, storage and flows.

Public API re-exports for convenient imports:
    from pyanpyan import JsonChecklistRepository, open_checklist, mark_item_done, ...
"""

# Workspace & paths
from pyanpyan.workspace import (
    workspace_root,
    load_config,
    get_user_timezone,
    get_log_level,
    now_utc,
    now_local,
    config_path,
    data_dir,
    checklists_path,
    settings_path,
    hooks_config_path,
    log_path,
    exports_dir,
)

# Logging
from pyanpyan.logger import setup_logger

# Models
from pyanpyan.models import (
    ALL_DAY,
    WEEKDAYS,
    AllDay,
    Specific,
    TimeRange,
    DayOfWeek,
    ChecklistColor,
    StatePersistenceDuration,
    ChecklistItemState,
    ChecklistId,
    ChecklistItemId,
    ItemIconId,
    ChecklistSchedule,
    ChecklistItem,
    Checklist,
    AppSettings,
    SwipeSound,
    CompletionSound,
    Timer,
    TimerId,
    TimerType,
)

# Errors & results
from pyanpyan.errors import (
    ValidationError,
    PreconditionError,
    RepositoryError,
    FileReadError,
    FileWriteError,
    JsonParseError,
    InvalidDataError,
)
from pyanpyan.result import RepositoryResult, Success, Failure

# Commands
from pyanpyan.commands import (
    CreateChecklist,
    UpdateChecklist,
    ResetDailyState,
    MarkItemDone,
    IgnoreItemToday,
)

# Activity
from pyanpyan.activity import ActivityState, get_activity_state, is_active, partition_by_activity

# Storage
from pyanpyan.codec import encode_checklists, decode_checklists
from pyanpyan.defaults import create_default_checklists
from pyanpyan.repository import (
    ChecklistRepository,
    JsonChecklistRepository,
    InMemoryChecklistRepository,
)
from pyanpyan.settings import (
    SettingsRepository,
    JsonSettingsRepository,
    InMemorySettingsRepository,
)

# Flows
from pyanpyan.session import (
    should_reset,
    open_checklist,
    mark_item_done,
    ignore_item_today,
    reset_item,
    reset_checklist,
)
from pyanpyan.library import (
    Library,
    load_library,
    build_checklist,
    create_checklist,
    update_checklist,
    delete_checklist,
)
from pyanpyan.transfer import ImportPlan, prepare_import, import_checklists, import_file, export_checklists

# Events & hooks
from pyanpyan.events import ChangeType, ChecklistEvent, detect_changes, event_to_dict
from pyanpyan.hooks import run_hooks, load_hooks_config, hook_sink
