"""Checker module: validation of a meet data tree.

Walks a data root laid out as <root>/<federation>/.../<meet>/, loads each
federation's CONFIG.yaml, checks every meet directory's meet.csv and
entries.csv in parallel, and gathers the valid meets into a RecordStore.

Core classes:
    - CheckerPipeline: Runs configuration loading, meet checks and store creation
    - CheckerSettings: Settings loaded from settings.yaml
    - FederationConfig: A federation's divisions and ranking options
    - ValidationResult: Aggregated error, warning and internal-error counts
    - ConfigurationFailure: Raised when configurations cannot be loaded cleanly

Example:
    >>> from meet_checker.checker import CheckerPipeline
    >>> result = CheckerPipeline().run(Path("meet-data"))
    >>> if result.failed:
    ...     sys.exit(1)
"""

from .settings import CheckerSettings
from .federation_config import ConfigReadError
from .federation_config import ConfigResult
from .federation_config import Division
from .federation_config import FederationConfig
from .federation_config import check_config
from .discovery import discover_config_paths
from .discovery import discover_meet_dirs
from .discovery import is_meet_dir
from .check import CheckResult
from .check import check
from .orchestrator import CheckerPipeline
from .orchestrator import CheckerResult
from .orchestrator import ConfigMap
from .orchestrator import ConfigurationFailure
from .orchestrator import MeetOutcome
from .orchestrator import ValidationResult
from .orchestrator import aggregate
from .orchestrator import check_meet_dirs
from .orchestrator import load_configurations
from .orchestrator import validate_meet

__all__ = [
    'CheckerSettings',
    'ConfigReadError',
    'ConfigResult',
    'Division',
    'FederationConfig',
    'check_config',
    'discover_config_paths',
    'discover_meet_dirs',
    'is_meet_dir',
    'CheckResult',
    'check',
    'CheckerPipeline',
    'CheckerResult',
    'ConfigMap',
    'ConfigurationFailure',
    'MeetOutcome',
    'ValidationResult',
    'aggregate',
    'check_meet_dirs',
    'load_configurations',
    'validate_meet',
]
