"""
orchestrator.py - Runs configuration loading and meet checks over a data root.

Configurations are loaded first, one federation at a time; any error there
aborts the run, since every meet check depends on them. Meet directories are
then checked in parallel threads. Each check only reads its own files and the
shared configuration map, and returns its own outcome; outcomes are folded
together afterwards, so totals and store contents do not depend on completion
order.
"""
from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

from meet_checker.app_hooks import AppHooks
from meet_checker.records import RecordStore, SingleMeetData
from meet_checker.report import Report, format_summary, write_report

from .check import check
from .discovery import discover_config_paths, discover_meet_dirs
from .federation_config import ConfigReadError, FederationConfig, check_config
from .settings import CheckerSettings

logger = logging.getLogger(__name__)

# Federation folder name, e.g. "ipf", to its configuration.
ConfigMap = Dict[str, FederationConfig]


class ConfigurationFailure(Exception):
    """
    Configuration loading failed; the run cannot continue.

    Attributes:
        error_count (int): Errors counted before aborting.
        warning_count (int): Warnings counted before aborting.
    """

    def __init__(self, error_count: int, warning_count: int) -> None:
        super().__init__(f"Configuration failed with {format_summary(error_count, warning_count)}")
        self.error_count = error_count
        self.warning_count = warning_count


@dataclass
class MeetOutcome:
    """
    Outcome of validating one meet directory.

    Attributes:
        path (Path): The meet directory.
        reports (List[Report]): Reports from checking its files.
        single_meet (Optional[SingleMeetData]): Data for the store, if valid.
        internal_error (Optional[str]): Description of an unexpected failure.
    """
    path: Path
    reports: List[Report] = field(default_factory=list)
    single_meet: Optional[SingleMeetData] = None
    internal_error: Optional[str] = None


@dataclass
class ValidationResult:
    """Totals and valid meet data across any number of meet directories."""
    single_meets: List[SingleMeetData] = field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0
    internal_error_count: int = 0

    @classmethod
    def from_outcome(cls, outcome: MeetOutcome) -> ValidationResult:
        result = cls(internal_error_count=1 if outcome.internal_error else 0)
        for report in outcome.reports:
            errors, warnings = report.count_messages()
            result.error_count += errors
            result.warning_count += warnings
        if outcome.single_meet is not None and outcome.internal_error is None:
            result.single_meets.append(outcome.single_meet)
        return result

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine two results; the combination is commutative and associative."""
        return ValidationResult(
            single_meets=self.single_meets + other.single_meets,
            error_count=self.error_count + other.error_count,
            warning_count=self.warning_count + other.warning_count,
            internal_error_count=self.internal_error_count + other.internal_error_count,
        )

    @property
    def failed(self) -> bool:
        """True if any data or internal error occurred; warnings never fail a run."""
        return self.error_count > 0 or self.internal_error_count > 0


def aggregate(outcomes: Iterable[MeetOutcome]) -> ValidationResult:
    """Fold meet outcomes into a single ValidationResult."""
    result = ValidationResult()
    for outcome in outcomes:
        result = result.merge(ValidationResult.from_outcome(outcome))
    return result


def load_configurations(meet_data_root: Path, settings: Optional[CheckerSettings] = None,
                        output: Optional[TextIO] = None) -> ConfigMap:
    """
    Load every federation configuration under the data root.

    Reports with messages are written to output as they are produced.

    Returns:
        ConfigMap: Configurations keyed by federation folder name.

    Raises:
        ConfigurationFailure: If any configuration had errors, or could not be
            read at all (which aborts loading immediately).
    """
    settings = settings or CheckerSettings.default()
    output = output if output is not None else sys.stdout
    configmap: ConfigMap = {}
    error_count = 0
    warning_count = 0

    for config_path in discover_config_paths(Path(meet_data_root), settings.config_filename):
        try:
            result = check_config(config_path)
        except ConfigReadError as e:
            logger.error(f"Failed to load configuration {config_path}: {e}")
            output.write(f"{config_path}\n Internal Error: {e}\n")
            raise ConfigurationFailure(error_count + 1, warning_count) from e

        errors, warnings = result.report.count_messages()
        error_count += errors
        warning_count += warnings
        if result.report.has_messages():
            write_report(output, result.report)

        if result.config is not None:
            configmap[config_path.parent.name] = result.config

    if error_count > 0:
        raise ConfigurationFailure(error_count, warning_count)
    logger.info(f"Loaded {len(configmap)} federation configurations")
    return configmap


def validate_meet(meet_dir: Path, configmap: ConfigMap,
                  settings: Optional[CheckerSettings] = None) -> MeetOutcome:
    """
    Check one meet directory with its federation's configuration.

    The federation is the meet directory's parent folder name. Unexpected
    failures are captured in the outcome rather than raised.
    """
    meet_dir = Path(meet_dir)
    config = configmap.get(meet_dir.parent.name)
    try:
        result = check(meet_dir, config, settings)
    except Exception as e:
        logger.error(f"Internal error checking {meet_dir}: {e}", exc_info=True)
        return MeetOutcome(path=meet_dir, internal_error=str(e) or type(e).__name__)
    return MeetOutcome(path=meet_dir, reports=result.reports, single_meet=result.single_meet())


def check_meet_dirs(
    meet_dirs: Iterable[Path],
    configmap: ConfigMap,
    settings: Optional[CheckerSettings] = None,
    output: Optional[TextIO] = None,
    error_output: Optional[TextIO] = None,
    app_hooks: Optional[AppHooks] = None,
) -> ValidationResult:
    """
    Check meet directories in parallel and aggregate their outcomes.

    Reports of each meet are written together once it completes; internal
    errors are written to error_output.
    """
    settings = settings or CheckerSettings.default()
    output = output if output is not None else sys.stdout
    error_output = error_output if error_output is not None else sys.stderr
    meet_dirs = list(meet_dirs)

    _report_step(app_hooks, info="Checking meets", target=len(meet_dirs), reset_counter=True, plus_step=0)
    result = ValidationResult()
    with ThreadPoolExecutor(max_workers=settings.workers()) as executor:
        futures = [executor.submit(validate_meet, meet_dir, configmap, settings) for meet_dir in meet_dirs]
        for future in as_completed(futures):
            outcome = future.result()
            if outcome.internal_error is not None:
                error_output.write(f"{outcome.path}\n Internal Error: {outcome.internal_error}\n")
            else:
                for report in outcome.reports:
                    if report.has_messages():
                        write_report(output, report)
            result = result.merge(ValidationResult.from_outcome(outcome))
            _report_step(app_hooks, plus_step=1)

    _update_key_value(app_hooks, "errors", result.error_count)
    _update_key_value(app_hooks, "warnings", result.warning_count)
    _update_key_value(app_hooks, "internal_errors", result.internal_error_count)
    logger.info(f"Checked {len(meet_dirs)} meet directories: "
                f"{format_summary(result.error_count, result.warning_count)}, "
                f"{result.internal_error_count} internal errors")
    return result


@dataclass
class CheckerResult:
    store: RecordStore
    validation: ValidationResult

    @property
    def failed(self) -> bool:
        return self.validation.failed


class CheckerPipeline:
    """
    Loads configurations, checks meet directories and builds the record store.

    Attributes:
        settings (CheckerSettings): Discovery and check settings.
        app_hooks (Optional[AppHooks]): Progress observer.
        output (TextIO): Destination for reports.
        error_output (TextIO): Destination for internal errors.
    """

    def __init__(self, settings: Optional[CheckerSettings] = None, app_hooks: Optional[AppHooks] = None,
                 output: Optional[TextIO] = None, error_output: Optional[TextIO] = None) -> None:
        self.settings = settings or CheckerSettings.default()
        self.app_hooks = app_hooks
        self.output = output if output is not None else sys.stdout
        self.error_output = error_output if error_output is not None else sys.stderr

    def run(self, meet_data_root: Path, search_root: Optional[Path] = None) -> CheckerResult:
        """
        Check everything under search_root (default: the whole data root).

        Configurations are always loaded from meet_data_root.

        Raises:
            ConfigurationFailure: If configurations could not be loaded cleanly.
        """
        meet_data_root = Path(meet_data_root)
        if not meet_data_root.is_dir():
            raise FileNotFoundError(f"Meet data root not found: {meet_data_root}")
        search_root = Path(search_root) if search_root else meet_data_root

        configmap = load_configurations(meet_data_root, self.settings, self.output)
        meet_dirs = discover_meet_dirs(search_root, self.settings.meet_marker_files)
        validation = check_meet_dirs(meet_dirs, configmap, self.settings,
                                     self.output, self.error_output, self.app_hooks)
        store = RecordStore(validation.single_meets)
        logger.info(f"Record store holds {len(store.meets)} meets and {store.entry_count()} entries")
        return CheckerResult(store=store, validation=validation)


def _report_step(app_hooks: Optional[AppHooks], info: str = "", target: Optional[int] = None,
                 reset_counter: bool = False, plus_step: int = 0) -> None:
    """Report a step via app hooks if available."""
    if app_hooks and callable(getattr(app_hooks, "report_step", None)):
        app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
    else:
        if info:
            logger.debug(info)


def _update_key_value(app_hooks: Optional[AppHooks], key: str, value) -> None:
    if app_hooks and callable(getattr(app_hooks, "update_key_value", None)):
        app_hooks.update_key_value(key, value)
