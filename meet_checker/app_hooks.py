from typing import Any, Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks to follow a checker run.

    Can be implemented by a calling application (progress bar, GUI, service)
    to observe progress without the checker knowing about it.

    Methods:
        report_step: Progress through the meet directories.
        update_key_value: Status values such as running error counts.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress.

        Args:
            info (str): Progress message.
            target (int): Total number of steps, when starting a phase.
            reset_counter (bool): Whether to reset the step counter.
            plus_step (int): Steps completed since the last report.
        """
        pass

    def update_key_value(self, key: str, value: Any) -> None:
        """
        Report a status update with a key-value pair.

        Args:
            key (str): Status key.
            value: Status value.
        """
        pass
