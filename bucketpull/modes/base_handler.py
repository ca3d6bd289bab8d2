"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from ..errors import BucketPullError
from ..utils.config_loader import get_client_timeouts
from ..utils.logger import get_logger

log = get_logger(__name__)


class ModeHandler(ABC):
    """Abstract base class for all subcommand handlers."""

    def __init__(self, app, args):
        """Initialize mode handler.

        Args:
            app: Main :class:`~bucketpull.cli.BucketPull` instance holding the config
            args: Parsed command-line arguments
        """
        self.app = app
        self.config = app.config
        self.args = args

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Any :class:`BucketPullError` raised by a step is logged and turned
        into a failing exit code.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        try:
            if not self.validate_prerequisites():
                return 1

            context = self.prepare_context()
            if context is None:
                return 1

            result = self.execute_workflow(context)
        except BucketPullError as e:
            log.error("%s", e)
            return 1

        if result is not None and result is not False:
            self.display_completion(result)

        return 0 if self.is_success(result) else 1

    def validate_prerequisites(self) -> bool:
        """Check that region and bucket are configured.

        Returns:
            True if prerequisites are met, False otherwise
        """
        missing = [name for name in ('region', 'bucket') if not self.config.get(name)]
        if missing:
            log.error("Missing configuration: %s", ', '.join(missing))
            log.info("Pass --%s or run: bucketpull --config '{\"%s\": \"...\"}'",
                     missing[0], missing[0])
            return False
        return True

    def client_options(self) -> Dict[str, Any]:
        """Session and client options shared by every service call."""
        options = {'profile_name': self.config.get('profile') or None}
        options.update(get_client_timeouts(self.config))
        return options

    @abstractmethod
    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Prepare execution context.

        Returns:
            Context dictionary with required data, or None if preparation failed
        """

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """

    def is_success(self, result: Any) -> bool:
        return bool(result)

    def display_completion(self, result: Any):
        """Display completion output. Override for custom output."""
