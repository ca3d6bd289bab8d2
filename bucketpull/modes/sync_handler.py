"""Handler for the 'sync' subcommand."""
from colorama import Fore, Style

from ..services.s3.sync_engine import S3SyncEngine
from .base_handler import ModeHandler


class SyncHandler(ModeHandler):
    """Handles ``bucketpull sync DEST`` — directory sync walk."""

    def prepare_context(self):
        return {
            'dest_local_dir': self.args.dest,
            'source_prefix': self.args.prefix or '',
            'clear_dest': self.args.clear,
            'continue_on_error': self.args.continue_on_error or bool(self.config.get('continue_on_error')),
            'strip_prefix': self.args.strip_prefix or bool(self.config.get('strip_prefix')),
        }

    def execute_workflow(self, context):
        engine = S3SyncEngine(
            self.config['region'],
            self.config['bucket'],
            clear_subdir=self.config.get('clear_subdir', 'data'),
            **self.client_options()
        )
        return engine.download_dir(**context)

    def is_success(self, result):
        return result is not None and result.success

    def display_completion(self, result):
        colour = Fore.GREEN if result.success else Fore.YELLOW
        print(f"\n{colour}[{result.status}] {result.files_downloaded} file(s), "
              f"{result.bytes_downloaded} bytes -> {result.dest_local_dir}{Style.RESET_ALL}")
        for key, error in result.errors:
            print(f"  {Fore.RED}✗ {key}: {error}{Style.RESET_ALL}")
