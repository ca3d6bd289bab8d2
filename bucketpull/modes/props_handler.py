"""Handler for the 'props' subcommand."""
import json

from colorama import Fore, Style

from ..services.properties_loader import get_properties
from .base_handler import ModeHandler


class PropsHandler(ModeHandler):
    """Handles ``bucketpull props KEY`` — fetch and print a properties document."""

    def prepare_context(self):
        return {
            'key': self.args.key,
            'keep_local_copy': self.config.get('keep_local_copy', True),
            'encoding': self.config.get('encoding') or 'utf-8',
        }

    def execute_workflow(self, context):
        return get_properties(
            self.config['region'],
            self.config['bucket'],
            context['key'],
            keep_local_copy=context['keep_local_copy'],
            encoding=context['encoding'],
            **self.client_options()
        )

    def is_success(self, result):
        # An empty document is still a successful parse
        return result is not None

    def display_completion(self, result):
        if self.args.format == 'json':
            print(json.dumps(result, indent=2, sort_keys=True))
            return

        width = max((len(k) for k in result), default=0)
        for key in sorted(result):
            print(f"  {Fore.CYAN}{key.ljust(width)}{Style.RESET_ALL} = {result[key]}")
