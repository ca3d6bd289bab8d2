"""Handler for the 'get' subcommand."""
from ..services.s3.operations import S3Operations
from .base_handler import ModeHandler


class GetHandler(ModeHandler):
    """Handles ``bucketpull get KEY`` — single-file fetch."""

    def prepare_context(self):
        return {
            'key': self.args.key,
            'local_path': self.args.output,
            'keep_local_copy': self.config.get('keep_local_copy', True) and not self.args.no_keep,
            'encoding': self.config.get('encoding') or 'utf-8',
        }

    def execute_workflow(self, context):
        ops = S3Operations(self.config['region'], self.config['bucket'], **self.client_options())
        return ops.fetch_file(
            context['key'],
            local_path=context['local_path'],
            keep_local_copy=context['keep_local_copy'],
            encoding=context['encoding'],
        )

    def display_completion(self, result):
        if self.args.print:
            print(result.content, end='' if result.content.endswith('\n') else '\n')
