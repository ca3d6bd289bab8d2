"""Mode handlers for the bucketpull CLI.

Subcommand handlers:
  - GetHandler    → bucketpull get
  - PropsHandler  → bucketpull props
  - SyncHandler   → bucketpull sync
"""
from .base_handler import ModeHandler
from .get_handler import GetHandler
from .props_handler import PropsHandler
from .sync_handler import SyncHandler

__all__ = [
    'ModeHandler',
    'GetHandler',
    'PropsHandler',
    'SyncHandler',
]
