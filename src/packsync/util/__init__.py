from .prompt import ConfirmationPrompt, is_affirmative
from .time import BACKUP_TIMESTAMP_FORMAT, backup_timestamp, now_local

__all__ = [
    "ConfirmationPrompt",
    "is_affirmative",
    "BACKUP_TIMESTAMP_FORMAT",
    "backup_timestamp",
    "now_local",
]
