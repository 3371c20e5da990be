"""ConeTune IO — session export and import."""

from conetune.io.serialization import (
    session_from_dict,
    session_from_yaml,
    session_to_dict,
    session_to_yaml,
)

__all__ = [
    "session_from_dict",
    "session_from_yaml",
    "session_to_dict",
    "session_to_yaml",
]
