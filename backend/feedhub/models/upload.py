# FILE: backend/feedhub/models/upload.py
# Result of storing an incoming image: nothing sent, wrong type, or stored.

from dataclasses import dataclass
from typing import Optional, Union

@dataclass(frozen=True)
class UploadedFile:
    path: str
    original_filename: str
    content_type: str

@dataclass(frozen=True)
class NoFile:
    pass

@dataclass(frozen=True)
class RejectedType:
    filename: str
    content_type: Optional[str]

UploadOutcome = Union[NoFile, RejectedType, UploadedFile]
