"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from .slice_models import Slice


@dataclass(frozen=True)
class RemoteFileInfo:
    """
    Metadata of a file stored on the remote side.
    
    Attributes:
        path: Remote absolute path
        fs_id: Remote file id
        size: File size in bytes
        md5: Content hash reported by the remote side
        create_time: Creation time as Unix timestamp
        modify_time: Modification time as Unix timestamp
        extra: Raw fields the client did not map
    """
    path: str = ''
    fs_id: int = 0
    size: int = 0
    md5: str = ''
    create_time: int = 0
    modify_time: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def is_empty(self) -> bool:
        """Returns True when no remote file is described."""
        return not self.path
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RemoteFileInfo':
        """Create from a remote API response."""
        known = {'path', 'fs_id', 'size', 'md5', 'ctime', 'mtime'}
        return cls(
            path=data.get('path', ''),
            fs_id=int(data.get('fs_id', 0)),
            size=int(data.get('size', 0)),
            md5=data.get('md5', ''),
            create_time=int(data.get('ctime', 0)),
            modify_time=int(data.get('mtime', 0)),
            extra={k: v for k, v in data.items() if k not in known}
        )


@dataclass(frozen=True)
class RapidUploadResult:
    """
    Outcome of a content-addressed upload attempt.
    
    The hashes are computed by the client while trying, so they are
    useful even when the attempt itself failed.
    
    Attributes:
        file_info: Created remote file, None if the content was unknown
        file_md5: Hash of the whole local file
        slice_md5: Hash of the leading bytes of the local file
    """
    file_info: Optional[RemoteFileInfo] = None
    file_md5: str = ''
    slice_md5: str = ''
    
    @property
    def succeeded(self) -> bool:
        return self.file_info is not None and not self.file_info.is_empty


@dataclass(frozen=True)
class UploadProgress:
    """
    Upload progress information.
    
    Attributes:
        uploaded_bytes: Bytes uploaded so far
        total_bytes: Total file size
    """
    uploaded_bytes: int
    total_bytes: int
    
    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100
    
    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_bytes >= self.total_bytes


@dataclass(frozen=True)
class SliceError:
    """
    Payload of the 'error' event.
    
    Attributes:
        slice: Slice whose upload attempt raised
        error: The exception
    """
    slice: Slice
    error: BaseException
