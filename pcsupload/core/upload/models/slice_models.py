"""
Slice models.

A file is uploaded as an ordered list of Slice records. Progress of the
whole session lives in a SliceOwner that is passed alongside the slices
rather than referenced from them.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class SliceStatus(IntEnum):
    """
    Upload status of a slice.
    
    The integer values are persisted in slice state files and must not
    change. RETRYING shares its value with UPLOADING: a retry is an
    upload attempt of a slice that did not succeed before.
    """
    PENDING = 0
    UPLOADING = 1
    RETRYING = 1
    SUCCEEDED = 2
    FAILED = 3
    CANCELLED = 4
    
    @property
    def is_terminal(self) -> bool:
        """Returns True for states no further attempt can leave."""
        return self in (SliceStatus.SUCCEEDED, SliceStatus.CANCELLED)


@dataclass
class Slice:
    """
    One contiguous byte range of a file.
    
    Attributes:
        index: Position in the slice list
        offset: Start position in bytes
        length: Slice size in bytes
        bytes_finished: Bytes already handed to the transport
        status: Current upload status
        md5: Hash assigned by the remote side once the slice succeeded
    """
    index: int
    offset: int
    length: int
    bytes_finished: int = 0
    status: SliceStatus = SliceStatus.PENDING
    md5: str = ''
    
    @property
    def end(self) -> int:
        """Returns end position (exclusive)."""
        return self.offset + self.length
    
    @property
    def remaining(self) -> int:
        """Returns bytes not yet handed to the transport."""
        return self.length - self.bytes_finished
    
    @property
    def succeeded(self) -> bool:
        return self.status == SliceStatus.SUCCEEDED


@dataclass
class SliceOwner:
    """
    Per-session progress and cancellation state.
    
    Attributes:
        file_path: Absolute local path of the source file
        total_size: File size at planning time
        bytes_finished: Sum of bytes_finished over all slices
        cancelled: Set once, never cleared
    """
    file_path: str
    total_size: int
    bytes_finished: int = 0
    cancelled: bool = False
    
    def advance(self, slice_: Slice, count: int) -> None:
        """Account count freshly transferred bytes of slice_."""
        slice_.bytes_finished += count
        self.bytes_finished += count
    
    def rollback(self, slice_: Slice) -> None:
        """Drop everything slice_ contributed to the session progress."""
        self.bytes_finished -= slice_.bytes_finished
        slice_.bytes_finished = 0
    
    def cancel(self, slice_: Optional[Slice] = None) -> None:
        """Cancel the session, and slice_ with it when given."""
        if slice_ is not None:
            slice_.status = SliceStatus.CANCELLED
        self.cancelled = True
