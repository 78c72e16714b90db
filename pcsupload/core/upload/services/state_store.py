"""
Slice state persistence.

A slice state file is a headerless sequence of fixed-size records, one
per slice, in index order:

    index:int32 offset:int64 length:int64 bytes_finished:int64
    status:int32 md5:32 bytes (ASCII, NUL padded)

All fields are little-endian. The file name combines a hash of the
lowercased local path with the content hash of the file, so state left
behind for an older version of the file is never picked up.
"""
import struct
from pathlib import Path
from typing import List, Union

import aiofiles
import aiofiles.os
from Crypto.Hash import MD5

from ..models import Slice, SliceOwner, SliceStatus
from ...exceptions import SliceStateError
from ...logging import get_logger

RECORD_FORMAT = '<iqqqi32s'
RECORD_SIZE = struct.calcsize(RECORD_FORMAT)
HASH_FIELD_SIZE = 32
STATE_FILE_SUFFIX = '.slice'


def pack_slice(slice_: Slice) -> bytes:
    """
    Encode one slice record.
    
    Raises:
        ValueError: If the slice hash is not ASCII or longer than 32 chars
    """
    md5 = slice_.md5.encode('ascii') if slice_.md5 else b''
    if len(md5) > HASH_FIELD_SIZE:
        raise ValueError(
            f"Slice {slice_.index} hash is {len(md5)} bytes, max {HASH_FIELD_SIZE}"
        )
    return struct.pack(
        RECORD_FORMAT,
        slice_.index,
        slice_.offset,
        slice_.length,
        slice_.bytes_finished,
        int(slice_.status),
        md5
    )


def unpack_slice(record: bytes) -> Slice:
    """
    Decode one slice record.
    
    Raises:
        SliceStateError: If the record holds an unknown status or a
            non-ASCII hash
    """
    index, offset, length, finished, status, md5 = struct.unpack(RECORD_FORMAT, record)
    try:
        status = SliceStatus(status)
        md5 = md5.decode('ascii').strip('\0').strip()
    except (ValueError, UnicodeDecodeError) as e:
        raise SliceStateError(f"Invalid record for slice {index}: {e}") from e
    return Slice(
        index=index,
        offset=offset,
        length=length,
        bytes_finished=finished,
        status=status,
        md5=md5
    )


class SliceStateStore:
    """
    Saves and restores slice lists on local disk.
    
    Responsibilities:
    - Derive the state file path for a local file
    - Checkpoint a slice list
    - Rebuild a slice list and its session progress from a checkpoint
    """
    
    def __init__(self, slice_dir: Union[str, Path] = ''):
        """
        Initialize store.
        
        Args:
            slice_dir: Directory for state files ('' = current directory)
        """
        self.slice_dir = slice_dir
        self._logger = get_logger('pcsupload.upload.state')
    
    def path_for(self, local_path: Union[str, Path], file_md5: str) -> Path:
        """
        Build the state file path for a local file.
        
        Args:
            local_path: Absolute local path of the source file
            file_md5: Content hash of the source file
        """
        path_hash = MD5.new(str(local_path).lower().encode('utf-8')).hexdigest()
        name = f"{path_hash}-{file_md5}{STATE_FILE_SUFFIX}"
        if self.slice_dir:
            return Path(self.slice_dir) / name
        return Path(name)
    
    async def exists(self, state_path: Union[str, Path]) -> bool:
        """Returns True if a state file exists at state_path."""
        return await aiofiles.os.path.isfile(state_path)
    
    async def save(self, state_path: Union[str, Path], slices: List[Slice]) -> None:
        """
        Checkpoint a slice list, replacing any previous state.
        
        The records go to a temporary sibling first and are moved into
        place, so readers see either the old or the new checkpoint.
        """
        state_path = Path(state_path)
        data = b''.join(pack_slice(s) for s in sorted(slices, key=lambda s: s.index))
        
        if str(state_path.parent) not in ('', '.'):
            await aiofiles.os.makedirs(state_path.parent, exist_ok=True)
        
        tmp_path = state_path.with_name(state_path.name + '.tmp')
        async with aiofiles.open(tmp_path, 'wb') as f:
            await f.write(data)
        await aiofiles.os.replace(tmp_path, state_path)
        
        self._logger.debug(f"Saved {len(slices)} slices to {state_path}")
    
    async def restore(self, state_path: Union[str, Path], owner: SliceOwner) -> List[Slice]:
        """
        Rebuild a slice list from a state file.
        
        Succeeded slices keep their progress, which is added to owner.
        Every other slice starts over as PENDING with nothing transferred.
        
        Args:
            state_path: State file written by save()
            owner: Session the slices belong to
            
        Returns:
            Slices in index order
            
        Raises:
            SliceStateError: If the file is truncated or its slices do not
                cover the file exactly
            OSError: If the file cannot be read
        """
        async with aiofiles.open(state_path, 'rb') as f:
            data = await f.read()
        
        if len(data) % RECORD_SIZE:
            raise SliceStateError(
                f"Truncated slice state: {len(data)} bytes is not a multiple of {RECORD_SIZE}",
                state_path=str(state_path)
            )
        
        slices = [
            unpack_slice(data[pos:pos + RECORD_SIZE])
            for pos in range(0, len(data), RECORD_SIZE)
        ]
        self._check_layout(slices, owner.total_size, state_path)
        
        restored = 0
        for slice_ in slices:
            if slice_.status == SliceStatus.SUCCEEDED:
                owner.bytes_finished += slice_.bytes_finished
                restored += 1
            else:
                slice_.status = SliceStatus.PENDING
                slice_.bytes_finished = 0
        
        self._logger.info(
            f"Restored {len(slices)} slices from {state_path} ({restored} already uploaded)"
        )
        return slices
    
    async def delete(self, state_path: Union[str, Path]) -> None:
        """Remove a state file; a missing file is not an error."""
        try:
            await aiofiles.os.remove(state_path)
            self._logger.debug(f"Deleted slice state {state_path}")
        except FileNotFoundError:
            pass
    
    def _check_layout(self, slices: List[Slice], total_size: int, state_path) -> None:
        """Ensure slices tile [0, total_size) in index order."""
        position = 0
        for expected_index, slice_ in enumerate(slices):
            if slice_.index != expected_index or slice_.offset != position:
                raise SliceStateError(
                    f"Slice {slice_.index} does not continue at offset {position}",
                    state_path=str(state_path)
                )
            if slice_.length <= 0 or not 0 <= slice_.bytes_finished <= slice_.length:
                raise SliceStateError(
                    f"Slice {slice_.index} has inconsistent length or progress",
                    state_path=str(state_path)
                )
            if slice_.status == SliceStatus.SUCCEEDED and not slice_.md5:
                raise SliceStateError(
                    f"Slice {slice_.index} is marked uploaded but has no hash",
                    state_path=str(state_path)
                )
            position = slice_.end
        
        if position != total_size:
            raise SliceStateError(
                f"Slices cover {position} bytes, file has {total_size}",
                state_path=str(state_path)
            )
