"""Descriptor source: decode candidate files into binary descriptors."""

import logging
import os
import struct
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

import pefile
from elftools.common.exceptions import ELFError
from elftools.construct.core import ConstructError
from elftools.elf.elffile import ELFFile

from .errors import BinaryFormatError, ScanIOError
from .graph_model import BinaryDescriptor, DescriptorFailure, NodeType

logger = logging.getLogger(__name__)

ELF_MAGIC = b"\x7fELF"
PE_MAGIC = b"MZ"
SHEBANG = b"#!"
SHEBANG_MAX_LINE = 256
DF_1_PIE = 0x08000000
DECODE_CHUNKSIZE = 16

DescriptorResult = Union[BinaryDescriptor, DescriptorFailure]


def decode_descriptor(path: str) -> BinaryDescriptor:
    """Decode one file, raising ScanIOError or BinaryFormatError on failure."""
    try:
        with open(path, "rb") as stream:
            head = stream.read(SHEBANG_MAX_LINE)
    except OSError as error:
        raise ScanIOError(path, error.strerror or str(error)) from error

    if head.startswith(ELF_MAGIC):
        node_type, dependencies = _decode_elf(path)
    elif head.startswith(PE_MAGIC):
        node_type, dependencies = _decode_pe(path)
    elif head.startswith(SHEBANG):
        node_type, dependencies = NodeType.INTERPRETED_EXECUTABLE, _shebang_dependencies(head)
    elif not head:
        raise BinaryFormatError(path, "empty file")
    else:
        raise BinaryFormatError(path, "unrecognized container format")

    logger.debug("decoded %s as %s with %d dependencies", path, node_type.value, len(dependencies))
    resolved = Path(path).resolve()
    return BinaryDescriptor(
        name=os.path.basename(path),
        absolute_path=str(resolved),
        node_type=node_type,
        declared_dependencies=dependencies,
    )


def iter_descriptors(paths: Iterable[str], jobs: int = 1) -> Iterator[DescriptorResult]:
    """Yield a descriptor or a failure per path, in input order."""
    if jobs <= 1:
        for path in paths:
            yield _try_decode(path)
        return

    # Decoding is pure-Python CPU work, so workers are processes, not threads.
    with ProcessPoolExecutor(max_workers=jobs) as executor:
        yield from executor.map(_try_decode, paths, chunksize=DECODE_CHUNKSIZE)


def _try_decode(path: str) -> DescriptorResult:
    try:
        return decode_descriptor(path)
    except (ScanIOError, BinaryFormatError) as error:
        return DescriptorFailure(path=path, error=error)


def _decode_elf(path: str) -> Tuple[NodeType, List[str]]:
    try:
        with open(path, "rb") as stream:
            elf = ELFFile(stream)
            e_type = elf.header["e_type"]
            has_interp = False
            flags_1 = 0
            has_soname = False
            dependencies: List[str] = []
            for segment in elf.iter_segments():
                p_type = segment["p_type"]
                if p_type == "PT_INTERP":
                    has_interp = True
                elif p_type == "PT_DYNAMIC":
                    for tag in segment.iter_tags():
                        d_tag = tag.entry.d_tag
                        if d_tag == "DT_NEEDED":
                            dependencies.append(tag.needed)
                        elif d_tag == "DT_FLAGS_1":
                            flags_1 = tag.entry.d_val
                        elif d_tag == "DT_SONAME":
                            has_soname = True
    except OSError as error:
        raise ScanIOError(path, error.strerror or str(error)) from error
    # pyelftools reports some malformed dynamic tables through bare asserts.
    except (ELFError, ConstructError, ValueError, struct.error, AssertionError) as error:
        raise BinaryFormatError(path, f"elf: {str(error) or type(error).__name__}") from error

    if e_type == "ET_EXEC":
        return NodeType.ELF_BINARY, dependencies
    if e_type == "ET_DYN":
        # libc carries PT_INTERP so it can run, yet it is a library with a soname.
        is_executable = bool(flags_1 & DF_1_PIE) or (has_interp and not has_soname)
        node_type = NodeType.ELF_BINARY if is_executable else NodeType.ELF_LIBRARY
        return node_type, dependencies
    raise BinaryFormatError(path, f"elf: unsupported object type {e_type}")


def _decode_pe(path: str) -> Tuple[NodeType, List[str]]:
    try:
        pe = pefile.PE(path, fast_load=True)
    except OSError as error:
        raise ScanIOError(path, error.strerror or str(error)) from error
    except pefile.PEFormatError as error:
        raise BinaryFormatError(path, f"pe: {error.value}") from error

    try:
        pe.parse_data_directories(
            directories=[pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_IMPORT"]]
        )
        dependencies = [
            entry.dll.decode("utf-8", errors="replace")
            for entry in getattr(pe, "DIRECTORY_ENTRY_IMPORT", [])
            if entry.dll
        ]
    except pefile.PEFormatError as error:
        raise BinaryFormatError(path, f"pe: {error.value}") from error
    finally:
        pe.close()
    return NodeType.PORTABLE_EXECUTABLE, dependencies


def _shebang_dependencies(head: bytes) -> List[str]:
    """Return the interpreter named by a '#!' line, unwrapping /usr/bin/env."""
    line = head[len(SHEBANG):].split(b"\n", 1)[0]
    parts = line.decode("utf-8", errors="replace").split()
    if not parts:
        return []

    interpreter = os.path.basename(parts[0])
    if interpreter != "env":
        return [interpreter]

    for arg in parts[1:]:
        if arg.startswith("-") or "=" in arg:
            continue
        return [os.path.basename(arg)]
    return [interpreter]
