"""Compression and extraction of single files inside an archive stream.

Each stored file is laid out as a 24-byte header (check sum, compressed size,
original size; little-endian 64-bit integers), the NUL-terminated stored path,
one byte holding the number of distinct byte values, the serialized Huffman
tree and finally the encoded data.
"""

from __future__ import annotations

import contextlib
import os
import struct
from typing import BinaryIO

from .buffers import BitReader, BitWriter
from .huffman import Node, build_tree, code_table, count_frequencies
from .paths import SERIALIZE_SEP, create_dirs_for_file, free_file_path, path_concat
from .types import BYTE_LENGTH, MAX_CODES_COUNT, ArchivatorError, FileData

HEADER = struct.Struct("<QQQ")
INVALID_ARCHIVE = "Invalid archive"


def _write_node(node: Node, writer: BitWriter) -> None:
    if node.is_leaf():
        writer.push(1)
        for shift in range(BYTE_LENGTH - 1, -1, -1):
            writer.push((node.value >> shift) & 1)
        return
    writer.push(0)
    for child in (node.left, node.right):
        if child is not None:
            _write_node(child, writer)


def write_tree(tree: Node, writer: BitWriter, codes_count: int) -> None:
    """Write the leaf count byte and the tree in pre-order, then pad to a byte."""
    writer.write_bytes(bytes([codes_count & 0xFF]))
    _write_node(tree, writer)
    writer.flush()


def read_tree(reader: BitReader) -> Node:
    """Read a tree written by write_tree; raise EOFError if the data ends early."""
    remaining = reader.read_bytes(1)[0] or MAX_CODES_COUNT

    def fill(node: Node) -> None:
        nonlocal remaining
        if remaining == 0:
            return
        if reader.pop_bit():
            value = 0
            for _ in range(BYTE_LENGTH):
                value = (value << 1) | reader.pop_bit()
            node.value = value
            remaining -= 1
            return
        node.left = Node()
        fill(node.left)
        node.right = Node()
        fill(node.right)

    root = Node()
    fill(root)
    reader.reset()
    return root


def _read_header(archive: BinaryIO) -> tuple[int, int, int]:
    raw = archive.read(HEADER.size)
    if len(raw) != HEADER.size:
        raise ArchivatorError(INVALID_ARCHIVE)
    return HEADER.unpack(raw)


def _decode(reader: BitReader, tree: Node, length: int) -> bytes:
    if tree.is_leaf():
        # A single-symbol tree gives that symbol an empty code.
        return bytes([tree.value]) * length
    out = bytearray()
    node = tree
    while len(out) < length:
        node = node.right if reader.pop_bit() else node.left
        if node is None:
            raise ArchivatorError(INVALID_ARCHIVE)
        if node.is_leaf():
            out.append(node.value)
            node = tree
    return bytes(out)


def archivate_file(source_path: str, serialized_path: str, archive: BinaryIO) -> FileData:
    """Compress the file at source_path into archive under serialized_path."""
    try:
        with open(source_path, "rb") as source:
            data = source.read()
    except OSError as exc:
        raise ArchivatorError(f"Can't open file to read: {source_path}") from exc

    frequencies = count_frequencies(data)
    tree = build_tree(frequencies)

    header_pos = archive.tell()
    archive.write(bytes(HEADER.size))

    writer = BitWriter(archive)
    writer.write_string(serialized_path)
    if tree is not None:
        write_tree(tree, writer, sum(1 for freq in frequencies if freq))
        codes = {value: [char == "1" for char in code] for value, code in code_table(tree).items()}
        for byte in data:
            for bit in codes[byte]:
                writer.push(bit)
        writer.flush()

    end_pos = archive.tell()
    archive.seek(header_pos)
    archive.write(HEADER.pack(writer.check_sum, writer.bytes_count, len(data)))
    archive.seek(end_pos)

    return FileData(
        path=source_path,
        base_size_bytes=len(data),
        compress_size_bytes=writer.bytes_count,
        is_valid_check_sum=True,
    )


def dearchivate_file(archive: BinaryIO, dest_dir: str) -> FileData:
    """Extract the next stored file from archive into dest_dir."""
    _, compress_size, base_size = _read_header(archive)
    reader = BitReader(archive)
    try:
        rel_path = reader.read_string()
    except (EOFError, ValueError) as exc:
        raise ArchivatorError(INVALID_ARCHIVE) from exc

    dest_path = path_concat(dest_dir, rel_path, SERIALIZE_SEP) if dest_dir else rel_path
    try:
        create_dirs_for_file(dest_path)
        target = free_file_path(dest_path)
        destination = open(target, "wb")
    except OSError as exc:
        raise ArchivatorError(f"Can't save file: {rel_path}") from exc

    try:
        with destination:
            if base_size:
                tree = read_tree(reader)
                destination.write(_decode(reader, tree, base_size))
    except (EOFError, ArchivatorError) as exc:
        with contextlib.suppress(OSError):
            os.remove(target)
        raise ArchivatorError(INVALID_ARCHIVE) from exc

    return FileData(
        path=target,
        base_size_bytes=base_size,
        compress_size_bytes=compress_size,
        is_valid_check_sum=True,
    )


def read_file_info(archive: BinaryIO) -> FileData:
    """Read the next stored file's facts, verifying its check sum."""
    check_sum, compress_size, base_size = _read_header(archive)
    reader = BitReader(archive)
    try:
        rel_path = reader.read_string()
        remaining_bits = max(0, compress_size - reader.bytes_count) * BYTE_LENGTH + reader.length
        for _ in range(remaining_bits):
            reader.pop_bit()
    except (EOFError, ValueError) as exc:
        raise ArchivatorError(INVALID_ARCHIVE) from exc

    return FileData(
        path=rel_path,
        base_size_bytes=base_size,
        compress_size_bytes=compress_size,
        is_valid_check_sum=reader.check_sum == check_sum,
    )