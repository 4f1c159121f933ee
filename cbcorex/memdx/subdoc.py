"""Sub-document operation descriptions and ordering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Protocol, Sequence, TypeVar


class SubdocOpFlag(IntFlag):
    """Flags applying to a single sub-document operation."""

    NONE = 0x00
    MKDIR_P = 0x01
    # 0x02 is unused, formerly the make-document flag.
    XATTR_PATH = 0x04
    # 0x08 is unused, formerly the access-deleted flag.
    EXPAND_MACROS = 0x10


class SubdocDocFlag(IntFlag):
    """Flags applying to the document as a whole in a sub-document request."""

    NONE = 0x00
    MKDOC = 0x01
    ADD_DOC = 0x02
    ACCESS_DELETED = 0x04
    CREATE_AS_DELETED = 0x08
    REVIVE_DOCUMENT = 0x10


class SubdocOp(Protocol):
    """Anything that can say whether it targets an extended attribute."""

    def is_xattr_op(self) -> bool: ...


@dataclass(frozen=True)
class LookupInOp:
    """One lookup within a multi-path sub-document lookup."""

    op: int
    flags: SubdocOpFlag = SubdocOpFlag.NONE
    path: bytes = b""

    def is_xattr_op(self) -> bool:
        """Whether the path refers to an extended attribute."""
        return bool(self.flags & SubdocOpFlag.XATTR_PATH)


@dataclass(frozen=True)
class MutateInOp:
    """One mutation within a multi-path sub-document mutation."""

    op: int
    flags: SubdocOpFlag = SubdocOpFlag.NONE
    path: bytes = b""
    value: bytes = b""

    def is_xattr_op(self) -> bool:
        """Whether the path refers to an extended attribute."""
        return bool(self.flags & SubdocOpFlag.XATTR_PATH)


OpT = TypeVar("OpT", bound=SubdocOp)


def reorder_subdoc_ops(ops: Sequence[OpT]) -> tuple[list[OpT], list[int]]:
    """Move extended-attribute operations to the front, keeping relative order.

    Returns the reordered operations and, for each original operation, its
    position in the reordered list.
    """
    xattr_positions = [i for i, op in enumerate(ops) if op.is_xattr_op()]
    body_positions = [i for i, op in enumerate(ops) if not op.is_xattr_op()]
    order = xattr_positions + body_positions

    reordered = [ops[i] for i in order]
    indexes = [0] * len(ops)
    for new_pos, old_pos in enumerate(order):
        indexes[old_pos] = new_pos
    return reordered, indexes