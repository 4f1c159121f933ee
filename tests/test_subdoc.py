import pytest

from cbcorex.memdx.subdoc import (
    LookupInOp,
    MutateInOp,
    SubdocOpFlag,
    reorder_subdoc_ops,
)


@pytest.mark.parametrize(
    "flags, expected",
    [
        (SubdocOpFlag.NONE, False),
        (SubdocOpFlag.MKDIR_P, False),
        (SubdocOpFlag.XATTR_PATH, True),
        (SubdocOpFlag.XATTR_PATH | SubdocOpFlag.EXPAND_MACROS, True),
        (SubdocOpFlag.MKDIR_P | SubdocOpFlag.EXPAND_MACROS, False),
    ],
)
def test_is_xattr_op(flags, expected):
    assert LookupInOp(op=1, flags=flags, path=b"a").is_xattr_op() is expected
    assert MutateInOp(op=1, flags=flags, path=b"a", value=b"1").is_xattr_op() is expected


def test_reorder_puts_xattrs_first_and_keeps_order():
    ops = [
        LookupInOp(op=1, path=b"body1"),
        LookupInOp(op=1, flags=SubdocOpFlag.XATTR_PATH, path=b"x1"),
        LookupInOp(op=1, path=b"body2"),
        LookupInOp(op=1, flags=SubdocOpFlag.XATTR_PATH, path=b"x2"),
    ]
    reordered, indexes = reorder_subdoc_ops(ops)

    assert [op.path for op in reordered] == [b"x1", b"x2", b"body1", b"body2"]
    assert indexes == [2, 0, 3, 1]


def test_reorder_index_mapping_invariant():
    ops = [
        MutateInOp(op=2, flags=SubdocOpFlag.XATTR_PATH if i % 3 == 0 else SubdocOpFlag.NONE,
                   path=str(i).encode(), value=b"v")
        for i in range(10)
    ]
    reordered, indexes = reorder_subdoc_ops(ops)

    assert len(reordered) == len(ops)
    assert sorted(indexes) == list(range(len(ops)))
    for original, pos in zip(ops, indexes):
        assert reordered[pos] is original
    xattr_count = sum(op.is_xattr_op() for op in ops)
    assert all(op.is_xattr_op() for op in reordered[:xattr_count])
    assert not any(op.is_xattr_op() for op in reordered[xattr_count:])


def test_reorder_empty():
    assert reorder_subdoc_ops([]) == ([], [])


def test_reorder_without_xattrs_is_identity():
    ops = [LookupInOp(op=1, path=b"a"), LookupInOp(op=1, path=b"b")]
    reordered, indexes = reorder_subdoc_ops(ops)
    assert reordered == ops
    assert indexes == [0, 1]