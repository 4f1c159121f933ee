"""Response status codes of the memcached binary protocol."""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    """Status code carried by a response packet."""

    SUCCESS = 0x00
    KEY_NOT_FOUND = 0x01
    KEY_EXISTS = 0x02
    TOO_BIG = 0x03
    INVALID_ARGS = 0x04
    NOT_STORED = 0x05
    BAD_DELTA = 0x06
    NOT_MY_VBUCKET = 0x07
    NO_BUCKET = 0x08
    LOCKED = 0x09
    AUTH_STALE = 0x1F
    AUTH_ERROR = 0x20
    AUTH_CONTINUE = 0x21
    RANGE_ERROR = 0x22
    ROLLBACK = 0x23
    ACCESS_ERROR = 0x24
    NOT_INITIALIZED = 0x25
    RATE_LIMITED_NETWORK_INGRESS = 0x30
    RATE_LIMITED_NETWORK_EGRESS = 0x31
    RATE_LIMITED_MAX_CONNECTIONS = 0x32
    RATE_LIMITED_MAX_COMMANDS = 0x33
    RATE_LIMITED_SCOPE_SIZE_LIMIT_EXCEEDED = 0x34
    UNKNOWN_COMMAND = 0x81
    OUT_OF_MEMORY = 0x82
    NOT_SUPPORTED = 0x83
    INTERNAL_ERROR = 0x84
    BUSY = 0x85
    TMP_FAIL = 0x86
    COLLECTION_UNKNOWN = 0x88
    SCOPE_UNKNOWN = 0x8C
    DCP_STREAM_ID_INVALID = 0x8D
    DURABILITY_INVALID_LEVEL = 0xA0
    DURABILITY_IMPOSSIBLE = 0xA1
    SYNC_WRITE_IN_PROGRESS = 0xA2
    SYNC_WRITE_AMBIGUOUS = 0xA3
    SYNC_WRITE_RECOMMIT_IN_PROGRESS = 0xA4
    RANGE_SCAN_CANCELLED = 0xA5
    RANGE_SCAN_MORE = 0xA6
    RANGE_SCAN_COMPLETE = 0xA7
    RANGE_SCAN_VB_UUID_NOT_EQUAL = 0xA8
    SUBDOC_PATH_NOT_FOUND = 0xC0
    SUBDOC_PATH_MISMATCH = 0xC1
    SUBDOC_PATH_INVALID = 0xC2
    SUBDOC_PATH_TOO_BIG = 0xC3
    SUBDOC_DOC_TOO_DEEP = 0xC4
    SUBDOC_CANT_INSERT = 0xC5
    SUBDOC_NOT_JSON = 0xC6
    SUBDOC_BAD_RANGE = 0xC7
    SUBDOC_BAD_DELTA = 0xC8
    SUBDOC_PATH_EXISTS = 0xC9
    SUBDOC_VALUE_TOO_DEEP = 0xCA
    SUBDOC_INVALID_COMBO = 0xCB
    SUBDOC_MULTI_PATH_FAILURE = 0xCC
    SUBDOC_SUCCESS_DELETED = 0xCD
    SUBDOC_XATTR_INVALID_FLAG_COMBO = 0xCE
    SUBDOC_XATTR_INVALID_KEY_COMBO = 0xCF
    SUBDOC_XATTR_UNKNOWN_MACRO = 0xD0
    SUBDOC_XATTR_UNKNOWN_VATTR = 0xD1
    SUBDOC_XATTR_CANNOT_MODIFY_VATTR = 0xD2
    SUBDOC_MULTI_PATH_FAILURE_DELETED = 0xD3
    SUBDOC_INVALID_XATTR_ORDER = 0xD4
    SUBDOC_XATTR_UNKNOWN_VATTR_MACRO = 0xD5
    SUBDOC_CAN_ONLY_REVIVE_DELETED_DOCUMENTS = 0xD6
    SUBDOC_DELETED_DOCUMENT_CANT_HAVE_VALUE = 0xD7

    def __str__(self) -> str:
        return status_to_string(self)


_STATUS_NAMES = {
    Status.SUCCESS: "Success",
    Status.KEY_NOT_FOUND: "KeyNotFound",
    Status.KEY_EXISTS: "KeyExists",
    Status.TOO_BIG: "TooBig",
    Status.INVALID_ARGS: "InvalidArgs",
    Status.NOT_STORED: "NotStored",
    Status.BAD_DELTA: "BadDelta",
    Status.NOT_MY_VBUCKET: "NotMyVBucket",
    Status.NO_BUCKET: "NoBucket",
    Status.AUTH_STALE: "AuthStale",
    Status.AUTH_ERROR: "AuthError",
    Status.AUTH_CONTINUE: "AuthContinue",
    Status.RANGE_ERROR: "RangeError",
    Status.ACCESS_ERROR: "AccessError",
    Status.NOT_INITIALIZED: "NotInitialized",
    Status.ROLLBACK: "Rollback",
    Status.UNKNOWN_COMMAND: "UnknownCommand",
    Status.OUT_OF_MEMORY: "OutOfMemory",
    Status.NOT_SUPPORTED: "NotSupported",
    Status.INTERNAL_ERROR: "InternalError",
    Status.BUSY: "Busy",
    Status.TMP_FAIL: "TmpFail",
    Status.COLLECTION_UNKNOWN: "CollectionUnknown",
    Status.SCOPE_UNKNOWN: "ScopeUnknown",
    Status.DCP_STREAM_ID_INVALID: "DCPStreamIDInvalid",
    Status.DURABILITY_INVALID_LEVEL: "DurabilityInvalidLevel",
    Status.DURABILITY_IMPOSSIBLE: "DurabilityImpossible",
    Status.SYNC_WRITE_IN_PROGRESS: "SyncWriteInProgress",
    Status.SYNC_WRITE_AMBIGUOUS: "SyncWriteAmbiguous",
    Status.SUBDOC_PATH_NOT_FOUND: "SubDocPathNotFound",
    Status.SUBDOC_PATH_MISMATCH: "SubDocPathMismatch",
    Status.SUBDOC_PATH_INVALID: "SubDocPathInvalid",
    Status.SUBDOC_PATH_TOO_BIG: "SubDocPathTooBig",
    Status.SUBDOC_DOC_TOO_DEEP: "SubDocDocTooDeep",
    Status.SUBDOC_CANT_INSERT: "SubDocCantInsert",
    Status.SUBDOC_NOT_JSON: "SubDocNotJSON",
    Status.SUBDOC_BAD_RANGE: "SubDocBadRange",
    Status.SUBDOC_BAD_DELTA: "SubDocBadDelta",
    Status.SUBDOC_PATH_EXISTS: "SubDocPathExists",
    Status.SUBDOC_VALUE_TOO_DEEP: "SubDocValueTooDeep",
    Status.SUBDOC_INVALID_COMBO: "SubDocBadCombo",
    Status.SUBDOC_MULTI_PATH_FAILURE: "SubDocBadMulti",
    Status.SUBDOC_SUCCESS_DELETED: "SubDocSuccessDeleted",
    Status.SUBDOC_XATTR_INVALID_FLAG_COMBO: "SubDocXattrInvalidFlagCombo",
    Status.SUBDOC_XATTR_INVALID_KEY_COMBO: "SubDocXattrInvalidKeyCombo",
    Status.SUBDOC_XATTR_UNKNOWN_MACRO: "SubDocXattrUnknownMacro",
    Status.SUBDOC_XATTR_UNKNOWN_VATTR: "SubDocXattrUnknownVAttr",
    Status.SUBDOC_XATTR_CANNOT_MODIFY_VATTR: "SubDocXattrCannotModifyVAttr",
    Status.SUBDOC_MULTI_PATH_FAILURE_DELETED: "SubDocMultiPathFailureDeleted",
    Status.SUBDOC_XATTR_UNKNOWN_VATTR_MACRO: "SubdocXattrUnknownVattrMacro",
    Status.SUBDOC_CAN_ONLY_REVIVE_DELETED_DOCUMENTS: "SubDocCanOnlyReviveDeletedDocuments",
    Status.SUBDOC_DELETED_DOCUMENT_CANT_HAVE_VALUE: "SubDocDeletedDocumentCantHaveValue",
    Status.SUBDOC_INVALID_XATTR_ORDER: "SubDocInvalidXattrOrder",
}


def status_to_string(value: int) -> str:
    """Return the textual name of a status, or its low byte in hex prefixed by 'x'."""
    name = _STATUS_NAMES.get(value)
    if name is not None:
        return name
    return "x" + bytes([int(value) & 0xFF]).hex()