from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"

    # ---------------- WAREHOUSES ----------------
    WAREHOUSE_NOT_FOUND = "WAREHOUSE_NOT_FOUND"
    WAREHOUSE_CODE_EXISTS = "WAREHOUSE_CODE_EXISTS"

    # ---------------- LOCATION TREE ----------------
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"
    DEPTH_MISMATCH = "DEPTH_MISMATCH"
    DUPLICATE_CODE = "DUPLICATE_CODE"
    INACTIVE_PARENT = "INACTIVE_PARENT"
    INVALID_LABEL = "INVALID_LABEL"
    CODE_MISMATCH = "CODE_MISMATCH"
    LOCATION_VERSION_CONFLICT = "LOCATION_VERSION_CONFLICT"
    LOCATION_STATE_INVALID = "LOCATION_STATE_INVALID"
    LOCATION_HAS_ACTIVE_CHILDREN = "LOCATION_HAS_ACTIVE_CHILDREN"

    # ---------------- LAYOUTS ----------------
    LAYOUT_NOT_FOUND = "LAYOUT_NOT_FOUND"
