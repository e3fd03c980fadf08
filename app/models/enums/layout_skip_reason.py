import enum


class LayoutSkipReason(str, enum.Enum):
    no_containing_zone = "no_containing_zone"
    no_containing_aisle = "no_containing_aisle"
    parent_not_created = "parent_not_created"
    invalid_name = "invalid_name"
    code_conflict = "code_conflict"
    already_exists = "already_exists"
    inactive_parent = "inactive_parent"
