import enum


class LocationDepth(enum.IntEnum):
    ZONE = 0
    AISLE = 1
    BIN = 2

    @property
    def label(self) -> str:
        return self.name.lower()
