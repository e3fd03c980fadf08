import enum

class LayoutComponentType(str, enum.Enum):
    zone = "zone"
    aisle = "aisle"
    bin = "bin"
    dock = "dock"
    office = "office"
