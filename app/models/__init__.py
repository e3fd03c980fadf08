# Inventory
from app.models.inventory.warehouse_models import Warehouse
from app.models.inventory.location_models import Location
from app.models.inventory.warehouse_layout_models import WarehouseLayout
