from .boms import router as boms_router
from .routings import router as routings_router
from .production_plans import router as production_plans_router
from .work_orders import router as work_orders_router
from .master import (
    lines_router,
    processes_router,
    equipments_router,
    materials_router,
    products_router,
)

__all__ = [
    "boms_router",
    "routings_router",
    "production_plans_router",
    "work_orders_router",
    "lines_router",
    "processes_router",
    "equipments_router",
    "materials_router",
    "products_router",
]
