from .master import (
    list_records,
    get_record,
    get_record_by_code,
    create_record,
    update_record,
    delete_record,
    list_lines,
    list_processes,
    list_equipments,
    list_materials,
    list_products,
    get_material_by_code,
    existing_names,
    existing_codes,
)

from .routing import (
    create_routing,
    get_routing,
    get_routing_by_code,
    list_routings,
    delete_routing,
    list_routing_steps,
    get_routing_steps_by_routing_id,
    max_routing_step_id,
    step_ids_owned_elsewhere,
    replace_routing_steps,
)

from .bom import (
    snapshot_step,
    create_bom,
    get_bom,
    list_boms,
    list_revisions,
    get_latest_active_bom,
    delete_bom,
    list_bom_items,
    get_bom_items_by_bom_id,
    list_bom_routing_steps,
    max_bom_item_id,
    item_ids_owned_elsewhere,
    replace_bom_items,
)

from .production import (
    create_production_plan,
    get_production_plan,
    get_plan_by_code,
    get_plans_by_codes,
    list_production_plans,
    list_plan_dates_and_codes,
    update_production_plan,
    delete_production_plan,
    summarize_orders_by_plan,
    create_work_order,
    get_work_order,
    list_work_orders,
    list_order_dates_and_codes,
    list_work_order_routing_steps,
    list_work_order_materials,
    update_work_order,
    delete_work_order,
)

__all__ = [
    # Master data
    "list_records",
    "get_record",
    "get_record_by_code",
    "create_record",
    "update_record",
    "delete_record",
    "list_lines",
    "list_processes",
    "list_equipments",
    "list_materials",
    "list_products",
    "get_material_by_code",
    "existing_names",
    "existing_codes",

    # Routing
    "create_routing",
    "get_routing",
    "get_routing_by_code",
    "list_routings",
    "delete_routing",
    "list_routing_steps",
    "get_routing_steps_by_routing_id",
    "max_routing_step_id",
    "step_ids_owned_elsewhere",
    "replace_routing_steps",

    # BOM
    "snapshot_step",
    "create_bom",
    "get_bom",
    "list_boms",
    "list_revisions",
    "get_latest_active_bom",
    "delete_bom",
    "list_bom_items",
    "get_bom_items_by_bom_id",
    "list_bom_routing_steps",
    "max_bom_item_id",
    "item_ids_owned_elsewhere",
    "replace_bom_items",

    # Production plan / work order
    "create_production_plan",
    "get_production_plan",
    "get_plan_by_code",
    "get_plans_by_codes",
    "list_production_plans",
    "list_plan_dates_and_codes",
    "update_production_plan",
    "delete_production_plan",
    "summarize_orders_by_plan",
    "create_work_order",
    "get_work_order",
    "list_work_orders",
    "list_order_dates_and_codes",
    "list_work_order_routing_steps",
    "list_work_order_materials",
    "update_work_order",
    "delete_work_order",
]
