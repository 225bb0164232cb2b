"""核心业务逻辑：工序排序、BOM 物料编辑、事件总线、计划状态联动"""
