# uischema/engine/schema/workflow_state.py

from typing import Dict, Optional
from .definitions import Schema, Component
from .traversal import walk

def update_workflow_state(schema: Schema, last_completed_id: Optional[str], current_id: Optional[str]) -> Schema:
    """
    更新工作流各步骤的视觉状态，返回新的 Schema。
    - 只有 current_id 对应的组件 current=True
    - 遍历顺序中位于 last_completed_id 之后的组件 (current 除外) disabled=True
    嵌套组件同样被遍历，按相同规则设置。
    """
    components: Dict[str, Optional[Component]] = dict(schema.components)
    has_visited_last_completed = False

    for component_id, component in walk(schema, schema.child):
        is_current = component_id == current_id
        config = component.config.model_copy(update={
            "disabled": not is_current and has_visited_last_completed,
            "current": is_current,
        })
        components[component_id] = component.model_copy(update={"config": config})

        if component_id == last_completed_id:
            has_visited_last_completed = True

    return schema.model_copy(update={"components": components})
