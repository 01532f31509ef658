# uischema/engine/schema/relations.py

from typing import Optional, Set
from .definitions import Schema, RelationRecord
from .exceptions import MalformedSchemaError

# 树中不存储 parent / previous 指针，每次查询都通过反向扫描 components 推导。
# 扫描顺序为 components 的插入顺序，因此结果是确定的。

def find_component_pointing_to(schema: Schema, pointer: str, target_id: Optional[str]) -> Optional[str]:
    """返回第一个 `pointer` 字段 (next / child) 等于 target_id 的组件 ID。"""
    if target_id is None:
        return None
    for component_id, component in schema.components.items():
        if component is not None and getattr(component, pointer) == target_id:
            return component_id
    return None

def get_meta_data(schema: Schema, component_id: str) -> RelationRecord:
    """
    返回组件的关系记录。
    对不存在的 ID：next / child 为 None，previous / parent 仍按悬空指针推导。
    """
    component = schema.get(component_id)
    return RelationRecord(
        id=component_id,
        previous=find_component_pointing_to(schema, "next", component_id),
        parent=find_component_pointing_to(schema, "child", component_id),
        next=component.next if component else None,
        child=component.child if component else None,
    )

def get_root_id(schema: Schema, component_id: str) -> Optional[str]:
    """
    沿 previous 链向上走到该兄弟链的第一个节点，返回拥有它的父节点。
    顶层链 (没有父节点) 或未知 ID 返回 None。
    """
    meta = get_meta_data(schema, component_id)
    seen: Set[str] = {meta.id}
    while not meta.parent and meta.previous:
        if meta.previous in seen:
            raise MalformedSchemaError(f"Cycle detected in sibling chain of '{component_id}'.")
        seen.add(meta.previous)
        meta = get_meta_data(schema, meta.previous)
    return meta.parent
