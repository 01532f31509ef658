# uischema/engine/schema/patch.py

import logging
from enum import Enum
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field, ConfigDict

from .definitions import Schema, Component, ComponentConfig

logger = logging.getLogger(__name__)

class FieldChange(str, Enum):
    """补丁中单个字段的三态变化"""
    KEEP = "keep"     # 字段未出现在补丁中
    SET = "set"       # 字段被设置为一个值
    CLEAR = "clear"   # 字段被显式设置为 None

class ComponentPatch(BaseModel):
    """
    单个组件的稀疏补丁。
    “未设置”与“设置为 None”通过 pydantic 的 model_fields_set 区分，
    序列化时使用 exclude_unset=True 只输出真正发生变化的字段。
    """
    id: Optional[str] = None
    type: Optional[str] = None
    config: Optional[ComponentConfig] = None
    next: Optional[str] = None
    child: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    def change_for(self, field: str) -> FieldChange:
        if field not in self.model_fields_set:
            return FieldChange.KEEP
        return FieldChange.CLEAR if getattr(self, field) is None else FieldChange.SET

    def changed_values(self) -> Dict[str, Any]:
        return {field: getattr(self, field) for field in self.model_fields_set}

    @classmethod
    def from_component(cls, component: Component) -> "ComponentPatch":
        return cls.model_validate(component.model_dump(exclude_unset=True))

class SchemaPatch(BaseModel):
    """
    一次结构编辑的结果：
    - child: 仅在 schema 根指针变化时设置
    - components: 组件 ID -> ComponentPatch；值为 None 表示删除该组件；
      缺失的键表示“保持不变”
    """
    child: Optional[str] = None
    components: Dict[str, Optional[ComponentPatch]] = Field(default_factory=dict)

    @property
    def root_change(self) -> FieldChange:
        if "child" not in self.model_fields_set:
            return FieldChange.KEEP
        return FieldChange.CLEAR if self.child is None else FieldChange.SET

    def is_empty(self) -> bool:
        return not self.components and self.root_change == FieldChange.KEEP

    def set_root(self, child: Optional[str]) -> None:
        self.child = child

    def set_component(self, component_id: str, **fields: Any) -> Optional[ComponentPatch]:
        """在已有补丁条目上追加字段；若该组件已被标记删除则保持删除。"""
        if component_id in self.components and self.components[component_id] is None:
            return None
        existing = self.components.get(component_id)
        if existing is None:
            self.components[component_id] = ComponentPatch(**fields)
        else:
            self.components[component_id] = existing.model_copy(update=fields)
        return self.components[component_id]

    def delete_component(self, component_id: str) -> None:
        self.components[component_id] = None

    def merge(self, other: "SchemaPatch") -> "SchemaPatch":
        """合并两个补丁，other 中的字段优先。"""
        merged = SchemaPatch(components=dict(self.components))
        if self.root_change != FieldChange.KEEP:
            merged.set_root(self.child)
        if other.root_change != FieldChange.KEEP:
            merged.set_root(other.child)

        for component_id, change in other.components.items():
            if change is None:
                merged.delete_component(component_id)
            elif merged.components.get(component_id) is None:
                merged.components[component_id] = change
            else:
                merged.set_component(component_id, **change.changed_values())
        return merged

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.root_change != FieldChange.KEEP:
            data["child"] = self.child
        data["components"] = {
            component_id: None if change is None else change.model_dump(exclude_unset=True)
            for component_id, change in self.components.items()
        }
        return data

# ============================================================================
# 调用方侧：将补丁应用到 Schema 快照，得到新的快照
# ============================================================================

def _patch_component(component_id: str, current: Optional[Component], change: ComponentPatch) -> Component:
    if current is None:
        created = Component.model_validate(change.model_dump(exclude_unset=True))
        if created.id is None:
            created.id = component_id
        return created

    update: Dict[str, Any] = {}
    for field, value in change.changed_values().items():
        if field == "config" and value is not None:
            config_update = {key: getattr(value, key) for key in value.model_fields_set}
            update["config"] = current.config.model_copy(update=config_update)
        else:
            update[field] = value
    return current.model_copy(update=update)

def apply_patch(schema: Schema, patch: SchemaPatch) -> Schema:
    """返回应用补丁后的新 Schema；不修改输入。删除的组件会被真正移除。"""
    components = dict(schema.components)
    for component_id, change in patch.components.items():
        if change is None:
            components.pop(component_id, None)
            continue
        components[component_id] = _patch_component(component_id, components.get(component_id), change)

    update: Dict[str, Any] = {"components": components}
    if patch.root_change != FieldChange.KEEP:
        update["child"] = patch.child
    logger.debug(f"Applied patch touching {len(patch.components)} component(s)")
    return schema.model_copy(update=update)
