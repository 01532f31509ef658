from __future__ import annotations
from typing import List, Dict, Any, Optional, Union, NamedTuple
from pydantic import BaseModel, Field, ConfigDict

# ============================================================================
# 1. 输入操作 (Input Operation)
#    组件的值由模型中的其它字段计算得出，例如 composeFromFields
# ============================================================================

class FieldReference(BaseModel):
    """页面嵌套模型中的一个字段引用：model[page][id]"""
    page: str = Field(..., description="页面键")
    id: str = Field(..., description="页面内的字段名")

    model_config = ConfigDict(extra="ignore")

class InputOperationConfig(BaseModel):
    action: str = Field(..., min_length=1, description="已注册的输入操作名，如 'composeFromFields'")
    # 字符串 = 顶层模型键；FieldReference = 某页面下的字段
    fieldsArray: List[Union[FieldReference, str]] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

# ============================================================================
# 2. 组件与 Schema (Tree Store)
#    树不以嵌套数组表示，而是扁平的 components 映射 + next/child 两个指针
# ============================================================================

class ComponentConfig(BaseModel):
    """
    组件的开放配置。
    只声明引擎会读写的键，其余前端字段原样透传。
    """
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = Field(None, description="字段控件类型，如 'date'")
    value: Optional[Any] = None

    # --- 视觉状态 ---
    visible: Optional[bool] = None
    disabled: Optional[bool] = None
    current: Optional[bool] = None

    # --- 计算值 ---
    inputOperationConfig: Optional[InputOperationConfig] = None

    # --- 依赖显隐 ---
    dependencyName: Optional[str] = None
    dependencyValue: Optional[str] = Field(None, description="以 '|' 分隔的触发值列表")
    initialState: Optional[str] = Field(None, description="'visible' / 'hidden' / 'enabled' / 'disabled'")
    dependencyState: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class Component(BaseModel):
    """树中的一个节点。只保存后继兄弟 (next) 与第一个子节点 (child)。"""
    id: Optional[str] = None
    type: Optional[str] = Field(None, description="page / group / field 等，对引擎不透明")
    config: ComponentConfig = Field(default_factory=ComponentConfig)
    next: Optional[str] = None
    child: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class Schema(BaseModel):
    """
    整个表单结构。
    components 中值为 None 的槽位表示已被逻辑删除、尚未应用的组件。
    """
    child: Optional[str] = Field(None, description="第一个顶层组件")
    components: Dict[str, Optional[Component]] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def get(self, component_id: Optional[str]) -> Optional[Component]:
        if component_id is None:
            return None
        return self.components.get(component_id)

    def has(self, component_id: Optional[str]) -> bool:
        return self.get(component_id) is not None

# ============================================================================
# 3. 派生结果
# ============================================================================

class RelationRecord(BaseModel):
    """按需推导的关系信息，从不存储。previous 与 parent 互斥。"""
    id: str
    previous: Optional[str] = None
    parent: Optional[str] = None
    next: Optional[str] = None
    child: Optional[str] = None

class MergeResult(NamedTuple):
    """
    schema: 合并了模型数据与依赖状态的新 Schema
    updates: 仅包含计算得出 (而非直接拷贝) 的字段值，调用方需回写到模型
    """
    schema: Schema
    updates: Dict[str, Any]
