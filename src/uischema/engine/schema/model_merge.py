# uischema/engine/schema/model_merge.py

import logging
from datetime import date
from typing import Dict, Any, List, Optional, Tuple

from uischema.core.config import settings
from .definitions import Schema, Component, ComponentConfig, MergeResult
from .registry import InputOperationRegistry, default_operation_registry
from . import operations  # 导入以触发 @register_operation 自动注册

logger = logging.getLogger(__name__)

def _is_date_field(component: Component) -> bool:
    return component.config.type == "date" or component.type == "date"

def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else [value]

def resolve_dependency_state(config: ComponentConfig, model: Dict[str, Any]) -> Tuple[str, bool]:
    """
    计算依赖字段控制的状态，返回 (字段名, 值)。
    - initialState 含 'disabled' / 'enabled' 时控制 disabled，否则控制 visible
    - 依赖字段的值 (统一为列表) 与 dependencyValue 的 '|' 列表有交集时翻转初始状态
    """
    initial_state = config.initialState or config.dependencyState or ""
    if "disabled" in initial_state or "enabled" in initial_state:
        dependency_type = "disabled"
    else:
        dependency_type = "visible"
    dependency_state = dependency_type == initial_state

    if config.dependencyName not in model:
        return dependency_type, dependency_state

    # 未配置 dependencyValue 时没有任何触发值
    expected_values = config.dependencyValue.split("|") if config.dependencyValue else []
    triggered = any(value in expected_values for value in _as_list(model[config.dependencyName]))
    return dependency_type, (not dependency_state) if triggered else dependency_state

def _merge_component(
    component: Component,
    input_model: Dict[str, Any],
    page_model: Dict[str, Any],
    updates: Dict[str, Any],
    today: date,
    registry: InputOperationRegistry,
) -> Component:
    config = component.config
    name = config.name or ""
    config_update: Dict[str, Any] = {"visible": True}

    # 1. 字段值：模型直拷 > 输入操作计算 > 日期占位
    if name in page_model:
        config_update["value"] = page_model[name]
    elif config.inputOperationConfig is not None:
        ioc = config.inputOperationConfig
        operation = registry.get(ioc.action)
        composite_value = operation(input_model, ioc)
        config_update["value"] = composite_value
        updates[name] = composite_value
    elif _is_date_field(component) and config.value == settings.DATE_SENTINEL:
        date_value = today.strftime(settings.DATE_FORMAT)
        config_update["value"] = date_value
        updates[name] = date_value

    # 2. 依赖字段状态
    if config.dependencyName:
        dependency_type, state = resolve_dependency_state(config, page_model)
        config_update[dependency_type] = state

    return component.model_copy(update={"config": config.model_copy(update=config_update)})

def update_schema_with_model(
    model: Optional[Dict[str, Any]],
    schema: Schema,
    page_id: Optional[str] = None,
    today: Optional[date] = None,
    registry: InputOperationRegistry = default_operation_registry,
) -> MergeResult:
    """
    将外部数据模型合并进每个组件的配置。
    给定 page_id 时，值拷贝与依赖判断使用 model[page_id]，输入操作仍使用整个模型。
    返回的 updates 只包含计算出来的值，调用方需要回写到模型。
    """
    input_model = model or {}
    if page_id is not None:
        page_model = input_model.get(page_id) or {}
    else:
        page_model = input_model

    today = today or date.today()
    updates: Dict[str, Any] = {}
    components: Dict[str, Optional[Component]] = {}
    for component_id, component in schema.components.items():
        if component is None:
            components[component_id] = None
            continue
        components[component_id] = _merge_component(component, input_model, page_model, updates, today, registry)

    if updates:
        logger.debug(f"Computed {len(updates)} field value(s) during model merge: {list(updates)}")
    return MergeResult(schema=schema.model_copy(update={"components": components}), updates=updates)
