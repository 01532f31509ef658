# uischema/engine/schema/operations.py

from typing import Dict, Any, List, Optional, Union
from uischema.core.config import settings
from .definitions import InputOperationConfig, FieldReference
from .registry import register_operation

def _lookup_field(model: Dict[str, Any], field: Union[FieldReference, Dict[str, Any], str]) -> Optional[Any]:
    # 字符串：顶层键；{page, id}：页面嵌套模型中的字段
    if isinstance(field, str):
        return model.get(field)
    reference = field if isinstance(field, FieldReference) else FieldReference.model_validate(field)
    page = model.get(reference.page)
    if not isinstance(page, dict):
        return None
    return page.get(reference.id)

def _render(value: Any) -> str:
    # 列表按前端 Array.join 的方式以逗号拼接，None 元素渲染为空串
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else _render(item) for item in value)
    return value if isinstance(value, str) else str(value)

@register_operation("composeFromFields")
def compose_from_fields(model: Optional[Dict[str, Any]], op_config: Union[InputOperationConfig, Dict[str, Any]]) -> str:
    """
    用分隔符 (默认单个空格) 拼接 fieldsArray 引用的字段值。
    模型中不存在的字段被跳过，而不是渲染为空串。
    """
    if isinstance(op_config, InputOperationConfig):
        fields = op_config.fieldsArray
    else:
        fields = (op_config or {}).get("fieldsArray") or []

    values: List[str] = []
    if model:
        for field in fields:
            value = _lookup_field(model, field)
            if value is not None:
                values.append(_render(value))
    return settings.COMPOSE_SEPARATOR.join(values)
