# uischema/engine/schema/editor.py

import logging
from typing import Any, Dict, Optional, Union

from ..utils.name_utils import to_camel_case
from .definitions import Schema, Component
from .exceptions import MalformedSchemaError, InvalidOperationError, DuplicateIdentifierError
from .patch import SchemaPatch, ComponentPatch
from .relations import get_meta_data, get_root_id
from .traversal import traverse, get_last_sibling_id

logger = logging.getLogger(__name__)

# 所有编辑操作都是纯函数：(schema, id, ...) -> SchemaPatch，不修改输入的 schema。
# 找不到可交换 / 可嵌套的邻居时返回空补丁，而不是抛出异常。

def _maybe(value: Optional[str]) -> Optional[str]:
    # 指针要么是有效 ID，要么是 None，不允许出现空字符串
    return value or None

def _noop(operation: str, component_id: str) -> SchemaPatch:
    logger.debug(f"[{operation}] No-op for component '{component_id}'")
    return SchemaPatch()

def move_up(schema: Schema, component_id: str) -> SchemaPatch:
    """与前一个兄弟交换位置。"""
    meta = get_meta_data(schema, component_id)
    if not schema.has(component_id) or not meta.previous:
        return _noop("move_up", component_id)

    patch = SchemaPatch()
    previous_meta = get_meta_data(schema, meta.previous)

    # 1. 原本指向 previous 的指针改为指向我
    if previous_meta.previous:
        patch.set_component(previous_meta.previous, next=meta.id)
    elif previous_meta.parent:
        patch.set_component(previous_meta.parent, child=meta.id)
    else:
        # previous 是第一个顶层组件，我将成为新的第一个
        patch.set_root(meta.id)

    # 2. 我的 next 指向 previous
    patch.set_component(meta.id, next=meta.previous)

    # 3. previous 的 next 指向我原来的 next
    patch.set_component(meta.previous, next=_maybe(meta.next))
    return patch

def move_down(schema: Schema, component_id: str) -> SchemaPatch:
    """与后一个兄弟交换位置。"""
    meta = get_meta_data(schema, component_id)
    if not schema.has(component_id) or not meta.next:
        return _noop("move_down", component_id)

    following = schema.get(meta.next)
    if following is None:
        raise MalformedSchemaError(f"Dangling 'next' pointer from '{component_id}' to '{meta.next}'.")

    patch = SchemaPatch()

    # 1. 原本指向我的指针改为指向我的 next
    if meta.previous:
        patch.set_component(meta.previous, next=meta.next)
    elif meta.parent:
        patch.set_component(meta.parent, child=meta.next)
    else:
        patch.set_root(meta.next)

    # 2. next 的 next 指向我
    patch.set_component(meta.next, next=meta.id)

    # 3. 我的 next 指向原 next 的 next
    patch.set_component(meta.id, next=_maybe(following.next))
    return patch

def nest(schema: Schema, component_id: str) -> SchemaPatch:
    """将组件移入前一个兄弟的子列表末尾。"""
    meta = get_meta_data(schema, component_id)
    if not schema.has(component_id) or not meta.previous:
        return _noop("nest", component_id)

    patch = SchemaPatch()
    previous_child = schema.get(meta.previous).child
    if previous_child:
        last_child = get_last_sibling_id(schema, previous_child)
        patch.set_component(meta.previous, next=_maybe(meta.next))
        patch.set_component(last_child, next=meta.id)
    else:
        patch.set_component(meta.previous, next=_maybe(meta.next), child=meta.id)

    patch.set_component(meta.id, next=None)
    return patch

def unnest(schema: Schema, component_id: str) -> SchemaPatch:
    """
    将组件从父节点的子列表中移出，成为父节点的下一个兄弟。
    顶层组件没有可移出的父节点，抛出 InvalidOperationError。
    """
    meta = get_meta_data(schema, component_id)
    if not schema.has(component_id):
        return _noop("unnest", component_id)

    patch = SchemaPatch()
    parent = meta.parent
    if parent:
        # 直接子节点：父节点的 child 改为我的 next
        patch.set_component(parent, child=_maybe(meta.next), next=meta.id)
    elif meta.previous:
        parent = get_root_id(schema, meta.previous)
        if parent is None:
            raise InvalidOperationError(f"Cannot unnest top-level component '{component_id}'.")
        patch.set_component(parent, next=meta.id)
        patch.set_component(meta.previous, next=_maybe(meta.next))
    else:
        raise InvalidOperationError(f"Cannot unnest top-level component '{component_id}'.")

    patch.set_component(meta.id, next=_maybe(schema.get(parent).next))
    return patch

def remove_component(schema: Schema, component_id: str) -> SchemaPatch:
    """将组件及其整个子树置为 None，并把原本指向它的指针接到它的 next 上。"""
    meta = get_meta_data(schema, component_id)
    if not schema.has(component_id):
        return _noop("remove_component", component_id)

    patch = SchemaPatch()
    patch.delete_component(component_id)

    if meta.previous:
        patch.set_component(meta.previous, next=_maybe(meta.next))
    elif meta.parent:
        patch.set_component(meta.parent, child=_maybe(meta.next))
    elif schema.child == component_id:
        patch.set_root(_maybe(meta.next))

    if meta.child:
        traverse(schema, meta.child, lambda node_id, _: patch.delete_component(node_id))
    return patch

def add_new_child_component(
    schema: Schema,
    parent_id: Optional[str],
    new_component: Union[Component, Dict[str, Any]],
) -> SchemaPatch:
    """
    添加新组件，作为 parent_id 的最后一个子节点。
    parent_id 为空时添加到顶层。新 ID 由 "<config.name> <type>" 的 camelCase 生成。
    """
    component = new_component if isinstance(new_component, Component) else Component.model_validate(new_component)
    new_id = to_camel_case(" ".join([component.config.name or "", component.type or ""]))
    if not new_id:
        raise InvalidOperationError("Cannot derive an identifier from a component without name or type.")
    if schema.has(new_id):
        raise DuplicateIdentifierError(f"Component '{new_id}' already exists.")

    if parent_id:
        parent = schema.get(parent_id)
        if parent is None:
            raise InvalidOperationError(f"Parent component '{parent_id}' does not exist.")
        first_child = parent.child
    else:
        first_child = schema.child

    stamped = component.model_copy(update={
        "id": new_id,
        "config": component.config.model_copy(update={"id": new_id}),
    })
    patch = SchemaPatch()
    patch.components[new_id] = ComponentPatch.from_component(stamped)

    if first_child:
        patch.set_component(get_last_sibling_id(schema, first_child), next=new_id)
    elif parent_id:
        patch.set_component(parent_id, child=new_id)
    else:
        patch.set_root(new_id)

    logger.debug(f"[add_new_child_component] Added '{new_id}' under '{parent_id or '<root>'}'")
    return patch
