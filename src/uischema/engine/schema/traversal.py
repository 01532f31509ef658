# uischema/engine/schema/traversal.py

from typing import Callable, Iterator, List, Optional, Set, Tuple
from .definitions import Schema, Component
from .exceptions import MalformedSchemaError

Visitor = Callable[[str, Component], None]

def walk(schema: Schema, component_id: Optional[str]) -> Iterator[Tuple[str, Component]]:
    """
    深度优先、先序遍历：访问节点 -> 完整遍历其子树 -> 继续下一个兄弟。
    遇到 None 或不存在的 ID 时该兄弟链结束。
    使用显式栈，嵌套深度不受解释器递归上限限制。
    """
    seen: Set[str] = set()
    stack: List[Optional[str]] = [component_id]
    while stack:
        current_id = stack.pop()
        head = schema.get(current_id)
        if head is None:
            continue
        if current_id in seen:
            raise MalformedSchemaError(f"Cycle detected while traversing at '{current_id}'.")
        seen.add(current_id)
        yield current_id, head
        # 先压入 next，再压入 child，保证子树先于兄弟被访问
        stack.append(head.next)
        stack.append(head.child)

def traverse(schema: Schema, component_id: Optional[str], visit: Visitor) -> None:
    """
    对 component_id 起始的森林中每个节点调用 visit(id, component)。
    visit 可以收集变更，但不能在遍历过程中修改 schema。
    """
    for node_id, component in walk(schema, component_id):
        visit(node_id, component)

def get_last_sibling_id(schema: Schema, component_id: str) -> str:
    """沿 next 指针走到兄弟链末尾，返回末尾节点的 ID。"""
    head = schema.get(component_id)
    if head is None:
        raise MalformedSchemaError(f"Component '{component_id}' does not exist.")

    current_id = component_id
    seen: Set[str] = {current_id}
    while head.next:
        current_id = head.next
        if current_id in seen:
            raise MalformedSchemaError(f"Cycle detected in sibling chain starting at '{component_id}'.")
        seen.add(current_id)
        head = schema.get(current_id)
        if head is None:
            raise MalformedSchemaError(f"Dangling 'next' pointer to '{current_id}'.")
    return current_id
