import networkx as nx
from typing import Dict, List, Set, Optional
from .definitions import Schema
from .exceptions import MalformedSchemaError

class SchemaGraph:
    """
    Schema 指针结构的静态分析容器。
    next / child 指针被视为有向边，必须构成森林：
    无悬空指针、每个节点最多一条入边、无环。
    """
    POINTERS = ("next", "child")

    def __init__(self, schema: Schema):
        self._schema = schema
        self._nx_graph = nx.DiGraph()
        # 索引: target_id -> 指向它的 (source_id, pointer)
        self._incoming: Dict[str, List[tuple]] = {}

        self._build_and_validate()

    @property
    def root_id(self) -> Optional[str]:
        return self._schema.child

    @property
    def all_ids(self) -> List[str]:
        return list(self._nx_graph.nodes)

    def reachable_ids(self) -> Set[str]:
        if self.root_id is None:
            return set()
        descendants = nx.descendants(self._nx_graph, self.root_id)
        descendants.add(self.root_id)
        return descendants

    def unreachable_ids(self) -> Set[str]:
        """没有任何入边、也不是根的组件；它们在树中没有确定的位置。"""
        return set(self._nx_graph.nodes) - self.reachable_ids()

    def _build_and_validate(self):
        schema = self._schema

        # 1. 节点
        for component_id, component in schema.components.items():
            if component is None:
                continue
            if component.id is not None and component.id != component_id:
                raise MalformedSchemaError(
                    f"Component keyed '{component_id}' declares a different id '{component.id}'."
                )
            self._nx_graph.add_node(component_id)

        if schema.child is not None and not schema.has(schema.child):
            raise MalformedSchemaError(f"Schema root points to missing component '{schema.child}'.")

        # 2. 边
        for component_id, component in schema.components.items():
            if component is None:
                continue
            for pointer in self.POINTERS:
                target_id = getattr(component, pointer)
                if not target_id:
                    continue
                if not schema.has(target_id):
                    raise MalformedSchemaError(
                        f"Dangling '{pointer}' pointer from '{component_id}' to '{target_id}'."
                    )
                self._incoming.setdefault(target_id, []).append((component_id, pointer))
                self._nx_graph.add_edge(component_id, target_id, pointer=pointer)

        # 3. 森林约束：每个节点最多被一个指针引用，根不能被引用
        for target_id, sources in self._incoming.items():
            if len(sources) > 1:
                raise MalformedSchemaError(f"Component '{target_id}' is referenced more than once: {sources}")
            if target_id == schema.child:
                raise MalformedSchemaError(f"Schema root '{target_id}' is also referenced by '{sources[0][0]}'.")

        if not nx.is_directed_acyclic_graph(self._nx_graph):
            raise MalformedSchemaError("Schema contains cycles.")
