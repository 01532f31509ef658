import logging
from datetime import date
from typing import Dict, Any, Optional, Union
from pydantic import ValidationError

from uischema.core.config import settings
from .definitions import Schema, Component, RelationRecord, MergeResult, InputOperationConfig
from .exceptions import MalformedSchemaError
from .graph import SchemaGraph
from .patch import SchemaPatch, apply_patch
from .registry import InputOperationRegistry, default_operation_registry
from .traversal import Visitor, traverse, get_last_sibling_id
from . import editor, relations
from .model_merge import update_schema_with_model
from .workflow_state import update_workflow_state

logger = logging.getLogger(__name__)

SchemaInput = Union[Schema, Dict[str, Any]]

class SchemaEngineService:
    """
    Schema 引擎服务门面。
    负责在边界处解析、校验输入，再调用纯函数完成查询 / 编辑 / 状态推导。
    """

    def __init__(self, validate: Optional[bool] = None, registry: InputOperationRegistry = default_operation_registry):
        self.validate = settings.SCHEMA_VALIDATE_ON_LOAD if validate is None else validate
        self.registry = registry

    def load(self, schema: SchemaInput) -> Schema:
        """
        解析并校验 schema。
        :param schema: 原始字典 (JSON) 或 Schema 实例
        :return: 校验后的 Schema
        """
        # 1. 解析
        if not isinstance(schema, Schema):
            try:
                schema = Schema.model_validate(schema)
            except ValidationError as e:
                logger.error(f"Invalid schema definition: {e}", exc_info=True)
                raise MalformedSchemaError(f"Invalid schema definition: {e}") from e

        # 2. 结构校验
        if self.validate:
            try:
                graph = SchemaGraph(schema)
            except MalformedSchemaError as e:
                logger.error(f"Malformed schema rejected: {e.message}")
                raise
            unreachable = graph.unreachable_ids()
            if unreachable:
                logger.warning(f"Schema has unreachable components: {sorted(unreachable)}")
        return schema

    # --- Relation Resolver ---

    def get_meta_data(self, schema: SchemaInput, component_id: str) -> RelationRecord:
        return relations.get_meta_data(self.load(schema), component_id)

    def get_root_id(self, schema: SchemaInput, component_id: str) -> Optional[str]:
        return relations.get_root_id(self.load(schema), component_id)

    # --- Traversal Engine ---

    def traverse(self, schema: SchemaInput, component_id: Optional[str], visit: Visitor) -> None:
        traverse(self.load(schema), component_id, visit)

    def get_last_sibling_id(self, schema: SchemaInput, component_id: str) -> str:
        return get_last_sibling_id(self.load(schema), component_id)

    # --- Tree Editor ---

    def move_up(self, schema: SchemaInput, component_id: str) -> SchemaPatch:
        return editor.move_up(self.load(schema), component_id)

    def move_down(self, schema: SchemaInput, component_id: str) -> SchemaPatch:
        return editor.move_down(self.load(schema), component_id)

    def nest(self, schema: SchemaInput, component_id: str) -> SchemaPatch:
        return editor.nest(self.load(schema), component_id)

    def unnest(self, schema: SchemaInput, component_id: str) -> SchemaPatch:
        return editor.unnest(self.load(schema), component_id)

    def remove_component(self, schema: SchemaInput, component_id: str) -> SchemaPatch:
        return editor.remove_component(self.load(schema), component_id)

    def add_new_child_component(
        self,
        schema: SchemaInput,
        parent_id: Optional[str],
        new_component: Union[Component, Dict[str, Any]],
    ) -> SchemaPatch:
        return editor.add_new_child_component(self.load(schema), parent_id, new_component)

    def apply_patch(self, schema: SchemaInput, patch: SchemaPatch) -> Schema:
        """应用补丁并校验结果，保证新快照仍是合法的森林。"""
        updated = self.load(apply_patch(self.load(schema), patch))
        logger.info(f"Applied schema patch: {patch.to_dict()}")
        return updated

    # --- Visual State / Model Merge ---

    def update_workflow_state(
        self, schema: SchemaInput, last_completed_id: Optional[str], current_id: Optional[str]
    ) -> Schema:
        return update_workflow_state(self.load(schema), last_completed_id, current_id)

    def update_schema_with_model(
        self,
        model: Optional[Dict[str, Any]],
        schema: SchemaInput,
        page_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> MergeResult:
        return update_schema_with_model(model, self.load(schema), page_id=page_id, today=today, registry=self.registry)

    def compose_from_fields(
        self, model: Optional[Dict[str, Any]], op_config: Union[InputOperationConfig, Dict[str, Any]]
    ) -> Any:
        return self.registry.get("composeFromFields")(model, op_config)
