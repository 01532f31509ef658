from .main import SchemaEngineService
from .definitions import *
from .exceptions import SchemaEngineError, MalformedSchemaError, InvalidOperationError, DuplicateIdentifierError, UnknownActionError
from .patch import FieldChange, ComponentPatch, SchemaPatch, apply_patch
from .graph import SchemaGraph
from .relations import get_meta_data, get_root_id
from .traversal import walk, traverse, get_last_sibling_id
from .editor import move_up, move_down, nest, unnest, remove_component, add_new_child_component
from .workflow_state import update_workflow_state
from .registry import InputOperationRegistry, default_operation_registry, register_operation
from .operations import compose_from_fields
from .model_merge import update_schema_with_model, resolve_dependency_state
