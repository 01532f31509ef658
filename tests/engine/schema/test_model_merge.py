# tests/engine/schema/test_model_merge.py
import pytest
from datetime import date
from uischema.core.config import settings
from uischema.engine.schema import (
    Schema,
    ComponentConfig,
    InputOperationRegistry,
    UnknownActionError,
    compose_from_fields,
    update_schema_with_model,
    resolve_dependency_state,
    default_operation_registry,
)

FIXED_DAY = date(2024, 1, 2)

# ==============================================================================
# 1. composeFromFields
# ==============================================================================

def test_compose_from_fields_joins_values():
    model = {"a": "X", "b": "Y"}
    assert compose_from_fields(model, {"fieldsArray": ["a", "b"]}) == "X Y"

def test_compose_from_fields_skips_missing_fields():
    model = {"a": "X", "b": "Y"}
    assert compose_from_fields(model, {"fieldsArray": ["a", "missing", "b"]}) == "X Y"

def test_compose_from_fields_with_page_references(application_model):
    op_config = {"fieldsArray": [
        {"page": "applicant", "id": "firstName"},
        {"page": "applicant", "id": "middleName"},
        {"page": "applicant", "id": "lastName"},
        {"page": "employer", "id": "name"},
    ]}
    assert compose_from_fields(application_model, op_config) == "Ada Lovelace"

def test_compose_from_fields_without_model():
    assert compose_from_fields(None, {"fieldsArray": ["a"]}) == ""

def test_compose_from_fields_uses_configured_separator(monkeypatch):
    monkeypatch.setattr(settings, "COMPOSE_SEPARATOR", ", ")
    assert compose_from_fields({"a": "X", "b": 2}, {"fieldsArray": ["a", "b"]}) == "X, 2"

def test_compose_from_fields_joins_list_values_with_commas():
    model = {"a": ["x", "y"], "b": "Z", "c": ["p", None, "q"]}
    assert compose_from_fields(model, {"fieldsArray": ["a", "b", "c"]}) == "x,y Z p,,q"

def test_compose_from_fields_is_registered():
    assert default_operation_registry.has("composeFromFields")
    assert default_operation_registry.get("composeFromFields") is compose_from_fields

# ==============================================================================
# 2. update_schema_with_model
# ==============================================================================

def test_merge_copies_values_and_marks_visible(application_schema, application_model):
    result = update_schema_with_model(application_model, application_schema, page_id="applicant", today=FIXED_DAY)
    components = result.schema.components

    assert components["firstNameField"].config.value == "Ada"
    assert components["lastNameField"].config.value == "Lovelace"
    assert components["firstNameField"].config.visible is True

def test_merge_reports_only_computed_updates(application_schema, application_model):
    result = update_schema_with_model(application_model, application_schema, page_id="applicant", today=FIXED_DAY)

    assert result.updates == {"fullName": "Ada Lovelace", "startDate": "2024-01-02"}
    assert result.schema.components["fullNameField"].config.value == "Ada Lovelace"
    assert result.schema.components["startDateField"].config.value == "2024-01-02"

def test_merge_prefers_model_value_over_input_operation(application_schema, application_model):
    application_model["applicant"]["fullName"] = "Countess of Lovelace"
    result = update_schema_with_model(application_model, application_schema, page_id="applicant", today=FIXED_DAY)

    assert result.schema.components["fullNameField"].config.value == "Countess of Lovelace"
    assert "fullName" not in result.updates

def test_merge_leaves_explicit_dates_alone(application_schema):
    components = dict(application_schema.components)
    start = components["startDateField"]
    components["startDateField"] = start.model_copy(update={"config": start.config.model_copy(update={"value": "2023-05-01"})})
    schema = application_schema.model_copy(update={"components": components})

    result = update_schema_with_model({}, schema, today=FIXED_DAY)
    assert result.schema.components["startDateField"].config.value == "2023-05-01"
    assert "startDate" not in result.updates

def test_merge_flips_dependency_states_on_match(application_schema, application_model):
    result = update_schema_with_model(application_model, application_schema, page_id="applicant", today=FIXED_DAY)
    components = result.schema.components

    # initialState 'hidden' -> 命中后可见
    assert components["spouseNameField"].config.visible is True
    # initialState 'disabled' -> 命中后启用
    assert components["discountField"].config.disabled is False

def test_merge_holds_initial_dependency_states_without_match(application_schema):
    model = {"applicant": {"maritalStatus": "single"}}
    result = update_schema_with_model(model, application_schema, page_id="applicant", today=FIXED_DAY)
    components = result.schema.components

    assert components["spouseNameField"].config.visible is False
    # 模型中不存在依赖字段时保持初始状态
    assert components["discountField"].config.disabled is True

def test_merge_with_missing_page_uses_empty_page_model(application_schema, application_model):
    result = update_schema_with_model(application_model, application_schema, page_id="employer", today=FIXED_DAY)

    assert result.schema.components["firstNameField"].config.value is None
    # 输入操作仍然读取整个模型
    assert result.updates["fullName"] == "Ada Lovelace"

def test_merge_with_flat_model(application_schema):
    result = update_schema_with_model({"firstName": "Grace"}, application_schema, today=FIXED_DAY)
    assert result.schema.components["firstNameField"].config.value == "Grace"
    assert result.updates["fullName"] == ""

def test_merge_does_not_mutate_inputs(application_schema, application_model):
    before = application_schema.model_dump()
    update_schema_with_model(application_model, application_schema, page_id="applicant", today=FIXED_DAY)
    assert application_schema.model_dump() == before

def test_merge_keeps_deleted_slots(application_schema):
    components = dict(application_schema.components)
    components["removedField"] = None
    schema = application_schema.model_copy(update={"components": components})

    result = update_schema_with_model({}, schema, today=FIXED_DAY)
    assert result.schema.components["removedField"] is None

def test_merge_uses_current_date_by_default(application_schema):
    result = update_schema_with_model({}, application_schema)
    assert result.updates["startDate"] == date.today().strftime(settings.DATE_FORMAT)

def test_merge_with_unknown_action_raises():
    schema = Schema.model_validate({
        "child": "x",
        "components": {"x": {"config": {"name": "x", "inputOperationConfig": {"action": "reverse"}}}},
    })
    with pytest.raises(UnknownActionError):
        update_schema_with_model({}, schema)

def test_merge_with_custom_registry():
    registry = InputOperationRegistry()

    @registry.register("shout")
    def shout(model, op_config):
        return " ".join(str(model[field]).upper() for field in op_config.fieldsArray)

    schema = Schema.model_validate({
        "child": "x",
        "components": {"x": {"config": {"name": "x", "inputOperationConfig": {"action": "shout", "fieldsArray": ["a"]}}}},
    })
    result = update_schema_with_model({"a": "hi"}, schema, registry=registry)
    assert result.updates == {"x": "HI"}
    assert registry.get_all_actions() == ["shout"]

# ==============================================================================
# 3. 依赖状态
# ==============================================================================

@pytest.mark.parametrize("initial_state, model, expected", [
    ("visible", {}, ("visible", True)),
    ("visible", {"dep": "on"}, ("visible", False)),
    ("hidden", {"dep": "on"}, ("visible", True)),
    ("enabled", {}, ("disabled", False)),
    ("enabled", {"dep": ["off", "on"]}, ("disabled", True)),
    ("disabled", {"dep": "off"}, ("disabled", True)),
    (None, {"dep": "on"}, ("visible", True)),
])
def test_resolve_dependency_state(initial_state, model, expected):
    config = ComponentConfig(dependencyName="dep", dependencyValue="on|yes", initialState=initial_state)
    assert resolve_dependency_state(config, model) == expected

def test_resolve_dependency_state_falls_back_to_dependency_state():
    config = ComponentConfig(dependencyName="dep", dependencyValue="yes", dependencyState="disabled")
    assert resolve_dependency_state(config, {"dep": "yes"}) == ("disabled", False)

def test_resolve_dependency_state_without_trigger_values_keeps_initial_state():
    config = ComponentConfig(dependencyName="dep", initialState="hidden")
    assert resolve_dependency_state(config, {"dep": ""}) == ("visible", False)
    assert resolve_dependency_state(config, {"dep": "on"}) == ("visible", False)
