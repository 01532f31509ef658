# tests/engine/schema/conftest.py
import copy
import pytest
from uischema.engine.schema import Schema

# page1 -> page2 -> page5
#          └─ page3 -> page4 -> page6 -> page7
WORKFLOW_WITH_CHILDREN = {
    "type": "page",
    "child": "page1",
    "components": {
        "page1": {"id": "page1", "type": "page", "config": {"name": "page1"}, "next": "page2"},
        "page2": {"id": "page2", "type": "page", "config": {"name": "page2"}, "next": "page5", "child": "page3"},
        "page3": {"id": "page3", "type": "page", "config": {"name": "page3"}, "next": "page4"},
        "page4": {"id": "page4", "type": "page", "config": {"name": "page4"}, "next": "page6"},
        "page5": {"id": "page5", "type": "page", "config": {"name": "page5"}, "next": None},
        "page6": {"id": "page6", "type": "page", "config": {"name": "page6"}, "next": "page7"},
        "page7": {"id": "page7", "type": "page", "config": {"name": "page7"}, "next": None},
    },
}

# page1 -> page2 -> page5
#          └─ page3 -> page4
SMALL_WORKFLOW = {
    "child": "page1",
    "components": {
        "page1": {"id": "page1", "type": "page", "config": {"name": "page1"}, "next": "page2"},
        "page2": {"id": "page2", "type": "page", "config": {"name": "page2"}, "next": "page5", "child": "page3"},
        "page3": {"id": "page3", "type": "page", "config": {"name": "page3"}, "next": "page4"},
        "page4": {"id": "page4", "type": "page", "config": {"name": "page4"}, "next": None},
        "page5": {"id": "page5", "type": "page", "config": {"name": "page5"}, "next": None},
    },
}

@pytest.fixture
def workflow_dict():
    """嵌套工作流的原始字典 fixture。"""
    return copy.deepcopy(WORKFLOW_WITH_CHILDREN)

@pytest.fixture
def workflow(workflow_dict):
    """嵌套工作流的 Schema fixture。"""
    return Schema.model_validate(workflow_dict)

@pytest.fixture
def small_workflow():
    """只有两层的小型工作流 fixture。"""
    return Schema.model_validate(copy.deepcopy(SMALL_WORKFLOW))

@pytest.fixture
def empty_schema():
    """没有任何组件的 schema fixture。"""
    return Schema.model_validate({"type": "page", "components": {}})

@pytest.fixture
def new_field():
    """待添加的新字段组件 fixture。"""
    return {"type": "field", "config": {"name": "test"}}

@pytest.fixture
def application_schema():
    """带有计算值、日期默认值和依赖显隐的表单页 fixture。"""
    return Schema.model_validate({
        "child": "firstNameField",
        "components": {
            "firstNameField": {"type": "field", "config": {"name": "firstName"}, "next": "lastNameField"},
            "lastNameField": {"type": "field", "config": {"name": "lastName"}, "next": "fullNameField"},
            "fullNameField": {
                "type": "field",
                "config": {
                    "name": "fullName",
                    "inputOperationConfig": {
                        "action": "composeFromFields",
                        "fieldsArray": [
                            {"page": "applicant", "id": "firstName"},
                            {"page": "applicant", "id": "lastName"},
                        ],
                    },
                },
                "next": "startDateField",
            },
            "startDateField": {"type": "field", "config": {"name": "startDate", "type": "date", "value": "today"}, "next": "spouseNameField"},
            "spouseNameField": {
                "type": "field",
                "config": {
                    "name": "spouseName",
                    "dependencyName": "maritalStatus",
                    "dependencyValue": "married|partnered",
                    "initialState": "hidden",
                },
                "next": "discountField",
            },
            "discountField": {
                "type": "field",
                "config": {
                    "name": "discount",
                    "dependencyName": "member",
                    "dependencyValue": "yes",
                    "initialState": "disabled",
                },
                "next": None,
            },
        },
    })

@pytest.fixture
def application_model():
    """页面嵌套的应用模型 fixture。"""
    return {
        "applicant": {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "maritalStatus": "married",
            "member": ["no", "yes"],
        }
    }
