# scripts/run_schema_demo.py

import json
import logging
import sys
import os

# 添加 src 目录到 sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from uischema.core.config import settings
from uischema.engine.schema import SchemaEngineService, SchemaEngineError

# 配置日志记录
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')

DEMO_SCHEMA = {
    "child": "applicantPage",
    "components": {
        "applicantPage": {"id": "applicantPage", "type": "page", "config": {"name": "Applicant"}, "next": "summaryPage", "child": "firstNameField"},
        "firstNameField": {"id": "firstNameField", "type": "field", "config": {"name": "firstName"}, "next": "lastNameField"},
        "lastNameField": {"id": "lastNameField", "type": "field", "config": {"name": "lastName"}},
        "summaryPage": {
            "id": "summaryPage", "type": "page", "next": None,
            "config": {
                "name": "fullName",
                "inputOperationConfig": {
                    "action": "composeFromFields",
                    "fieldsArray": [{"page": "applicant", "id": "firstName"}, {"page": "applicant", "id": "lastName"}],
                },
            },
        },
    },
}

DEMO_MODEL = {"applicant": {"firstName": "Ada", "lastName": "Lovelace"}}

def print_step(name, payload):
    print(f"\n{'='*20} ▶️  {name} {'='*20}")
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))

def main():
    service = SchemaEngineService()
    schema = service.load(DEMO_SCHEMA)

    patch = service.move_down(schema, "firstNameField")
    print_step("move_down(firstNameField)", patch.to_dict())
    schema = service.apply_patch(schema, patch)

    patch = service.add_new_child_component(schema, "applicantPage", {"type": "field", "config": {"name": "Date Of Birth", "type": "date", "value": "today"}})
    print_step("add_new_child_component(applicantPage)", patch.to_dict())
    schema = service.apply_patch(schema, patch)

    order = []
    service.traverse(schema, schema.child, lambda component_id, _: order.append(component_id))
    print_step("traverse", order)

    merged = service.update_schema_with_model(DEMO_MODEL, schema, page_id="applicant")
    print_step("update_schema_with_model(updates)", merged.updates)

    state = service.update_workflow_state(merged.schema, "applicantPage", "summaryPage")
    print_step("update_workflow_state", {cid: c.config.model_dump(include={"current", "disabled"}) for cid, c in state.components.items() if c})

if __name__ == "__main__":
    try:
        main()
    except SchemaEngineError as e:
        logging.error(f"Demo failed: {e.message}", exc_info=True)
        sys.exit(1)
