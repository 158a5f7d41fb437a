import json

from Generate.params import PlanRequest, emit_plan_schema


def test_plan_schema_contains_core_fields(tmp_path):
    schema = PlanRequest.model_json_schema()
    assert isinstance(schema, dict)
    props = schema.get("properties") or {}
    assert "plot" in props
    assert "rooms" in props
    out = tmp_path / "schema" / "plan.json"
    emit_plan_schema(str(out))
    loaded = json.loads(out.read_text())
    assert loaded["$id"].endswith(":v1")
    assert "properties" in loaded
