#!/usr/bin/env python
"""
Emit the versioned JSON Schema for plan files to schema/plan.v1.json
"""
import os
from Generate.params import emit_plan_schema

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
OUT = os.path.join(ROOT, "schema", "plan.v1.json")

if __name__ == "__main__":
    emit_plan_schema(OUT)
    print(f"Wrote {OUT}")
