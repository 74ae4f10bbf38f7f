"""Tests for loading project specifications from files."""
import json
import tempfile
from pathlib import Path
import pytest
from gofactory.core.loader import load_project_spec

YAML_SPEC = """
name: shop
module_path: github.com/acme/shop
output_path: shop
project_type: api
entities:
  - name: Product
    fields:
      - name: title
        type: string
        required: true
      - name: price
        type: decimal
    features: [crud, validation]
configuration:
  server:
    port: 8080
"""


def test_load_yaml():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "shop.yaml"
        path.write_text(YAML_SPEC, encoding="utf-8")

        spec = load_project_spec(path)

    assert spec.name == "shop"
    assert spec.project_type == "api"
    assert spec.entities[0].fields[0].required is True
    assert spec.entities[0].features == ["crud", "validation"]
    assert spec.configuration.server.port == 8080


def test_load_json():
    data = {
        "name": "shop",
        "module_path": "github.com/acme/shop",
        "output_path": "shop",
        "entities": [{"name": "Product", "fields": [{"name": "title", "type": "string"}]}],
    }
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "shop.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        spec = load_project_spec(str(path))

    assert spec.project_type == "microservice"
    assert spec.entities[0].name == "Product"


def test_non_mapping_is_rejected():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="expected a mapping"):
            load_project_spec(path)
