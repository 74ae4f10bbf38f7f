"""Load project specifications from YAML or JSON files."""
import json
from pathlib import Path
from typing import Union

import yaml

from gofactory.schemas.specification import ProjectSpecification


def load_project_spec(path: Union[str, Path]) -> ProjectSpecification:
    """
    Read a ProjectSpecification from ``path``.

    ``.json`` files are parsed as JSON; anything else goes through
    ``yaml.safe_load`` (which also accepts JSON).

    Raises:
        ValueError: if the file does not hold a mapping
        pydantic.ValidationError: if the mapping is not a valid specification
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return ProjectSpecification.model_validate(data)
