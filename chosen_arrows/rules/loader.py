"""
Rules file loading.

``rules.yaml`` holds the site's operating constants (languages, SEO defaults,
upload limits, donation bounds). The file may be plain YAML or a markdown
document with one fenced ```yaml block.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from chosen_arrows.rules.models import Rules


def extract_yaml(content: str) -> str:
    """The first ```yaml fenced block, or the whole text when there is none."""
    lines = content.splitlines()
    for start, line in enumerate(lines):
        if line.strip().startswith("```yaml"):
            body = []
            for inner in lines[start + 1 :]:
                if inner.strip().startswith("```"):
                    break
                body.append(inner)
            return "\n".join(body)
    return content


def load_rules(path: Path | str) -> Rules:
    """
    Load and validate the rules file.

    Raises FileNotFoundError if the file is missing and ValueError if the
    YAML or the schema is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    try:
        data = yaml.safe_load(extract_yaml(path.read_text(encoding="utf-8")))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Rules validation failed: {path} does not hold a mapping")

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
