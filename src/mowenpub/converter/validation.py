"""Schema checks for serialized note payloads.

Mowen rejects payloads with numeric attribute values or non-string text,
and the error it returns does not say where the offending node is.
"""

from typing import Any


def find_schema_issues(atom: dict[str, Any], path: str = "doc") -> list[str]:
    """Walk a serialized atom tree and describe values Mowen will reject.

    Args:
        atom: Serialized atom, usually the ``doc`` root.
        path: Location prefix used in the returned messages.

    Returns:
        One human-readable message per issue, empty if the tree looks valid.

    """
    issues: list[str] = []

    if "text" in atom and not isinstance(atom["text"], str):
        issues.append(f"{path}.text is {type(atom['text']).__name__}, expected str")

    for key, value in (atom.get("attrs") or {}).items():
        # bool is an int subclass and is just as invalid here
        if isinstance(value, (int, float)):
            issues.append(f"{path}.attrs.{key} is numeric ({value!r}), expected str")

    for i, mark in enumerate(atom.get("marks") or []):
        issues.extend(find_schema_issues(mark, f"{path}.marks[{i}]"))

    for i, child in enumerate(atom.get("content") or []):
        issues.extend(find_schema_issues(child, f"{path}.content[{i}]"))

    return issues
