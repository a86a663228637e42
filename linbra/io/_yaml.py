from __future__ import annotations

from typing import Any, Dict

import yaml

_SEQ_TAG = "tag:yaml.org,2002:seq"
_SCALARS = (int, float, bool, str)

# Lists at most this long are written inline ("[1, 2, 3]").
INLINE_MAX = 4


def _flat(seq: list) -> bool:
    return all(isinstance(v, _SCALARS) for v in seq)


class _LinbraDumper(yaml.SafeDumper):
    """Keeps short vectors on one line and writes matrices one row per line."""


def _represent_list(dumper: _LinbraDumper, seq: list) -> yaml.Node:
    if seq and len(seq) <= INLINE_MAX and _flat(seq):
        return dumper.represent_sequence(_SEQ_TAG, seq, flow_style=True)

    if seq and all(isinstance(row, list) and _flat(row) for row in seq):
        rows = [dumper.represent_sequence(_SEQ_TAG, row, flow_style=True) for row in seq]
        return yaml.SequenceNode(tag=_SEQ_TAG, value=rows, flow_style=False)

    return dumper.represent_sequence(_SEQ_TAG, seq, flow_style=False)


_LinbraDumper.add_representer(list, _represent_list)


def dump_yaml(data: Dict[str, Any], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, Dumper=_LinbraDumper, sort_keys=False, width=120, indent=2)


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: YAML root must be a mapping, got {type(data).__name__}")
    return data
