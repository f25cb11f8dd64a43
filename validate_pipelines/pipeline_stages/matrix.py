import json
from typing import Any, Dict, List, Mapping, Sequence


def expand_matrix(matrix: Mapping[str, Sequence[Any]]) -> List[Dict[str, Any]]:
    """Expand a build matrix into the cartesian product of its axes.

    Axes are walked in declaration order, the first axis varying slowest:

        >>> expand_matrix({"node": ["18", "20"], "os": ["linux", "windows"]})
        [{'node': '18', 'os': 'linux'}, {'node': '18', 'os': 'windows'},
         {'node': '20', 'os': 'linux'}, {'node': '20', 'os': 'windows'}]

    An axis with no values yields no combinations at all.
    """
    combinations: List[Dict[str, Any]] = [{}]
    for axis, values in matrix.items():
        combinations = [{**combo, axis: value} for combo in combinations for value in values]
    return combinations


def variant_label(job_name: str, combination: Mapping[str, Any]) -> str:
    """Name passed to the runner for one matrix variant, e.g. ``test-{"os":"linux"}``."""
    label = json.dumps(dict(combination), separators=(",", ":"), default=str, ensure_ascii=False)
    return f"{job_name}-{label}"
