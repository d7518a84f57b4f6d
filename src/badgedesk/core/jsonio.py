from __future__ import annotations

import json
from typing import Any, Dict


def dumps(obj: Dict[str, Any]) -> str:
    # Envelopes are printed whole, one per invocation.
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
