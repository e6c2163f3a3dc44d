"""Logic for fingerprinting the settings that shape association results."""

import hashlib
import json
from typing import Any

# Logging and report destinations do not change which comments are attached.
RESULT_SECTIONS = ("docs", "passes")


def compute_config_hash(config: dict[str, Any]) -> str:
    """Compute a SHA-256 over the result-affecting sections of a configuration.

    Sections are serialized as canonical JSON (sorted keys), so two reports
    with the same hash were produced from the same modules, file pattern and
    pass switches. A config without any of those sections is hashed whole.
    """
    relevant = {k: config[k] for k in RESULT_SECTIONS if k in config} or config
    config_json = json.dumps(relevant, sort_keys=True, ensure_ascii=True)
    return hashlib.sha256(config_json.encode("utf-8")).hexdigest()
