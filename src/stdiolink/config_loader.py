from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from stdiolink.config import AppConfig


def _apply_env_overrides(data: dict) -> dict:
    name = os.environ.get("STDIOLINK_NAME")
    if name:
        data["name"] = name
    level = os.environ.get("STDIOLINK_LOG_LEVEL")
    if level:
        data["log_level"] = level.upper()
    transport = dict(data.get("transport") or {})
    chunk = os.environ.get("STDIOLINK_READ_CHUNK_SIZE")
    if chunk:
        transport["read_chunk_size"] = chunk
    delay = os.environ.get("STDIOLINK_RETRY_DELAY")
    if delay:
        transport["retry_delay"] = delay
    if transport:
        data["transport"] = transport
    return data


def load_config(path: str | None = None) -> AppConfig:
    data: object = {}
    if path:
        p = Path(path)
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() in {".yaml", ".yml"}:
            try:
                import yaml  # type: ignore
            except Exception as e:  # pragma: no cover
                raise RuntimeError(
                    "PyYAML is required to load YAML configs. Install with `pip install pyyaml`."
                ) from e
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
        if not isinstance(data, dict):
            raise RuntimeError(f"Invalid configuration: expected a mapping in {path}")

    # Env values are strings; pydantic coerces them during validation
    try:
        return AppConfig.model_validate(_apply_env_overrides(dict(data)))
    except ValidationError as e:
        raise RuntimeError(f"Invalid configuration: {e}") from e
