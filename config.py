# config.py
import json

from address import CacheGeometry
from errors import ConfigError


def _read_plain(path, text):
    # plain format: associativity, line size, total size
    fields = text.split()
    if len(fields) != 3:
        raise ConfigError(f"{path}: expected 3 integers (associativity, line size, cache size), "
                          f"found {len(fields)} values")
    try:
        associativity, line_size, size = (int(v) for v in fields)
    except ValueError as e:
        raise ConfigError(f"{path}: {e}") from e
    return {
        "associativity": associativity,
        "line_size_bytes": line_size,
        "size_bytes": size,
    }


def load_config(path):
    """
    Load a cache description from `path`.
    *.json files hold an object with associativity, line_size_bytes,
    size_bytes and optionally address_layout / reset_age_on_hit; anything
    else is read as three whitespace separated integers.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(f"{path}: cannot read cache config: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: cache config is not valid UTF-8 text: {e.reason}") from e

    if not str(path).endswith(".json"):
        return _read_plain(path, text)

    try:
        cfg = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    for key in ("associativity", "line_size_bytes", "size_bytes"):
        if key not in cfg:
            raise ConfigError(f"{path}: missing '{key}'")
    return cfg


def geometry_from_config(cfg, legacy=False):
    layout = "legacy" if legacy else cfg.get("address_layout", "standard")
    try:
        return CacheGeometry(
            associativity=cfg["associativity"],
            line_size=cfg["line_size_bytes"],
            total_size=cfg["size_bytes"],
            address_layout=layout,
        )
    except KeyError as e:
        raise ConfigError(f"missing cache setting {e}") from e


def reset_age_on_hit(cfg, legacy=False):
    if legacy:
        return False
    value = cfg.get("reset_age_on_hit", True)
    if not isinstance(value, bool):
        raise ConfigError(f"reset_age_on_hit must be true or false, got {value!r}")
    return value
