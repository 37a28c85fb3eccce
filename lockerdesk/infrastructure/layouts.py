from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from loguru import logger

from lockerdesk.core.parsers.layouts import DEFAULT_LAYOUTS, ColumnLayout


def load_layouts(path: Path | None) -> dict[str, ColumnLayout]:
    """
    Read column layout overrides from YAML on top of the built-in layouts.

    A missing file means the defaults are used as they are.
    """
    layouts = dict(DEFAULT_LAYOUTS)
    if path is None or not Path(path).exists():
        return layouts

    with Path(path).open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    for name, overrides in data.items():
        base = layouts.get(name)
        if base is None:
            raise ValueError(f"Unknown CSV layout {name!r} in {path}")
        layouts[name] = base.with_overrides(overrides or {})
        logger.debug("Loaded CSV layout {!r} from {}", name, path)
    return layouts


@lru_cache(maxsize=1)
def get_layouts() -> dict[str, ColumnLayout]:
    from lockerdesk.infrastructure.config import settings
    return load_layouts(settings.layouts_path)
