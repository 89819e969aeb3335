"""Utility functions for kernel parameter override documents"""
import logging
import typing
import yaml
from .constants import OVERRIDE_APPEND_KEY, OVERRIDE_OVERWRITE_KEY
from .kernel import Cmdline, AppendAllOptions

logger = logging.getLogger(__name__)


class Overrides:
    """Extra kernel parameters and the keys they replace"""
    def __init__(self, args: "list[str]", options: AppendAllOptions):
        self.args = args
        self.options = options

    def __len__(self) -> int:
        return len(self.args)


def _as_tokens(name: str, data) -> "list[str]":
    if data is None:
        return []

    if isinstance(data, str):
        return data.split()

    if not isinstance(data, list):
        raise ValueError(f"Override property '{name}' must be a string or a list")

    tokens = []
    for item in data:
        if not isinstance(item, (str, int, float)) or isinstance(item, bool):
            raise ValueError(f"Invalid entry in override property '{name}': {item!r}")
        tokens.extend(str(item).split())

    return tokens


def parse_overrides(document: str) -> Overrides:
    """Parses a kernel parameter override yaml document"""
    data = yaml.safe_load(document)
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValueError("Override document must be a mapping")

    unknown = [key for key in data if key not in (OVERRIDE_APPEND_KEY, OVERRIDE_OVERWRITE_KEY)]
    if unknown:
        raise ValueError(f"Unknown override properties: {', '.join(map(str, unknown))}")

    args = _as_tokens(OVERRIDE_APPEND_KEY, data.get(OVERRIDE_APPEND_KEY))
    overwrite = _as_tokens(OVERRIDE_OVERWRITE_KEY, data.get(OVERRIDE_OVERWRITE_KEY))

    return Overrides(args, AppendAllOptions(overwrite))


def apply_overrides(cmdline: Cmdline, overrides: "Overrides | str",
                    extra_options: "typing.Optional[AppendAllOptions]" = None) -> Cmdline:
    """merges overrides into cmdline and returns it"""
    if isinstance(overrides, str):
        overrides = parse_overrides(overrides)

    options = overrides.options
    if extra_options is not None:
        options = options.merge(extra_options)

    logger.info(f"Applying {len(overrides)} kernel parameter overrides")
    cmdline.append_all(overrides.args, options)
    return cmdline
