import logging
from dataclasses import dataclass, replace
from typing import Any, TypeVar

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class _ChunkSetting(_DefaultOverride):
    """Setting for parsing list chunks

    strict: if set to True, throws error on duplicate child tags,
        otherwise log warning and keep the later chunk

    logger: where parse and mutation events are reported
    """

    strict: bool = False
    logger: logging.Logger = logging.root


preset = _ChunkSetting()
