"""
Icon lookup for currencies.

Icons are plain files in one directory, referenced by file name with or
without extension. Custom icons carry their own location (a path or data
URL) and bypass the directory.
"""

import logging
from pathlib import Path

from triarb.config.constants import DEFAULT_ICON_EXTENSION, DEFAULT_ICON_NAME, ICON_EXTENSIONS
from triarb.core.types import Currency, IconResolver


logger = logging.getLogger(__name__)


class DirectoryIconResolver:
    """
    Resolves icon references against files in a directory.

    ``"DivineOrb"`` and ``"DivineOrb.png"`` both resolve to
    ``<icon_dir>/DivineOrb.png`` when that file exists.
    """

    __slots__ = ("_icon_dir",)

    def __init__(self, icon_dir: Path | str) -> None:
        self._icon_dir = Path(icon_dir)

    @property
    def icon_dir(self) -> Path:
        return self._icon_dir

    def resolve(self, icon_id: str) -> str | None:
        """
        Find the file for an icon reference.

        Args:
            icon_id: File name, with or without extension.

        Returns:
            Path of the icon file as a string, or None when it is missing
            or the reference tries to leave the icon directory.
        """
        if not icon_id or Path(icon_id).name != icon_id:
            return None

        file_name = icon_id if Path(icon_id).suffix else f"{icon_id}{DEFAULT_ICON_EXTENSION}"
        candidate = self._icon_dir / file_name

        if not candidate.is_file():
            return None
        return str(candidate)

    def available(self) -> list[str]:
        """Icon names (file stems) in the directory, sorted."""
        if not self._icon_dir.is_dir():
            logger.warning(f"Icon directory {self._icon_dir} does not exist")
            return []

        return sorted(
            entry.stem
            for entry in self._icon_dir.iterdir()
            if entry.is_file() and entry.suffix.lower() in ICON_EXTENSIONS
        )


def icon_for(
    currency: Currency,
    resolver: IconResolver,
    fallback: str = DEFAULT_ICON_NAME,
) -> str | None:
    """
    Asset location for a currency's icon.

    Custom icons are returned as stored. Otherwise the currency's icon is
    resolved, then the fallback icon; None when neither exists.
    """
    if currency.is_custom_icon and currency.icon:
        return currency.icon

    return resolver.resolve(currency.icon) or resolver.resolve(fallback)
