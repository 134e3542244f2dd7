"""TimeDial: draw and edit daily time ranges on a 24-hour dial."""

from ._build_info import APP_VERSION

__version__ = APP_VERSION
