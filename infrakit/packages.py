"""
packages.py: the fixed catalog of hardware packages a server can be deployed with
"""
from typing import Dict, Mapping, Union

from .errors import ValidationError
from .models import SizingTier

SMALL = SizingTier(name="small", cpu_count=2, memory_mb=8096, app_disk_gb=10)
MEDIUM = SizingTier(name="medium", cpu_count=4, memory_mb=16384, app_disk_gb=20)
LARGE = SizingTier(name="large", cpu_count=8, memory_mb=32768, app_disk_gb=40)

PACKAGES: Dict[str, SizingTier] = {
    SMALL.name: SMALL,
    MEDIUM.name: MEDIUM,
    LARGE.name: LARGE,
}


def select_package(small: Union[bool, Mapping[str, bool]] = False, medium: bool = False,
                   large: bool = False) -> SizingTier:
    """
    select_package: returns the package for the single requested size flag
    :param small: Small flag, or a mapping of package name to flag
    :raises ValidationError: when no flag or more than one flag is set
    """
    if isinstance(small, Mapping):
        flags = small
        small, medium, large = (bool(flags.get(name)) for name in ("small", "medium", "large"))

    requested = [
        name for name, flag in (("small", small), ("medium", medium), ("large", large))
        if flag
    ]
    if not requested:
        raise ValidationError(
            "--small, --medium, or --large flags must be set. "
            "Only one flag can be specified at a time"
        )
    if len(requested) > 1:
        raise ValidationError(
            f"only one package size can be specified (got: {', '.join(requested)})"
        )
    return PACKAGES[requested[0]]
