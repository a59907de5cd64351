from __future__ import annotations

import os
from datetime import timedelta

from hypothesis import HealthCheck, Phase, settings

_ALL_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink)

# Table rebuilds make single examples slow, so deadlines stay loose everywhere.
_PROFILES = {
    "default": dict(
        deadline=timedelta(milliseconds=1000),
        derandomize=True,
        print_blob=True,
    ),
    "dev": dict(
        max_examples=25,
        deadline=timedelta(milliseconds=500),
        suppress_health_check=[HealthCheck.too_slow],
        phases=(Phase.explicit, Phase.reuse, Phase.generate),
    ),
    "ci": dict(
        deadline=None,
        derandomize=True,
        print_blob=True,
        suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
        phases=_ALL_PHASES,
    ),
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, **_options)

default_profile = os.getenv("PHONEBOOK_HYPOTHESIS_PROFILE") or os.getenv("HYPOTHESIS_PROFILE", "default")
if default_profile not in _PROFILES:
    default_profile = "default"
settings.load_profile(default_profile)

__all__ = ["default_profile"]
