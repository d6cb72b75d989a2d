# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Settings for updateskip.

Defaults need no file at all: the configuration root is ``~/.m2`` and both the
daemon recency window and the comparison buffer are one minute. An optional
YAML file can override any of them.

Public API:

- SkipCheckSettings: Frozen settings dataclass
- load_settings: Load settings from defaults plus an optional YAML file
- default_m2_root: The user-scoped configuration root

Example:
    Basic usage:

        from pathlib import Path
        from updateskip.config import load_settings

        settings = load_settings(Path("updateskip.yaml"))
        print(settings.status_path)

"""

from .loader import SkipCheckSettings, default_m2_root, load_settings

__all__ = ["SkipCheckSettings", "default_m2_root", "load_settings"]
