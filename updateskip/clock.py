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

"""Wall-clock helpers.

All timestamps in record files are epoch milliseconds. Components accept a
``clock`` callable so tests can pin "now".
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def now_millis() -> int:
    """Return the current time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000
