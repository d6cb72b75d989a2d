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

"""Update-skip decision policy for updateskip.

Modules:

updates : module
    The decision state machine and its record comparison.

Public API:

UpdateSkipPolicy : class
    Per-call skip/no-skip decisions with check-record bookkeeping.
compare_records : function
    Decide from the daemon record and the check record alone.

"""

from .updates import UpdateSkipPolicy, compare_records

__all__ = ["UpdateSkipPolicy", "compare_records"]
