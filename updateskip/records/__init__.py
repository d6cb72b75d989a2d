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

"""Freshness record persistence for updateskip.

Public API:

- LoadStatus: Distinguishable outcomes of loading a record
- LoadResult: Status plus timestamp
- load_record: Read ``lastUpdateTime`` from a record file (never raises)
- store_record: Atomically replace a record file
- parse_properties / format_properties: The record text format

Example:
    Basic usage:

        from pathlib import Path
        from updateskip.records import load_record, store_record

        store_record(Path("mercedes.updateInfo"), 1700000000000)
        print(load_record(Path("mercedes.updateInfo")).timestamp)

"""

from .properties import format_properties, parse_properties
from .store import LoadResult, LoadStatus, load_record, store_record

__all__ = [
    "LoadResult",
    "LoadStatus",
    "load_record",
    "store_record",
    "parse_properties",
    "format_properties",
]
