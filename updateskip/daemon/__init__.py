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

"""Daemon status for updateskip.

Public API:

- DaemonStatus: Success flag, timestamp and derived recency
- DaemonHealth: Healthy / degraded / absent classification
- INVALID: Sentinel used whenever the status file cannot be trusted
- load_daemon_status: Read and classify the status file
- DaemonStatusLoader: Initialize-once wrapper around load_daemon_status

"""

from .status import (
    INVALID,
    DaemonHealth,
    DaemonStatus,
    DaemonStatusLoader,
    evaluate_status,
    load_daemon_status,
)

__all__ = [
    "INVALID",
    "DaemonHealth",
    "DaemonStatus",
    "DaemonStatusLoader",
    "evaluate_status",
    "load_daemon_status",
]
