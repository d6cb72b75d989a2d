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

"""Artifact identity and on-disk layout.

Records live in the local repository next to the artifacts they describe,
following the usual Maven layout: the group id is split on ``.`` into nested
directories, followed by the artifact id and, optionally, the version.

Example:
    ```python
    from pathlib import Path
    from updateskip.artifacts import ArtifactKey, artifact_dir

    key = ArtifactKey("com.example", "lib", "1.0-SNAPSHOT")
    artifact_dir(Path("/home/me/.m2/repository"), key)
    # PosixPath('/home/me/.m2/repository/com/example/lib')
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArtifactKey:
    """Identity of the metadata being checked.

    Attributes:
        group_id: Dotted group id, e.g. "com.example".
        artifact_id: Artifact id, e.g. "lib".
        version: Version for version-level metadata, "" for artifact-level.
    """

    group_id: str
    artifact_id: str
    version: str = ""

    @property
    def is_complete(self) -> bool:
        """True when both group id and artifact id are non-empty."""
        return bool(self.group_id) and bool(self.artifact_id)

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)


def artifact_dir(repository_root: Path, key: ArtifactKey) -> Path:
    """Directory holding the artifact-level records for ``key``."""
    path = repository_root
    for segment in key.group_id.split("."):
        path = path / segment
    return path / key.artifact_id


def artifact_info_path(repository_root: Path, key: ArtifactKey, file_name: str) -> Path:
    """Path of the daemon-maintained record (always artifact-level)."""
    return artifact_dir(repository_root, key) / file_name


def update_info_path(repository_root: Path, key: ArtifactKey, file_name: str) -> Path:
    """Path of the self-maintained check record.

    Per artifact, or per artifact and version when the key carries a version.
    """
    base = artifact_dir(repository_root, key)
    if key.version:
        base = base / key.version
    return base / file_name
