"""Credential store

Flat JSON key-value file per application, compatible with configstore's
layout so an existing token keeps working.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pronto.constants import SECRET_FILE_PERMISSIONS
from pronto.exceptions import CredentialStoreError


class ConfigStore:
    """Persist values across runs in a single JSON object"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        """Load the whole store; a missing file is an empty store"""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CredentialStoreError(
                f"Could not read config file {self.path}", context=str(e)
            )
        if not isinstance(data, dict):
            raise CredentialStoreError(
                f"Could not read config file {self.path}",
                context="Expected a JSON object",
            )
        return data

    def _save(self, data: Dict[str, Any]):
        """Write the whole store, readable by the owner only"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Created owner-only so the token is never readable by others
            fd = os.open(
                self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SECRET_FILE_PERMISSIONS
            )
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            # An existing file keeps its old mode on open
            os.chmod(self.path, SECRET_FILE_PERMISSIONS)
        except OSError as e:
            raise CredentialStoreError(
                f"Could not write config file {self.path}", context=str(e)
            )

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
