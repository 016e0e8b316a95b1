"""Session token persistence for API clients"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class TokenStore(ABC):
    """Where a client keeps its session token between calls"""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Stored token, or None when logged out"""

    @abstractmethod
    def set(self, token: str) -> None:
        """Replace the stored token"""

    @abstractmethod
    def clear(self) -> None:
        """Forget the token"""


class MemoryTokenStore(TokenStore):
    """Token lives as long as the process"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore(TokenStore):
    """
    Token kept in a small JSON file, so a CLI or device session survives
    restarts. The file is written with owner-only permissions.
    """

    def __init__(self, path: Union[str, Path], key: str = "token"):
        self.path = Path(path).expanduser()
        self.key = key

    def get(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Token file unreadable, ignoring", extra={"path": str(self.path)})
            return None
        return data.get(self.key) if isinstance(data, dict) else None

    def set(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps({self.key: token}), encoding="utf-8")
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
