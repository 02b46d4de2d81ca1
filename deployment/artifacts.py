"""
Compiled contract artifacts

Reads the output of the contract build (Hardhat `artifacts/` or Foundry
`out/`) by contract name. Compilation itself happens outside this
toolkit.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from infrastructure.config import get_config
from infrastructure.errors import NotFoundError, ValidationError

logger = logging.getLogger("Artifacts")


@dataclass
class Artifact:
    """ABI and creation bytecode for one contract"""
    name: str
    abi: List[Dict]
    bytecode: str
    source_name: Optional[str] = None
    path: Optional[Path] = None

    @property
    def is_deployable(self) -> bool:
        return len(self.bytecode) > 2

    @property
    def fully_qualified_name(self) -> str:
        if self.source_name:
            return f"{self.source_name}:{self.name}"
        return self.name


def _normalize_bytecode(raw) -> str:
    # Foundry nests the hex under "object"
    if isinstance(raw, dict):
        raw = raw.get("object", "")
    raw = raw or ""
    return raw if raw.startswith("0x") else f"0x{raw}"


class ArtifactStore:
    """Looks up artifacts by contract name under a build directory."""

    def __init__(self, root: Union[str, Path, None] = None):
        self.root = Path(root or get_config().paths.artifacts_dir)
        self._cache: Dict[str, Artifact] = {}

    def _candidates(self, name: str) -> List[Path]:
        if not self.root.exists():
            return []
        return sorted(
            p for p in self.root.rglob(f"{name}.json")
            if "build-info" not in p.parts
        )

    def get(self, name: str) -> Artifact:
        if name in self._cache:
            return self._cache[name]

        candidates = self._candidates(name)
        if not candidates:
            raise NotFoundError("Artifact", f"{name} under {self.root}")
        if len(candidates) > 1:
            logger.warning(f"Multiple artifacts named {name}, using {candidates[0]}")

        path = candidates[0]
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if "abi" not in data:
            raise ValidationError(f"Artifact {path} has no ABI")

        artifact = Artifact(
            name=data.get("contractName", name),
            abi=data["abi"],
            bytecode=_normalize_bytecode(data.get("bytecode")),
            source_name=data.get("sourceName"),
            path=path,
        )
        self._cache[name] = artifact
        return artifact

    def latest_build_info(self) -> Optional[Dict]:
        """Standard JSON input/output of the most recent compilation."""
        build_info_dir = self.root / "build-info"
        json_files = list(build_info_dir.glob("*.json")) if build_info_dir.exists() else []

        if not json_files:
            logger.warning(f"No build-info files under {build_info_dir}")
            return None

        latest = max(json_files, key=lambda p: p.stat().st_mtime)
        logger.info(f"Using build info: {latest.name}")

        with open(latest, "r", encoding="utf-8") as f:
            return json.load(f)


_default_store: Optional[ArtifactStore] = None


def get_artifacts() -> ArtifactStore:
    global _default_store
    if _default_store is None:
        _default_store = ArtifactStore()
    return _default_store
