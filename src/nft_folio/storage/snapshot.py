"""JSON snapshot of the aggregated collections"""

import json
from pathlib import Path
from typing import Dict, Mapping

from loguru import logger
from pydantic import TypeAdapter

from ..models import CollectionGroup

_grouped_adapter = TypeAdapter(Dict[str, CollectionGroup])


class SnapshotStore:
    """Read and write the pretty-printed UTF-8 snapshot file"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Dict[str, CollectionGroup]:
        """Load the snapshot; raises if the file is missing or invalid"""
        logger.info(f"Reading NFT data from {self.path}")
        return _grouped_adapter.validate_json(self.path.read_bytes())

    def write(self, grouped: Mapping[str, CollectionGroup]) -> Path:
        """Serialize ``grouped`` and return the written path"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {slug: group.model_dump(mode="json") for slug, group in grouped.items()}
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Wrote {len(data)} collections to {self.path}")
        return self.path
