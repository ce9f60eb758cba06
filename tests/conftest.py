from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml


FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def load_storage_vectors() -> List[Dict[str, Any]]:
    root = yaml.safe_load((FIXTURES_DIR / "comet_storage_vectors.yaml").read_text(encoding="utf-8"))
    assert root["schema"] == "cometproof/storage-vectors/v1"
    return list(root["vectors"])


@pytest.fixture(scope="session")
def storage_vectors() -> List[Dict[str, Any]]:
    return load_storage_vectors()


@pytest.fixture(scope="session")
def arbitrum_usdc(storage_vectors) -> Dict[str, Any]:
    return storage_vectors[0]
