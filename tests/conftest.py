# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import pytest

from acorn.api.executor import APIQueryExecutor
from acorn.core.models import APIQuery

ASSETS_DIR = Path(__file__).parent / "assets"


class RecordingExecutor(APIQueryExecutor):
    """Executor that records every query instead of sending it."""

    def __init__(self, response: Any = None):
        self.response = response if response is not None else {"ok": True}
        self.calls: list[tuple[APIQuery, dict]] = []

    async def execute_query(
        self,
        query: APIQuery,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        self.calls.append((query, dict(variables or {})))
        if isinstance(self.response, str):
            return self.response
        return json.dumps(self.response)


@pytest.fixture
def load_asset() -> Callable[[str], str]:
    """Read a file from tests/assets."""
    def _load(name: str) -> str:
        return (ASSETS_DIR / name).read_text()
    return _load


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    return RecordingExecutor()
