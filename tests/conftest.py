"""Shared fixtures: a stub ``pcli2`` executable and runners pointing at it."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

import pytest

from pcli2_mcp.runtime.process.models import ProcessConfig
from pcli2_mcp.runtime.process.runner import ProcessRunner

if TYPE_CHECKING:
    from pathlib import Path

MOCK_PCLI2 = r"""#!/bin/sh
if [ "$1" = "--version" ]; then
  echo "pcli2 9.9.9"
  exit 0
fi
if [ "$1" = "tenant" ] && [ "$2" = "list" ]; then
  echo "tenant list ok"
  exit 0
fi
if [ "$1" = "asset" ] && [ "$2" = "thumbnail" ]; then
  out=""
  while [ $# -gt 0 ]; do
    if [ "$1" = "--file" ]; then
      out="$2"
    fi
    shift
  done
  printf '\211PNG\r\n\032\nfake-image-data' > "$out"
  exit 0
fi
echo "unknown args" >&2
exit 1
"""


@pytest.fixture
def mock_pcli2(tmp_path: Path) -> Path:
    """A stub pcli2 that knows ``--version``, ``tenant list`` and ``asset thumbnail``."""
    script = tmp_path / "bin" / "pcli2"
    script.parent.mkdir()
    script.write_text(MOCK_PCLI2)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def mock_runner(mock_pcli2: Path) -> ProcessRunner:
    return ProcessRunner(ProcessConfig(executable=str(mock_pcli2)))
