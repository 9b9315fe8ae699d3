from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from monkey.config import get_prelude_root

log = logging.getLogger(__name__)

PRELUDE_SUFFIX = '.monkey'


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def resolve_prelude(root: Path | None = None) -> list[Path]:
    """Prelude files under `root`: core first, then the rest by name."""
    root = root if root is not None else get_prelude_root()
    if not root.is_dir():
        raise FileNotFoundError(f"Prelude directory {root} does not exist")
    files = sorted(root.glob(f'*{PRELUDE_SUFFIX}'), key=lambda p: (p.stem != 'core', p.name))
    if not files:
        raise FileNotFoundError(f"No {PRELUDE_SUFFIX} files in {root} (MONKEY_PRELUDE_PATH)")
    return files


def load_prelude(itp: _HasEvalPrelude, root: Path | None = None) -> None:
    for path in resolve_prelude(root):
        log.debug("loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding='utf-8'))
