"""
Environment variable helpers for locating the interactive editor.
"""

import logging
import os
import shlex
from typing import List, Optional

from tasklog.core.exceptions import EditorUnavailable

logger = logging.getLogger(__name__)


def resolve_editor(configured: Optional[str] = None) -> List[str]:
    """Resolve the editor command line.

    $EDITOR wins over the configuration. A variable that is set but empty
    counts as "no editor" rather than falling through.

    Args:
        configured: ``interactive_editor`` value from the configuration.

    Returns:
        Editor command split into argv words (e.g. ["code", "--wait"]).

    Raises:
        EditorUnavailable: If no usable editor is defined.
    """
    env_editor = os.environ.get("EDITOR")
    if env_editor is not None:
        source, editor = "$EDITOR", env_editor
    elif configured is not None:
        source, editor = "configuration", configured
    else:
        logger.error("Cannot find a suitable interactive editor")
        raise EditorUnavailable()

    argv = shlex.split(editor)
    if not argv:
        raise EditorUnavailable()

    logger.debug(f"Editing via {source} ({editor})")
    return argv
