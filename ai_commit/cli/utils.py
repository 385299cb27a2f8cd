"""CLI Utility Functions"""

import os
import shlex
import subprocess
import sys
import tempfile

from ai_commit.output import print_warning


def get_editor() -> str:
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'
    return editor


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    editor = get_editor()

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        # EDITOR may carry flags, e.g. "code --wait"
        subprocess.run([*shlex.split(editor), tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            print_warning(f"Could not delete temp file {tmp.name}: {e}")
